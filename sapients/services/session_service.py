"""Session service — create, resolve and destroy cookie-backed sessions.

The request, the response and the DB session are always passed in
explicitly; nothing here reads an ambient "current request".
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Request, Response
from sqlalchemy.orm import Session

from sapients.core.config import settings
from sapients.core.security import generate_session_token
from sapients.models.user import User
from sapients.schemas.schemas import SessionInfo, SessionUser
from sapients.services.session_store import session_store, utcnow, as_naive_utc

logger = logging.getLogger("sapients.sessions")


class SessionService:
    """Owns the lifecycle of login sessions."""

    @staticmethod
    def create_session(db: Session, user: User, now: Optional[datetime] = None) -> str:
        """Persist a new session for `user` and return its token."""
        token = generate_session_token()
        issued = as_naive_utc(now) if now else utcnow()
        expires = issued + timedelta(days=settings.SESSION_DURATION_DAYS)
        session_store.create(db, token, user.id, expires)
        logger.debug("Session created for user %s, expires %s", user.id, expires.isoformat())
        return token

    @staticmethod
    def set_session_cookie(response: Response, token: str) -> None:
        response.set_cookie(
            key=settings.SESSION_COOKIE_NAME,
            value=token,
            max_age=settings.session_max_age_seconds,
            path="/",
            secure=settings.is_production,
            httponly=True,
            samesite="lax",
        )

    @staticmethod
    def clear_session_cookie(response: Response) -> None:
        response.delete_cookie(
            key=settings.SESSION_COOKIE_NAME,
            path="/",
            secure=settings.is_production,
            httponly=True,
            samesite="lax",
        )

    @staticmethod
    def read_token(request: Request) -> Optional[str]:
        return request.cookies.get(settings.SESSION_COOKIE_NAME) or None

    @staticmethod
    def resolve_session(
        db: Session, token: Optional[str], now: Optional[datetime] = None,
    ) -> Optional[SessionInfo]:
        """Resolve a token to its session, or None if unknown or expired."""
        if not token:
            return None
        row = session_store.find_unique(db, token)
        if row is None:
            return None
        current = as_naive_utc(now) if now else utcnow()
        if as_naive_utc(row.expires) <= current:
            return None
        return SessionInfo(
            user=SessionUser.model_validate(row.user),
            expires=row.expires,
        )

    @staticmethod
    def get_session(
        db: Session, request: Request, now: Optional[datetime] = None,
    ) -> Optional[SessionInfo]:
        """Session for the cookie on `request`. Anonymous traffic gets None."""
        return SessionService.resolve_session(db, SessionService.read_token(request), now)

    @staticmethod
    def get_current_user(db: Session, request: Request) -> Optional[SessionUser]:
        session = SessionService.get_session(db, request)
        return session.user if session else None

    @staticmethod
    def destroy_session(db: Session, request: Request, response: Response) -> None:
        """Delete the cookie's session if any, and always clear the cookie."""
        token = SessionService.read_token(request)
        if token:
            session_store.delete(db, token)
        SessionService.clear_session_cookie(response)

    @staticmethod
    def purge_expired_sessions(db: Session, now: Optional[datetime] = None) -> int:
        """Remove sessions whose expiry has passed. Returns how many went."""
        count = session_store.delete_expired(db, now or utcnow())
        if count:
            logger.info("Purged %d expired sessions", count)
        return count


session_service = SessionService()
