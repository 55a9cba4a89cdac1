"""Session store — persistence for login sessions."""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session

from sapients.core.exceptions import StorageUnavailableError
from sapients.models.session import UserSession

logger = logging.getLogger("sapients.sessions")


def utcnow() -> datetime:
    """Current instant as naive UTC, matching how `expires` is stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(moment: datetime) -> datetime:
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment


@contextmanager
def storage_errors(db: Session, action: str):
    """Translate connectivity failures into StorageUnavailableError.

    No retry happens here; the error is fatal for the current request.
    """
    try:
        yield
    except (OperationalError, InterfaceError) as exc:
        db.rollback()
        logger.exception("Session store unavailable during %s", action)
        raise StorageUnavailableError("Session storage unavailable") from exc


class SessionStore:
    """Create, find and delete session rows keyed by their token."""

    @staticmethod
    def create(db: Session, token: str, user_id: str, expires: datetime) -> UserSession:
        with storage_errors(db, "create"):
            row = UserSession(session_token=token, user_id=user_id, expires=as_naive_utc(expires))
            db.add(row)
            db.commit()
            return row

    @staticmethod
    def find_unique(db: Session, token: str) -> Optional[UserSession]:
        with storage_errors(db, "lookup"):
            return db.query(UserSession).filter(UserSession.session_token == token).first()

    @staticmethod
    def delete(db: Session, token: str) -> bool:
        """Delete one session. Deleting an absent token is not an error."""
        with storage_errors(db, "delete"):
            deleted = (
                db.query(UserSession)
                .filter(UserSession.session_token == token)
                .delete(synchronize_session=False)
            )
            db.commit()
            return deleted > 0

    @staticmethod
    def delete_expired(db: Session, now: datetime) -> int:
        with storage_errors(db, "purge"):
            deleted = (
                db.query(UserSession)
                .filter(UserSession.expires <= as_naive_utc(now))
                .delete(synchronize_session=False)
            )
            db.commit()
            return deleted


session_store = SessionStore()
