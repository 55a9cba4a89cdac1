"""Auth API router — login, logout, me."""

import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from sapients.core.exceptions import bad_request, unauthorized
from sapients.core.guards import require_user
from sapients.db.session import get_db
from sapients.schemas.schemas import (
    LoginRequest, LoginResponse, SessionUser, SuccessResponse,
)
from sapients.services.activity_service import activity_service
from sapients.services.auth_service import auth_service
from sapients.services.session_service import session_service

logger = logging.getLogger("sapients.auth")

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    """Check credentials, open a session and set the session cookie."""
    if not body.email or not body.password:
        raise bad_request("Email and password are required")

    user = auth_service.authenticate_user(db, body.email, body.password)
    if user is None:
        logger.info("Failed login attempt")
        raise unauthorized("Invalid email or password")

    token = session_service.create_session(db, user)
    session_service.set_session_cookie(response, token)
    activity_service.log_from_request(db, request, actor_id=user.id, action="user.login")
    logger.info("User %s logged in", user.id)

    return LoginResponse(user=SessionUser.model_validate(user))


@router.post("/logout", response_model=SuccessResponse)
async def logout(
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    """End the current session. Safe to call repeatedly."""
    user = session_service.get_current_user(db, request)
    session_service.destroy_session(db, request, response)
    if user is not None:
        activity_service.log_from_request(db, request, actor_id=user.id, action="user.logout")
        logger.info("User %s logged out", user.id)
    return SuccessResponse()


@router.get("/me", response_model=SessionUser)
async def get_me(user: SessionUser = Depends(require_user)):
    """Get the current user's profile."""
    return user
