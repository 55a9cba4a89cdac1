"""Access guards: compose session resolution with the permission tables.

`check_*` functions are pure and return an `AccessDecision`. Authentication
is always decided before authorization, so an anonymous caller never reaches
a permission lookup. The `Require*` classes are FastAPI dependencies that
turn a decision into a 401/403 (API routes) or a redirect (page routes)
before the handler body runs.
"""

import enum
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from sapients.core.config import settings
from sapients.core.exceptions import RedirectRequired, forbidden, unauthorized
from sapients.core.permissions import (
    can_delete, can_edit, can_view, verify_delete_password,
)
from sapients.db.session import get_db
from sapients.models.module import Module
from sapients.schemas.schemas import SessionUser
from sapients.services.session_service import session_service


class AccessOutcome(str, enum.Enum):
    ALLOWED = "allowed"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class AccessDecision:
    outcome: AccessOutcome
    user: Optional[SessionUser] = None
    redirect_to: Optional[str] = None
    reason: str = ""

    @property
    def allowed(self) -> bool:
        return self.outcome is AccessOutcome.ALLOWED


def _anonymous() -> AccessDecision:
    return AccessDecision(
        AccessOutcome.UNAUTHENTICATED,
        redirect_to=settings.LOGIN_PATH,
        reason="Not authenticated",
    )


def check_view(user: Optional[SessionUser], module: Module) -> AccessDecision:
    if user is None:
        return _anonymous()
    if not can_view(user.role, module):
        return AccessDecision(
            AccessOutcome.FORBIDDEN, user,
            redirect_to=settings.DEFAULT_LANDING_PATH,
            reason="Access denied",
        )
    return AccessDecision(AccessOutcome.ALLOWED, user)


def check_edit(
    user: Optional[SessionUser], module: Module, fallback: Optional[str] = None,
) -> AccessDecision:
    if user is None:
        return _anonymous()
    if not can_edit(user.role, module):
        return AccessDecision(
            AccessOutcome.FORBIDDEN, user,
            redirect_to=fallback or f"/{Module(module).value}",
            reason="No edit permission",
        )
    return AccessDecision(AccessOutcome.ALLOWED, user)


def check_delete(user: Optional[SessionUser], confirm_password: Optional[str]) -> AccessDecision:
    """Admin role first, then the shared delete secret."""
    if user is None:
        return _anonymous()
    if not can_delete(user.role):
        return AccessDecision(AccessOutcome.FORBIDDEN, user, reason="Only administrators can delete")
    if not verify_delete_password(confirm_password):
        return AccessDecision(AccessOutcome.FORBIDDEN, user, reason="Invalid confirmation password")
    return AccessDecision(AccessOutcome.ALLOWED, user)


def enforce_api(decision: AccessDecision) -> SessionUser:
    """Return the user or raise the matching 401/403."""
    if decision.outcome is AccessOutcome.UNAUTHENTICATED:
        raise unauthorized(decision.reason)
    if decision.outcome is AccessOutcome.FORBIDDEN:
        raise forbidden(decision.reason)
    return decision.user


def enforce_page(decision: AccessDecision) -> SessionUser:
    """Return the user or raise RedirectRequired towards `redirect_to`."""
    if not decision.allowed:
        raise RedirectRequired(decision.redirect_to or settings.LOGIN_PATH)
    return decision.user


async def current_user(
    request: Request, db: Session = Depends(get_db),
) -> Optional[SessionUser]:
    """Resolve the request's session cookie; None for anonymous callers."""
    return session_service.get_current_user(db, request)


async def require_user(
    user: Optional[SessionUser] = Depends(current_user),
) -> SessionUser:
    if user is None:
        raise unauthorized()
    return user


class RequireView:
    """Dependency that checks view access to a module (API context)."""

    def __init__(self, module: Module):
        self.module = Module(module)

    async def __call__(self, user: Optional[SessionUser] = Depends(current_user)) -> SessionUser:
        return enforce_api(check_view(user, self.module))


class RequireEdit:
    """Dependency that checks edit access to a module (API context)."""

    def __init__(self, module: Module):
        self.module = Module(module)

    async def __call__(self, user: Optional[SessionUser] = Depends(current_user)) -> SessionUser:
        return enforce_api(check_edit(user, self.module))


class RequirePageView:
    """Page variant of RequireView: redirects instead of 401/403."""

    def __init__(self, module: Module):
        self.module = Module(module)

    async def __call__(self, user: Optional[SessionUser] = Depends(current_user)) -> SessionUser:
        return enforce_page(check_view(user, self.module))


class RequirePageEdit:
    """Page variant of RequireEdit; denial redirects to `fallback` or the module page."""

    def __init__(self, module: Module, fallback: Optional[str] = None):
        self.module = Module(module)
        self.fallback = fallback

    async def __call__(self, user: Optional[SessionUser] = Depends(current_user)) -> SessionUser:
        return enforce_page(check_edit(user, self.module, self.fallback))


# Convenience dependency factories
def require_view(module: Module) -> RequireView:
    return RequireView(module)


def require_edit(module: Module) -> RequireEdit:
    return RequireEdit(module)


def require_page_view(module: Module) -> RequirePageView:
    return RequirePageView(module)


def require_page_edit(module: Module, fallback: Optional[str] = None) -> RequirePageEdit:
    return RequirePageEdit(module, fallback)
