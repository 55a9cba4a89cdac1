"""Auth service — credential checks and account provisioning."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from sapients.core.exceptions import ResourceConflictError, ValidationError
from sapients.core.security import hash_password, verify_password, dummy_password_hash
from sapients.models.role import Role
from sapients.models.user import User
from sapients.services.session_store import storage_errors

logger = logging.getLogger("sapients.auth")

# bcrypt rejects passwords longer than this
MAX_PASSWORD_BYTES = 72


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    """Handles authentication and user provisioning."""

    @staticmethod
    def find_user_by_email(db: Session, email: str) -> Optional[User]:
        with storage_errors(db, "user lookup"):
            return db.query(User).filter(User.email == normalize_email(email)).first()

    @staticmethod
    def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
        """Return the user for valid credentials, else None.

        An unknown email and a wrong password are indistinguishable: both
        return None, and a bcrypt check runs in either case.
        """
        user = AuthService.find_user_by_email(db, email)
        if user is None:
            verify_password(password, dummy_password_hash())
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    @staticmethod
    def hash_password(password: str) -> str:
        return hash_password(password)

    @staticmethod
    def create_user(
        db: Session,
        email: str,
        name: str,
        password: str,
        role: Role = Role.VIEWER,
        avatar_url: Optional[str] = None,
    ) -> User:
        """Provision a new user."""
        if not password or len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be 1 to {MAX_PASSWORD_BYTES} bytes long")
        email = normalize_email(email)
        if AuthService.find_user_by_email(db, email):
            raise ResourceConflictError(f"User with email {email} already exists")

        user = User(
            email=email,
            name=name,
            password_hash=hash_password(password),
            role=Role(role),
            avatar_url=avatar_url,
        )
        with storage_errors(db, "user create"):
            db.add(user)
            db.commit()
            db.refresh(user)
        logger.info("Provisioned user %s with role %s", user.id, user.role.value)
        return user


auth_service = AuthService()
