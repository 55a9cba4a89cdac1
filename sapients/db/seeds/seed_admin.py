"""Seed the administrator account from settings."""

import logging

from sqlalchemy.orm import Session

from sapients.core.config import settings
from sapients.models.role import Role
from sapients.services.auth_service import auth_service

logger = logging.getLogger("sapients.seeds")


def seed_admin(db: Session) -> bool:
    """Create the admin user if not already present. Returns True if created."""
    if auth_service.find_user_by_email(db, settings.ADMIN_EMAIL):
        logger.info("Admin '%s' already exists, skipping.", settings.ADMIN_EMAIL)
        return False

    auth_service.create_user(
        db,
        email=settings.ADMIN_EMAIL,
        name=settings.ADMIN_NAME,
        password=settings.ADMIN_PASSWORD,
        role=Role.ADMIN,
    )
    logger.info("Created admin: %s", settings.ADMIN_EMAIL)
    return True
