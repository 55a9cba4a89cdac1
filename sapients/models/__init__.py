"""Models package — import all models so metadata can discover them."""

from sapients.models.role import Role, ROLE_LEVELS
from sapients.models.module import Module
from sapients.models.user import User
from sapients.models.session import UserSession
from sapients.models.activity_log import ActivityLog, TargetKind

__all__ = [
    "Role", "ROLE_LEVELS", "Module",
    "User", "UserSession",
    "ActivityLog", "TargetKind",
]
