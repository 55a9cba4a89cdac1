"""Activity log model — append-only."""

import enum

from sqlalchemy import Column, Integer, String, DateTime, Enum, ForeignKey, func

from sapients.db.base import Base


class TargetKind(str, enum.Enum):
    entity = "entity"
    concept_art = "concept_art"
    lore = "lore"
    thought = "thought"


class ActivityLog(Base):
    """Activity feed entry.

    This table is APPEND-ONLY. The optional link target is stored as an
    explicit (kind, id) pair, never inferred from free-form metadata.
    """
    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    actor_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    action = Column(String(100), nullable=False, index=True)  # e.g. "user.login"
    target_kind = Column(Enum(TargetKind), nullable=True)
    target_id = Column(String(36), nullable=True)
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(String(500), nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)
