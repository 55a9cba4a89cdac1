"""Server-side login session model."""

from sqlalchemy import Column, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship

from sapients.db.base import Base


class UserSession(Base):
    """Opaque token bound to a user until `expires` (naive UTC).

    A row is valid only while `now < expires`; expired rows may linger until
    the sweep removes them, so readers must always compare against `expires`.
    """
    __tablename__ = "sessions"

    session_token = Column(String(128), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expires = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="sessions", lazy="joined")
