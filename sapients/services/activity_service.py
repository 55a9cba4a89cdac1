"""Activity service — append-only activity feed entries."""

from dataclasses import dataclass
from typing import Optional

from fastapi import Request
from sqlalchemy.orm import Session

from sapients.models.activity_log import ActivityLog, TargetKind
from sapients.services.session_store import storage_errors


@dataclass(frozen=True)
class ActivityTarget:
    """Link from an activity entry to the item it concerns."""
    kind: TargetKind
    id: str


class ActivityService:
    """Records activity entries."""

    @staticmethod
    def log(
        db: Session,
        actor_id: Optional[str],
        action: str,
        target: Optional[ActivityTarget] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> ActivityLog:
        """Write a single activity record.

        Args:
            action: e.g. "user.login", "user.logout", "lore.updated"
        """
        entry = ActivityLog(
            actor_id=actor_id,
            action=action,
            target_kind=target.kind if target else None,
            target_id=target.id if target else None,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        with storage_errors(db, "activity log"):
            db.add(entry)
            db.commit()
        return entry

    @staticmethod
    def log_from_request(
        db: Session,
        request: Request,
        actor_id: Optional[str],
        action: str,
        target: Optional[ActivityTarget] = None,
    ) -> ActivityLog:
        """Write an activity record extracting IP and user-agent from the request."""
        ip = request.client.host if request.client else None
        ua = request.headers.get("user-agent", "")[:500]
        return ActivityService.log(
            db=db,
            actor_id=actor_id,
            action=action,
            target=target,
            ip_address=ip,
            user_agent=ua,
        )

    @staticmethod
    def recent(db: Session, limit: int = 20):
        """Most recent entries first."""
        with storage_errors(db, "activity feed"):
            return (
                db.query(ActivityLog)
                .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
                .limit(limit)
                .all()
            )


activity_service = ActivityService()
