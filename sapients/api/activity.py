"""Activity feed API router."""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from sapients.core.guards import require_view
from sapients.db.session import get_db
from sapients.models.module import Module
from sapients.schemas.schemas import ActivityOut, ActivityTargetOut, SessionUser
from sapients.services.activity_service import activity_service

router = APIRouter(prefix="/activity", tags=["activity"])


@router.get("", response_model=List[ActivityOut])
async def recent_activity(
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    user: SessionUser = Depends(require_view(Module.DASHBOARD)),
):
    """Latest activity entries, newest first."""
    return [
        ActivityOut(
            id=entry.id,
            actor_id=entry.actor_id,
            action=entry.action,
            target=(
                ActivityTargetOut(kind=entry.target_kind, id=entry.target_id)
                if entry.target_kind and entry.target_id else None
            ),
            created_at=entry.created_at,
        )
        for entry in activity_service.recent(db, limit)
    ]
