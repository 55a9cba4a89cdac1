"""Celery app and periodic maintenance tasks."""

import logging

from celery import Celery

from sapients.core.config import settings

logger = logging.getLogger("sapients.tasks")

celery_app = Celery(
    "sapients",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_soft_time_limit=60,
    task_time_limit=120,
    beat_schedule={
        "purge-expired-sessions": {
            "task": "purge_expired_sessions",
            "schedule": settings.SESSION_SWEEP_INTERVAL_MINUTES * 60.0,
        },
    },
)


@celery_app.task(name="purge_expired_sessions")
def purge_expired_sessions() -> dict:
    """Delete expired session rows. Readers already reject them; this only reclaims space."""
    from sapients.db.session import SessionLocal
    from sapients.services.session_service import session_service

    db = SessionLocal()
    try:
        deleted = session_service.purge_expired_sessions(db)
        return {"deleted": deleted}
    finally:
        db.close()
