"""Health checks for the reminder pipeline."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from immowaechter.core.config import settings
from immowaechter.core.deps import get_db

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/notifications")
def notifications_health(db: Session = Depends(get_db)):
    """Report whether reminders can currently be sent (200 healthy, 503 degraded)."""
    try:
        db.execute(text("SELECT 1"))
        database_connected = True
    except SQLAlchemyError:
        database_connected = False

    checks = {
        "resend": {"apiKey": settings.resend_configured},
        "cron": {"secret": bool(settings.CRON_SECRET)},
        "database": {"connected": database_connected},
    }
    healthy = all(value for check in checks.values() for value in check.values())

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "degraded",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": checks,
        },
    )
