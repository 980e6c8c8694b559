"""FastAPI dependencies for database access, cron auth and the sweep notifiers."""

from datetime import date, datetime
from typing import Generator
from zoneinfo import ZoneInfo

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from immowaechter.core.config import settings
from immowaechter.core.security import extract_bearer_token, verify_secret
from immowaechter.db.session import SessionLocal
from immowaechter.services.escalation_service import CriticalMaintenanceNotifier
from immowaechter.services.maintenance_record_service import (
    SqlCriticalComponentSupplier,
    SqlMaintenanceRecordSupplier,
)
from immowaechter.services.notification_sweep_service import MaintenanceNotifier
from immowaechter.services.resend_email_service import ResendEmailTransport


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a database session and ensures it's closed after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_today() -> date:
    """Current calendar date in the configured (Austrian) timezone."""
    return datetime.now(ZoneInfo(settings.TIMEZONE)).date()


def verify_cron_secret(authorization: str | None = Header(default=None)) -> None:
    """
    Require ``Authorization: Bearer <CRON_SECRET>``.

    An unset CRON_SECRET rejects every request.

    Raises:
        HTTPException 401: missing, malformed or mismatched secret
    """
    token = extract_bearer_token(authorization)
    if not verify_secret(token, settings.CRON_SECRET):
        raise HTTPException(status_code=401, detail="Unauthorized")


def build_maintenance_notifier(db: Session) -> MaintenanceNotifier:
    """Sweep dispatcher with database supplier and Resend transport."""
    return MaintenanceNotifier(
        SqlMaintenanceRecordSupplier(db, lookahead_days=settings.NOTIFICATION_LOOKAHEAD_DAYS),
        ResendEmailTransport(settings.RESEND_API_KEY),
        from_email=settings.EMAIL_FROM,
        app_url=settings.APP_URL,
        lookahead_days=settings.NOTIFICATION_LOOKAHEAD_DAYS,
    )


def get_maintenance_notifier(db: Session = Depends(get_db)) -> MaintenanceNotifier:
    return build_maintenance_notifier(db)


def build_critical_notifier(db: Session) -> CriticalMaintenanceNotifier:
    """Escalation dispatcher with database supplier and Resend transport."""
    return CriticalMaintenanceNotifier(
        SqlCriticalComponentSupplier(db),
        ResendEmailTransport(settings.RESEND_API_KEY),
        from_email=settings.EMAIL_FROM,
        app_url=settings.APP_URL,
    )


def get_critical_notifier(db: Session = Depends(get_db)) -> CriticalMaintenanceNotifier:
    return build_critical_notifier(db)
