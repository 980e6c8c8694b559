"""
Scheduled endpoints (cron).

Protected by ``Authorization: Bearer <CRON_SECRET>``.
Called once a day by the external scheduler (Vercel Cron / GH Actions).
"""
import logging
from datetime import date

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from immowaechter.core.deps import (
    get_critical_notifier,
    get_maintenance_notifier,
    get_today,
    verify_cron_secret,
)
from immowaechter.schemas.escalation import EscalationSummary
from immowaechter.schemas.maintenance import SweepSummary
from immowaechter.services.escalation_service import CriticalMaintenanceNotifier
from immowaechter.services.maintenance_record_service import RecordFetchError
from immowaechter.services.notification_sweep_service import MaintenanceNotifier

logger = logging.getLogger(__name__)

router = APIRouter(tags=["internal"])


@router.get(
    "/api/notifications/check",
    response_model=SweepSummary,
    response_model_exclude_none=True,
    dependencies=[Depends(verify_cron_secret)],
)
@router.get(
    "/internal/scheduled/maintenance-check",
    response_model=SweepSummary,
    response_model_exclude_none=True,
    dependencies=[Depends(verify_cron_secret)],
)
async def check_maintenances(
    notifier: MaintenanceNotifier = Depends(get_maintenance_notifier),
    today: date = Depends(get_today),
):
    """
    Daily maintenance reminder sweep.

    Sends reminders 30/14/7/3/1/0 days before a component is due and every
    7 days once it is overdue. Per-record failures are reported in ``errors``;
    only a failed candidate query returns 500.
    """
    try:
        return await notifier.run(today)
    except RecordFetchError as exc:
        logger.error("Error fetching components for notification check: %s", exc)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "Database query failed",
                "details": str(exc),
            },
        )


@router.get(
    "/api/cron/check-maintenances",
    response_model=EscalationSummary,
    response_model_exclude_none=True,
    dependencies=[Depends(verify_cron_secret)],
)
@router.get(
    "/internal/scheduled/critical-escalation",
    response_model=EscalationSummary,
    response_model_exclude_none=True,
    dependencies=[Depends(verify_cron_secret)],
)
async def escalate_critical_maintenances(
    notifier: CriticalMaintenanceNotifier = Depends(get_critical_notifier),
    today: date = Depends(get_today),
):
    """
    Daily escalation for components in the critical or legal risk band.

    Owners with email notifications switched off are skipped.
    """
    try:
        return await notifier.run(today)
    except RecordFetchError as exc:
        logger.error("Error fetching critical components: %s", exc)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "Failed",
                "details": str(exc),
            },
        )
