"""Critical maintenance escalation.

A second daily sweep for components that have slipped into the "critical"
(6-12 months overdue) or "legal" (a year or more) risk band. Every such
component triggers an urgent email on every run until it is maintained or
deactivated. Owners who switched off email notifications are skipped.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Protocol, Union
from uuid import UUID

from starlette.concurrency import run_in_threadpool

from immowaechter.core.constants import ESCALATION_RISK_LEVELS
from immowaechter.core.structured_logging import build_log_context, mask_email
from immowaechter.schemas.escalation import (
    EscalationNotification,
    EscalationRecord,
    EscalationSummary,
)
from immowaechter.services.maintenance_email_service import (
    DEFAULT_PROPERTY_NAME,
    DEFAULT_USER_NAME,
    CriticalMaintenanceData,
    render_critical_html,
    render_critical_subject,
)
from immowaechter.services.maintenance_record_service import RecordFetchError
from immowaechter.services.notification_sweep_service import DeliveryFailure, Skip, SkipReason
from immowaechter.services.resend_email_service import EmailTransport
from immowaechter.services.risk_score_service import component_risk_level

logger = logging.getLogger(__name__)

NO_ESCALATIONS_MESSAGE = "No critical maintenances found"
ESCALATION_COMPLETED_MESSAGE = "Critical maintenance check completed"


class CriticalComponentSupplier(Protocol):
    def fetch_critical(self, today: date) -> list[EscalationRecord]:
        """Active components far enough overdue to escalate."""


@dataclass(frozen=True)
class PreparedEscalation:
    record: EscalationRecord
    data: CriticalMaintenanceData
    subject: str
    html: str

    def to_notification(self) -> EscalationNotification:
        return EscalationNotification(
            component_id=self.record.component_id,
            user_id=self.record.owner.id,
            user_email=self.record.owner.email,
            component_name=self.data.component_name,
            property_name=self.data.property_name,
            days_overdue=self.data.days_overdue,
            risk_level=self.data.risk_level,
        )


def evaluate_escalation(
    record: EscalationRecord,
    today: date,
    *,
    app_url: str,
) -> PreparedEscalation | Skip:
    level, days_overdue = component_risk_level(record.next_maintenance, today)
    if level not in ESCALATION_RISK_LEVELS:
        return Skip(record.component_id, SkipReason.NOT_CRITICAL)
    if record.owner is None:
        return Skip(record.component_id, SkipReason.OWNER_NOT_FOUND)
    if not record.owner.email_notifications:
        return Skip(record.component_id, SkipReason.EMAIL_NOTIFICATIONS_DISABLED)

    data = CriticalMaintenanceData(
        user_name=record.owner.full_name or DEFAULT_USER_NAME,
        property_name=record.property_name or DEFAULT_PROPERTY_NAME,
        component_name=record.component_name,
        days_overdue=days_overdue,
        risk_level=level,
        details_url=f"{app_url.rstrip('/')}/properties/{record.property_id}",
    )
    return PreparedEscalation(
        record=record,
        data=data,
        subject=render_critical_subject(data),
        html=render_critical_html(data),
    )


class CriticalMaintenanceNotifier:
    """Runs escalation sweeps against injected supplier and transport."""

    def __init__(
        self,
        supplier: CriticalComponentSupplier,
        transport: EmailTransport,
        *,
        from_email: str,
        app_url: str,
    ):
        self.supplier = supplier
        self.transport = transport
        self.from_email = from_email
        self.app_url = app_url

    async def process_record(
        self, record: EscalationRecord, today: date
    ) -> Union[EscalationNotification, Skip, DeliveryFailure]:
        outcome = evaluate_escalation(record, today, app_url=self.app_url)
        if isinstance(outcome, Skip):
            return outcome

        result = await self.transport.send(
            from_email=self.from_email,
            to=record.owner.email,
            subject=outcome.subject,
            html=outcome.html,
        )
        if not result.success:
            return DeliveryFailure(recipient=record.owner.email, error=result.error or "Unknown error")
        return outcome.to_notification()

    async def run(self, today: date) -> EscalationSummary:
        """
        Execute one escalation sweep for ``today``.

        Raises:
            RecordFetchError: candidate query failed; nothing was processed.
        """
        run_id = uuid.uuid4().hex[:8]

        try:
            records = await run_in_threadpool(self.supplier.fetch_critical, today)
        except RecordFetchError:
            raise
        except Exception as exc:
            raise RecordFetchError(str(exc)) from exc

        logger.info("Found %d critical components", len(records))
        if not records:
            return EscalationSummary(message=NO_ESCALATIONS_MESSAGE)

        notifications: list[EscalationNotification] = []
        errors: list[str] = []
        skipped = 0

        for record in records:
            try:
                outcome = await self.process_record(record, today)
            except Exception as e:
                logger.exception(
                    "Error escalating component %s",
                    record.component_id,
                    extra=build_log_context(run_id=run_id, component_id=str(record.component_id)),
                )
                errors.append(f"Component {record.component_id}: {e}")
                continue

            if isinstance(outcome, Skip):
                skipped += 1
                logger.info("Skipping component %s: %s", outcome.component_id, outcome.reason.value)
            elif isinstance(outcome, DeliveryFailure):
                logger.warning(
                    "Failed to send escalation to %s: %s",
                    mask_email(outcome.recipient),
                    outcome.error,
                )
                errors.append(outcome.describe())
            else:
                notifications.append(outcome)

        logger.info(
            "Critical maintenance check finished: %d checked, %d sent, %d skipped, %d errors",
            len(records),
            len(notifications),
            skipped,
            len(errors),
            extra=build_log_context(run_id=run_id, checked=len(records), sent=len(notifications)),
        )
        return EscalationSummary(
            message=ESCALATION_COMPLETED_MESSAGE,
            checked=len(records),
            notifications_sent=len(notifications),
            skipped=skipped,
            notifications=notifications,
            errors=errors or None,
        )
