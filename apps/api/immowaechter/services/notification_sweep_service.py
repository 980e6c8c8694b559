"""Maintenance notification sweep.

One sweep fetches every active component due within the lookahead window,
decides per component whether a reminder goes out today and hands eligible
reminders to the email transport. Records are processed sequentially and
independently: a skipped or failed record never stops the sweep. Only a
failing candidate query aborts the run.

There is no "already sent" ledger. Triggering the sweep twice on a reminder
day sends the reminder twice.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Protocol, Union
from uuid import UUID

from starlette.concurrency import run_in_threadpool

from immowaechter.core.constants import NOTIFICATION_LOOKAHEAD_DAYS
from immowaechter.core.structured_logging import build_log_context, mask_email
from immowaechter.schemas.maintenance import (
    MaintenanceRecord,
    NotificationRecord,
    OwnerProfile,
    SweepSummary,
)
from immowaechter.services.maintenance_email_service import (
    DEFAULT_PROPERTY_NAME,
    DEFAULT_USER_NAME,
    MaintenanceReminderData,
    render_html,
    render_subject,
)
from immowaechter.services.maintenance_record_service import RecordFetchError
from immowaechter.services.property_service import format_address
from immowaechter.services.reminder_schedule import Eligibility, evaluate_eligibility
from immowaechter.services.resend_email_service import EmailTransport

logger = logging.getLogger(__name__)

NO_NOTIFICATIONS_MESSAGE = "No maintenance notifications needed"
COMPLETED_MESSAGE = "Notification check completed"


class MaintenanceRecordSupplier(Protocol):
    def fetch_due(self, today: date) -> list[MaintenanceRecord]:
        """Active components due on or before today + lookahead."""

    def get_owner(self, owner_id: UUID) -> OwnerProfile | None:
        """Contact profile for a property owner, or None."""


# =============================================================================
# Per-record outcomes
# =============================================================================


class SkipReason(str, Enum):
    """Why a sweep record produced no email."""
    MISSING_PROPERTY = "missing_property"
    MISSING_INTERVAL = "missing_interval"
    OWNER_NOT_FOUND = "owner_not_found"
    NOT_DUE_TODAY = "not_due_today"
    NOT_CRITICAL = "not_critical"
    EMAIL_NOTIFICATIONS_DISABLED = "email_notifications_disabled"


@dataclass(frozen=True)
class Skip:
    """Record produced no reminder (data-integrity gap or not a reminder day)."""

    component_id: UUID
    reason: SkipReason
    days_until: int | None = None


@dataclass(frozen=True)
class PreparedReminder:
    """An eligible reminder, rendered and ready for the transport."""

    record: MaintenanceRecord
    owner: OwnerProfile
    eligibility: Eligibility
    data: MaintenanceReminderData
    subject: str
    html: str

    def to_notification(self) -> NotificationRecord:
        return NotificationRecord(
            component_id=self.record.id,
            user_id=self.owner.id,
            user_email=self.owner.email,
            user_name=self.data.user_name,
            property_id=self.record.property_ref.id,
            property_name=self.data.property_name,
            property_address=self.data.property_address,
            component_name=self.data.component_name,
            next_maintenance=self.record.next_maintenance,
            days_until=self.data.days_until,
            is_overdue=self.data.is_overdue,
        )


@dataclass(frozen=True)
class DeliveryFailure:
    recipient: str
    error: str

    def describe(self) -> str:
        return f"{self.recipient}: {self.error}"


RecordOutcome = Union[NotificationRecord, Skip, DeliveryFailure]


def evaluate_record(
    record: MaintenanceRecord,
    owner: OwnerProfile | None,
    today: date,
    *,
    app_url: str,
) -> PreparedReminder | Skip:
    """
    Decide what happens to one sweep record.

    Pure: the owner has already been looked up by the caller.
    """
    if record.property_ref is None:
        return Skip(record.id, SkipReason.MISSING_PROPERTY)
    if record.interval_ref is None:
        return Skip(record.id, SkipReason.MISSING_INTERVAL)
    if owner is None:
        return Skip(record.id, SkipReason.OWNER_NOT_FOUND)

    eligibility = evaluate_eligibility(record.next_maintenance, today)
    if not eligibility.eligible:
        return Skip(record.id, SkipReason.NOT_DUE_TODAY, days_until=eligibility.days_until)

    prop = record.property_ref
    data = MaintenanceReminderData(
        user_name=owner.full_name or DEFAULT_USER_NAME,
        property_name=prop.name or DEFAULT_PROPERTY_NAME,
        property_address=format_address(prop.address, prop.postal_code, prop.city),
        component_name=record.display_name,
        next_maintenance_date=record.next_maintenance.isoformat(),
        days_until=abs(eligibility.days_until),
        is_overdue=eligibility.is_overdue,
    )
    return PreparedReminder(
        record=record,
        owner=owner,
        eligibility=eligibility,
        data=data,
        subject=render_subject(data),
        html=render_html(data, app_url),
    )


# =============================================================================
# Dispatcher
# =============================================================================


class MaintenanceNotifier:
    """Runs notification sweeps against injected supplier and transport."""

    def __init__(
        self,
        supplier: MaintenanceRecordSupplier,
        transport: EmailTransport,
        *,
        from_email: str,
        app_url: str,
        lookahead_days: int = NOTIFICATION_LOOKAHEAD_DAYS,
    ):
        self.supplier = supplier
        self.transport = transport
        self.from_email = from_email
        self.app_url = app_url
        self.lookahead_days = lookahead_days

    async def _lookup_owner(self, record: MaintenanceRecord) -> OwnerProfile | None:
        if record.property_ref is None or record.interval_ref is None:
            return None
        return await run_in_threadpool(self.supplier.get_owner, record.property_ref.user_id)

    async def process_record(self, record: MaintenanceRecord, today: date) -> RecordOutcome:
        owner = await self._lookup_owner(record)
        outcome = evaluate_record(record, owner, today, app_url=self.app_url)
        if isinstance(outcome, Skip):
            return outcome

        result = await self.transport.send(
            from_email=self.from_email,
            to=outcome.owner.email,
            subject=outcome.subject,
            html=outcome.html,
        )
        if not result.success:
            return DeliveryFailure(recipient=outcome.owner.email, error=result.error or "Unknown error")
        return outcome.to_notification()

    async def run(self, today: date) -> SweepSummary:
        """
        Execute one sweep for ``today``.

        Raises:
            RecordFetchError: candidate query failed; nothing was processed.
        """
        run_id = uuid.uuid4().hex[:8]
        logger.info("Starting maintenance notification check for %s", today.isoformat())

        try:
            records = await run_in_threadpool(self.supplier.fetch_due, today)
        except RecordFetchError:
            raise
        except Exception as exc:
            raise RecordFetchError(str(exc)) from exc

        logger.info("Found %d components to check", len(records))
        if not records:
            return SweepSummary(message=NO_NOTIFICATIONS_MESSAGE)

        notifications: list[NotificationRecord] = []
        errors: list[str] = []

        for record in records:
            try:
                outcome = await self.process_record(record, today)
            except Exception as e:
                logger.exception(
                    "Error processing component %s",
                    record.id,
                    extra=build_log_context(run_id=run_id, component_id=str(record.id)),
                )
                errors.append(f"Component {record.id}: {e}")
                continue

            if isinstance(outcome, Skip):
                if outcome.reason == SkipReason.NOT_DUE_TODAY:
                    logger.debug(
                        "No reminder for component %s today (%s days)",
                        outcome.component_id,
                        outcome.days_until,
                    )
                else:
                    logger.info("Skipping component %s: %s", outcome.component_id, outcome.reason.value)
            elif isinstance(outcome, DeliveryFailure):
                logger.warning(
                    "Failed to send reminder to %s: %s",
                    mask_email(outcome.recipient),
                    outcome.error,
                )
                errors.append(outcome.describe())
            else:
                logger.info(
                    "Sent %s reminder to %s for %s",
                    "overdue" if outcome.is_overdue else "upcoming",
                    mask_email(outcome.user_email),
                    outcome.component_name,
                )
                notifications.append(outcome)

        logger.info(
            "Maintenance notification check finished: %d checked, %d sent, %d errors",
            len(records),
            len(notifications),
            len(errors),
            extra=build_log_context(run_id=run_id, checked=len(records), sent=len(notifications)),
        )
        return SweepSummary(
            message=COMPLETED_MESSAGE,
            checked=len(records),
            sent=len(notifications),
            notifications=notifications,
            errors=errors or None,
        )
