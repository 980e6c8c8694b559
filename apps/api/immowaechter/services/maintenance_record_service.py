"""Maintenance records: sweep candidates, owner lookups and schedule upkeep."""

from __future__ import annotations

import calendar
import logging
from datetime import date, timedelta
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from immowaechter.core.constants import ESCALATION_MIN_DAYS_OVERDUE, NOTIFICATION_LOOKAHEAD_DAYS
from immowaechter.db.models import Component, Profile, Property
from immowaechter.schemas.escalation import EscalationRecord
from immowaechter.schemas.maintenance import MaintenanceRecord, OwnerProfile

logger = logging.getLogger(__name__)


class RecordFetchError(Exception):
    """The candidate query failed; the sweep must not process anything."""


# =============================================================================
# Record Supplier
# =============================================================================


def fetch_due_components(
    db: Session,
    today: date,
    lookahead_days: int = NOTIFICATION_LOOKAHEAD_DAYS,
) -> list[MaintenanceRecord]:
    """
    Active components with a due date on or before ``today + lookahead_days``.

    Components without a due date are never returned. Overdue components are
    included regardless of how far past due they are.
    """
    horizon = today + timedelta(days=lookahead_days)
    stmt = (
        select(Component)
        .options(
            joinedload(Component.owning_property),
            joinedload(Component.interval),
        )
        .where(
            Component.is_active.is_(True),
            Component.next_maintenance.is_not(None),
            Component.next_maintenance <= horizon,
        )
    )
    try:
        components = db.execute(stmt).scalars().all()
    except SQLAlchemyError as exc:
        raise RecordFetchError(str(exc)) from exc

    return [MaintenanceRecord.model_validate(component) for component in components]


def get_owner_profile(db: Session, owner_id: UUID) -> OwnerProfile | None:
    profile = db.get(Profile, owner_id)
    if profile is None or not profile.email:
        return None
    return OwnerProfile.model_validate(profile)


class SqlMaintenanceRecordSupplier:
    """Record Supplier backed by the application database."""

    def __init__(self, db: Session, lookahead_days: int = NOTIFICATION_LOOKAHEAD_DAYS):
        self.db = db
        self.lookahead_days = lookahead_days

    def fetch_due(self, today: date) -> list[MaintenanceRecord]:
        return fetch_due_components(self.db, today, self.lookahead_days)

    def get_owner(self, owner_id: UUID) -> OwnerProfile | None:
        return get_owner_profile(self.db, owner_id)


def fetch_escalation_candidates(db: Session, today: date) -> list[EscalationRecord]:
    """
    Active components at least ESCALATION_MIN_DAYS_OVERDUE days past due,
    with their property and owner loaded.
    """
    cutoff = today - timedelta(days=ESCALATION_MIN_DAYS_OVERDUE)
    stmt = (
        select(Component)
        .options(
            joinedload(Component.owning_property).joinedload(Property.owner),
            joinedload(Component.interval),
        )
        .where(
            Component.is_active.is_(True),
            Component.next_maintenance.is_not(None),
            Component.next_maintenance <= cutoff,
        )
    )
    try:
        components = db.execute(stmt).scalars().all()
    except SQLAlchemyError as exc:
        raise RecordFetchError(str(exc)) from exc

    records = []
    for component in components:
        prop = component.owning_property
        owner = prop.owner if prop else None
        records.append(
            EscalationRecord(
                component_id=component.id,
                component_name=component.display_name or "Wartung",
                property_id=component.property_id,
                property_name=prop.name if prop else None,
                next_maintenance=component.next_maintenance,
                owner=OwnerProfile.model_validate(owner) if owner and owner.email else None,
            )
        )
    return records


class SqlCriticalComponentSupplier:
    """Escalation candidates backed by the application database."""

    def __init__(self, db: Session):
        self.db = db

    def fetch_critical(self, today: date) -> list[EscalationRecord]:
        return fetch_escalation_candidates(self.db, today)


# =============================================================================
# Schedule upkeep
# =============================================================================


def add_months(start: date, months: int) -> date:
    """Calendar-month addition; the day is clamped to the target month's end."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def compute_next_maintenance(last_maintenance: date | None, interval_months: int) -> date | None:
    if last_maintenance is None:
        return None
    return add_months(last_maintenance, interval_months)


def record_maintenance(db: Session, component: Component, performed_on: date) -> Component:
    """Store a performed maintenance and roll the due date forward."""
    component.last_maintenance = performed_on
    component.next_maintenance = compute_next_maintenance(
        performed_on, component.interval.interval_months
    )
    db.commit()
    db.refresh(component)

    logger.info(
        "Recorded maintenance for component %s, next due %s",
        component.id,
        component.next_maintenance,
    )
    return component


def deactivate_component(db: Session, component: Component) -> Component:
    """Stop tracking a component without deleting its history."""
    component.is_active = False
    db.commit()
    logger.info("Deactivated component %s", component.id)
    return component


def get_component(db: Session, component_id: UUID) -> Component | None:
    return db.get(Component, component_id)
