"""Schemas for the maintenance reminder sweep."""

from __future__ import annotations

from datetime import date
from typing import Any
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _first_or_none(value: Any) -> Any:
    """Collapse a list-shaped to-one relation to a single object."""
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


# =============================================================================
# Record Supplier boundary
# =============================================================================


class PropertyRef(BaseModel):
    """Owning property as joined onto a sweep record."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str | None = None
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    user_id: UUID


class IntervalRef(BaseModel):
    """Interval definition as joined onto a sweep record."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    component: str
    category: str | None = None
    interval_months: int


class MaintenanceRecord(BaseModel):
    """
    One active component due within the lookahead window.

    Accepts ORM rows (``owning_property``) as well as PostgREST-style dicts
    (``properties`` / ``maintenance_intervals``), where to-one joins may arrive
    as one-element arrays.
    """

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    custom_name: str | None = None
    brand: str | None = None
    model: str | None = None
    last_maintenance: date | None = None
    next_maintenance: date
    property_ref: PropertyRef | None = Field(
        default=None,
        validation_alias=AliasChoices("owning_property", "property", "properties"),
    )
    interval_ref: IntervalRef | None = Field(
        default=None,
        validation_alias=AliasChoices("interval", "maintenance_intervals"),
    )

    @field_validator("property_ref", "interval_ref", mode="before")
    @classmethod
    def _unwrap_to_one(cls, value: Any) -> Any:
        return _first_or_none(value)

    @property
    def display_name(self) -> str:
        if self.custom_name:
            return self.custom_name
        return self.interval_ref.component if self.interval_ref else ""


class OwnerProfile(BaseModel):
    """Contact profile of a property owner."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    full_name: str | None = None
    email_notifications: bool = True


# =============================================================================
# Sweep output
# =============================================================================


class NotificationRecord(BaseModel):
    """A reminder that was successfully handed to the transport."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    component_id: UUID
    user_id: UUID
    user_email: str
    user_name: str
    property_id: UUID
    property_name: str
    property_address: str
    component_name: str
    next_maintenance: date
    days_until: int  # absolute value
    is_overdue: bool


class SweepSummary(BaseModel):
    """Result of one notification sweep (errors omitted when empty)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    message: str
    checked: int = 0
    sent: int = 0
    notifications: list[NotificationRecord] = Field(default_factory=list)
    errors: list[str] | None = None


# =============================================================================
# Component lifecycle
# =============================================================================


class RecordMaintenanceRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    performed_on: date


class ComponentScheduleRead(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID
    name: str
    last_maintenance: date | None
    next_maintenance: date | None
    is_active: bool
