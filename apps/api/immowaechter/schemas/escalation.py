"""Schemas for the critical maintenance escalation sweep."""

from __future__ import annotations

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from immowaechter.schemas.maintenance import OwnerProfile


class EscalationRecord(BaseModel):
    """A component overdue far enough to sit in an escalation band."""

    component_id: UUID
    component_name: str
    property_id: UUID
    property_name: str | None = None
    next_maintenance: date
    owner: OwnerProfile | None = None


class EscalationNotification(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    component_id: UUID
    user_id: UUID
    user_email: str
    component_name: str
    property_name: str
    days_overdue: int
    risk_level: str


class EscalationSummary(BaseModel):
    """Result of one escalation sweep (errors omitted when empty)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    message: str
    checked: int = 0
    notifications_sent: int = 0
    skipped: int = 0
    notifications: list[EscalationNotification] = Field(default_factory=list)
    errors: list[str] | None = None
