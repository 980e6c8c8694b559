"""Schemas for property and component risk endpoints."""

from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from immowaechter.core.constants import RISK_SCORE_MAX


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PropertyRiskScore(_CamelModel):
    """Aggregate dashboard indicator for one property."""

    score: int
    max_score: int = RISK_SCORE_MAX
    level: str
    critical_components: int
    legal_components: int
    overdue_maintenances: int
    total_components: int
    last_updated: datetime


class PropertyRiskScoreResponse(_CamelModel):
    success: bool = True
    data: PropertyRiskScore


class ComponentRiskInfo(_CamelModel):
    id: UUID
    name: str
    type: str
    weight: int
    is_legal_requirement: bool
    legal_reference: str | None = None
    next_maintenance: date | None
    days_overdue: int


class DamageRange(_CamelModel):
    min: int = 0
    max: int = 0


class RiskConsequences(_CamelModel):
    death: bool = False
    injury: bool = False
    insurance: bool = False
    criminal: bool = False
    damage: DamageRange = Field(default_factory=DamageRange)


class ComponentRiskBand(_CamelModel):
    """Band, badge and what neglect can lead to."""

    level: str
    emoji: str
    label: str
    color: str
    message: str
    consequences: RiskConsequences
    real_case: str | None = None
    statistic: str | None = None


class ComponentRiskData(_CamelModel):
    component: ComponentRiskInfo
    risk: ComponentRiskBand


class ComponentRiskResponse(_CamelModel):
    success: bool = True
    data: ComponentRiskData
