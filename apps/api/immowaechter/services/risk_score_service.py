"""Property risk score and per-component risk bands.

The property score is an additive point model:

- each active component contributes the weight of its type,
- overdue components add 2 points per day overdue (max 30 per component),
- components last serviced more than a year ago add a flat staleness penalty,

and the total is clamped to 0-100 before it is mapped to low/medium/high/critical.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Iterable
from uuid import UUID

from sqlalchemy.orm import Session

from immowaechter.core.constants import (
    COMPONENT_RISK_BANDS,
    COMPONENT_RISK_DISPLAY,
    COMPONENT_RISK_FALLBACK,
    COMPONENT_TYPE_WEIGHTS,
    CRITICAL_COMPONENT_TYPES,
    DEFAULT_COMPONENT_WEIGHT,
    OVERDUE_PENALTY_CAP,
    OVERDUE_PENALTY_PER_DAY,
    RISK_LEVEL_THRESHOLDS,
    RISK_SCORE_MAX,
    RISK_SCORE_MIN,
    STALE_MAINTENANCE_DAYS,
    STALE_MAINTENANCE_PENALTY,
)
from immowaechter.db.enums import ComponentType, PropertyRiskLevel
from immowaechter.db.models import Component
from immowaechter.schemas.risk import (
    ComponentRiskBand,
    ComponentRiskData,
    ComponentRiskInfo,
    DamageRange,
    PropertyRiskScore,
    RiskConsequences,
)
from immowaechter.services import property_service, risk_consequence_catalog

# German catalog labels → component type (substring match, first hit wins)
_LABEL_KEYWORDS: tuple[tuple[str, ComponentType], ...] = (
    ("heiz", ComponentType.HEATING),
    ("therme", ComponentType.HEATING),
    ("kessel", ComponentType.HEATING),
    ("kamin", ComponentType.HEATING),
    ("rauch", ComponentType.FIRE_SAFETY),
    ("feuer", ComponentType.FIRE_SAFETY),
    ("brand", ComponentType.FIRE_SAFETY),
    ("aufzug", ComponentType.ELEVATOR),
    ("lift", ComponentType.ELEVATOR),
    ("fahrstuhl", ComponentType.ELEVATOR),
    ("elektr", ComponentType.ELECTRICAL),
    ("fi-schalter", ComponentType.ELECTRICAL),
    ("blitzschutz", ComponentType.ELECTRICAL),
    ("photovoltaik", ComponentType.ELECTRICAL),
    ("wasser", ComponentType.PLUMBING),
    ("legionell", ComponentType.PLUMBING),
    ("rückstau", ComponentType.PLUMBING),
    ("dach", ComponentType.ROOF),
    ("fassade", ComponentType.FACADE),
    ("keller", ComponentType.BASEMENT),
    ("garten", ComponentType.GARDEN),
    ("garage", ComponentType.PARKING),
    ("parkplatz", ComponentType.PARKING),
    ("alarm", ComponentType.SECURITY),
    ("schließ", ComponentType.SECURITY),
)


def classify_component_type(category: str | None, label: str | None = None) -> str:
    """Map an interval category (or its German label) onto a weight-table key."""
    normalized = (category or "").strip().lower()
    if normalized in COMPONENT_TYPE_WEIGHTS:
        return normalized

    for text in (normalized, (label or "").strip().lower()):
        if not text:
            continue
        for keyword, component_type in _LABEL_KEYWORDS:
            if keyword in text:
                return component_type.value
    return ComponentType.OTHER.value


def component_weight(component_type: str) -> int:
    return COMPONENT_TYPE_WEIGHTS.get(component_type, DEFAULT_COMPONENT_WEIGHT)


def classify_risk_level(score: int) -> str:
    for threshold, level in RISK_LEVEL_THRESHOLDS:
        if score >= threshold:
            return level
    return PropertyRiskLevel.LOW.value


@dataclass(frozen=True)
class ScoredComponent:
    """Inputs the risk model needs from one component."""

    component_type: str
    next_maintenance: date | None
    last_maintenance: date | None
    is_legal_requirement: bool = False
    is_active: bool = True

    @classmethod
    def from_component(cls, component: Component) -> "ScoredComponent":
        interval = component.interval
        return cls(
            component_type=classify_component_type(
                interval.category if interval else None,
                interval.component if interval else component.custom_name,
            ),
            next_maintenance=component.next_maintenance,
            last_maintenance=component.last_maintenance,
            is_legal_requirement=bool(interval and interval.is_legal_requirement),
            is_active=component.is_active,
        )


def _points_for(component: ScoredComponent, today: date) -> tuple[int, bool]:
    """Return (points, is_overdue) for a single component."""
    points = component_weight(component.component_type)

    is_overdue = False
    if component.next_maintenance is not None:
        days_overdue = (today - component.next_maintenance).days
        if days_overdue > 0:
            is_overdue = True
            points += min(days_overdue * OVERDUE_PENALTY_PER_DAY, OVERDUE_PENALTY_CAP)

    if component.last_maintenance is not None:
        if (today - component.last_maintenance).days > STALE_MAINTENANCE_DAYS:
            points += STALE_MAINTENANCE_PENALTY

    return points, is_overdue


def calculate_property_risk(
    components: Iterable[ScoredComponent],
    now: datetime,
) -> PropertyRiskScore:
    """Score a property's components. Read-only over its input."""
    today = now.date()

    score = 0
    critical = 0
    legal = 0
    overdue = 0
    total = 0

    for component in components:
        if not component.is_active:
            continue
        total += 1

        points, is_overdue = _points_for(component, today)
        score += points
        if is_overdue:
            overdue += 1
        if component.component_type in CRITICAL_COMPONENT_TYPES:
            critical += 1
        if component.is_legal_requirement:
            legal += 1

    score = max(RISK_SCORE_MIN, min(score, RISK_SCORE_MAX))

    return PropertyRiskScore(
        score=score,
        max_score=RISK_SCORE_MAX,
        level=classify_risk_level(score),
        critical_components=critical,
        legal_components=legal,
        overdue_maintenances=overdue,
        total_components=total,
        last_updated=now,
    )


def get_property_risk_score(
    db: Session,
    property_id: UUID,
    now: datetime | None = None,
) -> PropertyRiskScore | None:
    """Score a stored property; None when the property does not exist."""
    if property_service.get_property(db, property_id) is None:
        return None

    now = now or datetime.now(timezone.utc)
    components = property_service.get_property_components(db, property_id)
    return calculate_property_risk(
        (ScoredComponent.from_component(c) for c in components),
        now,
    )


# =============================================================================
# Per-component risk band
# =============================================================================


def component_risk_level(next_maintenance: date | None, today: date) -> tuple[str, int]:
    """
    Return (band, days_overdue) for one component.

    days_overdue is negative while the due date is still ahead; components
    without a due date are "safe" with 0 days.
    """
    if next_maintenance is None:
        return "safe", 0

    days_overdue = (today - next_maintenance).days
    for upper_bound, level in COMPONENT_RISK_BANDS:
        if days_overdue < upper_bound:
            return level, days_overdue
    return COMPONENT_RISK_FALLBACK, days_overdue


def get_component_risk(
    db: Session,
    component_id: UUID,
    today: date,
) -> ComponentRiskData | None:
    component = db.get(Component, component_id)
    if component is None:
        return None

    interval = component.interval
    component_type = classify_component_type(
        interval.category if interval else None,
        interval.component if interval else component.custom_name,
    )
    level, days_overdue = component_risk_level(component.next_maintenance, today)
    emoji, label, color = COMPONENT_RISK_DISPLAY[level]
    consequence = risk_consequence_catalog.get_risk_consequence(
        db,
        component_type,
        component.owning_property.country if component.owning_property else None,
    )

    return ComponentRiskData(
        component=ComponentRiskInfo(
            id=component.id,
            name=component.display_name or "Wartung",
            type=component_type,
            weight=component_weight(component_type),
            is_legal_requirement=bool(interval and interval.is_legal_requirement),
            legal_reference=interval.legal_reference if interval else None,
            next_maintenance=component.next_maintenance,
            days_overdue=days_overdue,
        ),
        risk=ComponentRiskBand(
            level=level,
            emoji=emoji,
            label=label,
            color=color,
            message=risk_consequence_catalog.warning_message(consequence, level),
            consequences=RiskConsequences(
                death=consequence.death_risk,
                injury=consequence.injury_risk,
                insurance=consequence.insurance_void,
                criminal=consequence.criminal_liability,
                damage=DamageRange(
                    min=consequence.damage_cost_min or 0,
                    max=consequence.damage_cost_max or 0,
                ),
            ),
            real_case=consequence.real_case,
            statistic=consequence.statistic,
        ),
    )
