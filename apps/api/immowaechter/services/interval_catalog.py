"""Austrian maintenance interval catalog (seed data)."""

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from immowaechter.db.enums import ComponentType
from immowaechter.db.models import MaintenanceInterval

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntervalSeed:
    category: ComponentType
    component: str
    interval_months: int
    is_legal_requirement: bool
    legal_reference: str | None = None
    cost_min: int | None = None
    cost_max: int | None = None


AUSTRIAN_INTERVALS: tuple[IntervalSeed, ...] = (
    IntervalSeed(ComponentType.HEATING, "Gasheizung (Thermenwartung)", 12, True, "Landes-Heizungsanlagengesetz", 120, 250),
    IntervalSeed(ComponentType.HEATING, "Ölheizung", 12, True, "Landes-Heizungsanlagengesetz", 150, 300),
    IntervalSeed(ComponentType.HEATING, "Rauchfang / Kamin", 12, True, "Kehrordnung", 60, 150),
    IntervalSeed(ComponentType.FIRE_SAFETY, "Rauchwarnmelder", 12, True, "OIB Richtlinie 2", 10, 40),
    IntervalSeed(ComponentType.FIRE_SAFETY, "Feuerlöscher", 24, True, "ÖNORM F 1053", 20, 60),
    IntervalSeed(ComponentType.ELECTRICAL, "Elektroanlage (E-Befund)", 60, True, "ÖVE/ÖNORM E 8001", 200, 600),
    IntervalSeed(ComponentType.ELECTRICAL, "Blitzschutzanlage", 36, True, "ÖVE/ÖNORM EN 62305", 250, 500),
    IntervalSeed(ComponentType.ELECTRICAL, "Photovoltaik", 48, False, None, 150, 400),
    IntervalSeed(ComponentType.ELEVATOR, "Aufzug", 12, True, "Hebeanlagen-Betriebsverordnung", 400, 1200),
    IntervalSeed(ComponentType.PLUMBING, "Legionellenprüfung", 12, True, "TWV §5", 150, 400),
    IntervalSeed(ComponentType.PLUMBING, "Rückstauklappe", 6, False, None, 80, 200),
    IntervalSeed(ComponentType.PLUMBING, "Trinkwasserfilter", 6, False, None, 30, 80),
    IntervalSeed(ComponentType.ROOF, "Dachrinne", 12, False, None, 100, 300),
    IntervalSeed(ComponentType.FACADE, "Fassade", 60, False, None, 500, 3000),
)


def seed_intervals(db: Session) -> int:
    """Insert catalog entries that are not present yet. Returns the number added."""
    existing = set(
        db.execute(select(MaintenanceInterval.category, MaintenanceInterval.component)).all()
    )

    added = 0
    for seed in AUSTRIAN_INTERVALS:
        if (seed.category.value, seed.component) in existing:
            continue
        db.add(
            MaintenanceInterval(
                category=seed.category.value,
                component=seed.component,
                interval_months=seed.interval_months,
                is_legal_requirement=seed.is_legal_requirement,
                legal_reference=seed.legal_reference,
                cost_min=Decimal(seed.cost_min) if seed.cost_min is not None else None,
                cost_max=Decimal(seed.cost_max) if seed.cost_max is not None else None,
            )
        )
        added += 1

    db.commit()
    logger.info("Seeded %d maintenance intervals", added)
    return added
