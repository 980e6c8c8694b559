"""Consequences of neglected maintenance per component type (seed data + lookup)."""

import logging
from dataclasses import dataclass
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from immowaechter.core.constants import DEFAULT_CONSEQUENCE_COUNTRY, RISK_MESSAGE_UP_TO_DATE
from immowaechter.db.enums import ComponentType
from immowaechter.db.models import RiskConsequence

logger = logging.getLogger(__name__)


class ConsequenceProfile(Protocol):
    """Attributes shared by stored rows and the built-in fallback."""

    component_type: str
    death_risk: bool
    injury_risk: bool
    insurance_void: bool
    criminal_liability: bool
    damage_cost_min: int | None
    damage_cost_max: int | None
    warning_yellow: str
    warning_orange: str
    warning_red: str
    warning_black: str
    real_case: str | None
    statistic: str | None


@dataclass(frozen=True)
class ConsequenceSeed:
    component_type: str
    death_risk: bool
    injury_risk: bool
    insurance_void: bool
    criminal_liability: bool
    damage_cost_min: int | None
    damage_cost_max: int | None
    warning_yellow: str
    warning_orange: str
    warning_red: str
    warning_black: str
    criminal_paragraph: str | None = None
    real_case: str | None = None
    statistic: str | None = None
    country: str = DEFAULT_CONSEQUENCE_COUNTRY


AUSTRIAN_CONSEQUENCES: tuple[ConsequenceSeed, ...] = (
    ConsequenceSeed(
        ComponentType.HEATING.value,
        death_risk=True,
        injury_risk=True,
        insurance_void=True,
        criminal_liability=True,
        damage_cost_min=50000,
        damage_cost_max=500000,
        warning_yellow="Heizungswartung bald fällig. Jetzt Termin beim Installateur vereinbaren.",
        warning_orange="⚠️ Heizungswartung überfällig! CO-Gefahr steigt, bitte schnellstmöglich warten lassen.",
        warning_red="🚨 WARNUNG: Heizung 6+ Monate überfällig! LEBENSGEFAHR durch CO. Versicherung kann Leistung verweigern.",
        warning_black="⚫ KRITISCH: Heizung über ein Jahr nicht gewartet! Grobe Fahrlässigkeit, strafrechtliche Folgen möglich.",
        criminal_paragraph="§ 80 StGB (Fahrlässige Tötung)",
        statistic="500+ CO-Vergiftungen/Jahr in DE/AT, 30+ Todesfälle",
    ),
    ConsequenceSeed(
        ComponentType.FIRE_SAFETY.value,
        death_risk=True,
        injury_risk=True,
        insurance_void=True,
        criminal_liability=True,
        damage_cost_min=20000,
        damage_cost_max=300000,
        warning_yellow="Prüfung der Brandschutzeinrichtung bald fällig.",
        warning_orange="⚠️ Brandschutzprüfung überfällig! Funktion im Ernstfall nicht gesichert.",
        warning_red="🚨 WARNUNG: Brandschutz 6+ Monate ungeprüft! Versicherungsschutz gefährdet.",
        warning_black="⚫ KRITISCH: Brandschutz über ein Jahr ungeprüft! Haftung bei Personenschäden.",
        criminal_paragraph="§ 88 StGB (Fahrlässige Körperverletzung)",
    ),
    ConsequenceSeed(
        ComponentType.ELEVATOR.value,
        death_risk=True,
        injury_risk=True,
        insurance_void=True,
        criminal_liability=True,
        damage_cost_min=10000,
        damage_cost_max=200000,
        warning_yellow="Aufzugsprüfung bald fällig. Prüfstelle rechtzeitig beauftragen.",
        warning_orange="⚠️ Aufzugsprüfung überfällig! Betrieb ohne gültige Prüfung unzulässig.",
        warning_red="🚨 WARNUNG: Aufzug 6+ Monate ungeprüft! Stilllegung und Verwaltungsstrafe drohen.",
        warning_black="⚫ KRITISCH: Aufzug über ein Jahr ungeprüft! Rechtliche Konsequenzen möglich.",
        criminal_paragraph="Hebeanlagen-Betriebsverordnung",
    ),
    ConsequenceSeed(
        ComponentType.ELECTRICAL.value,
        death_risk=True,
        injury_risk=True,
        insurance_void=True,
        criminal_liability=False,
        damage_cost_min=5000,
        damage_cost_max=250000,
        warning_yellow="Elektroprüfung bald fällig. Elektrotechniker beauftragen.",
        warning_orange="⚠️ Elektroprüfung überfällig! Brand- und Stromschlaggefahr.",
        warning_red="🚨 WARNUNG: Elektroanlage 6+ Monate ungeprüft! Versicherungsschutz gefährdet.",
        warning_black="⚫ KRITISCH: Elektroanlage über ein Jahr ungeprüft! Rechtliche Konsequenzen möglich.",
    ),
    ConsequenceSeed(
        ComponentType.PLUMBING.value,
        death_risk=False,
        injury_risk=True,
        insurance_void=True,
        criminal_liability=False,
        damage_cost_min=2000,
        damage_cost_max=80000,
        warning_yellow="Wartung der Wasseranlage bald fällig.",
        warning_orange="⚠️ Wartung der Wasseranlage überfällig! Legionellen- und Rückstaugefahr.",
        warning_red="🚨 WARNUNG: Wasseranlage 6+ Monate nicht gewartet! Wasserschäden nicht versichert.",
        warning_black="⚫ KRITISCH: Wasseranlage über ein Jahr nicht gewartet! Haftung gegenüber Mietern möglich.",
        criminal_paragraph="TWV §5",
    ),
    ConsequenceSeed(
        ComponentType.ROOF.value,
        death_risk=False,
        injury_risk=False,
        insurance_void=True,
        criminal_liability=False,
        damage_cost_min=1000,
        damage_cost_max=30000,
        warning_yellow="Dachwartung bald fällig.",
        warning_orange="⚠️ Dachwartung überfällig! Verstopfte Rinnen führen zu Feuchteschäden.",
        warning_red="🚨 WARNUNG: Dach 6+ Monate nicht gewartet! Versicherung kann Wasserschäden ablehnen.",
        warning_black="⚫ KRITISCH: Dach über ein Jahr nicht gewartet! Folgeschäden an der Bausubstanz.",
    ),
)


def fallback_consequence(component_type: str) -> ConsequenceSeed:
    """Generic consequences for types without a catalog entry."""
    return ConsequenceSeed(
        component_type,
        death_risk=False,
        injury_risk=False,
        insurance_void=True,
        criminal_liability=False,
        damage_cost_min=1000,
        damage_cost_max=50000,
        warning_yellow="Wartung bald fällig. Jetzt Termin vereinbaren.",
        warning_orange="⚠️ Wartung überfällig! Bitte schnellstmöglich durchführen.",
        warning_red="🚨 WARNUNG: Wartung stark überfällig! Versicherungsschutz gefährdet.",
        warning_black="⚫ KRITISCH: Wartung massiv überfällig! Rechtliche Konsequenzen möglich.",
    )


def warning_message(consequence: ConsequenceProfile, level: str) -> str:
    """Warning text for a component risk band."""
    messages = {
        "warning": consequence.warning_yellow,
        "danger": consequence.warning_orange,
        "critical": consequence.warning_red,
        "legal": consequence.warning_black,
    }
    return messages.get(level, RISK_MESSAGE_UP_TO_DATE)


def get_risk_consequence(
    db: Session,
    component_type: str,
    country: str | None = None,
) -> ConsequenceProfile:
    """
    Consequences for a component type.

    Tries the property's country, then the default catalog, then the
    generic fallback.
    """
    countries = [c for c in (country, DEFAULT_CONSEQUENCE_COUNTRY) if c]
    for candidate in dict.fromkeys(countries):
        row = db.execute(
            select(RiskConsequence).where(
                RiskConsequence.component_type == component_type,
                RiskConsequence.country == candidate,
            )
        ).scalar_one_or_none()
        if row is not None:
            return row
    return fallback_consequence(component_type)


def seed_risk_consequences(db: Session) -> int:
    """Insert catalog entries that are not present yet. Returns the number added."""
    existing = set(
        db.execute(select(RiskConsequence.component_type, RiskConsequence.country)).all()
    )

    added = 0
    for seed in AUSTRIAN_CONSEQUENCES:
        if (seed.component_type, seed.country) in existing:
            continue
        db.add(
            RiskConsequence(
                component_type=seed.component_type,
                country=seed.country,
                death_risk=seed.death_risk,
                injury_risk=seed.injury_risk,
                insurance_void=seed.insurance_void,
                criminal_liability=seed.criminal_liability,
                criminal_paragraph=seed.criminal_paragraph,
                damage_cost_min=seed.damage_cost_min,
                damage_cost_max=seed.damage_cost_max,
                warning_yellow=seed.warning_yellow,
                warning_orange=seed.warning_orange,
                warning_red=seed.warning_red,
                warning_black=seed.warning_black,
                real_case=seed.real_case,
                statistic=seed.statistic,
            )
        )
        added += 1

    db.commit()
    logger.info("Seeded %d risk consequences", added)
    return added
