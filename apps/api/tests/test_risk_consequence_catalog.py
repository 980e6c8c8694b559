import pytest

from immowaechter.db.models import RiskConsequence
from immowaechter.services.risk_consequence_catalog import (
    AUSTRIAN_CONSEQUENCES,
    fallback_consequence,
    get_risk_consequence,
    seed_risk_consequences,
    warning_message,
)


def test_seed_risk_consequences_is_idempotent(db):
    assert seed_risk_consequences(db) == len(AUSTRIAN_CONSEQUENCES)
    assert seed_risk_consequences(db) == 0
    assert db.query(RiskConsequence).count() == len(AUSTRIAN_CONSEQUENCES)


def test_lookup_prefers_country_then_default_catalog(db):
    seed_risk_consequences(db)
    db.add(
        RiskConsequence(
            component_type="heating",
            country="DE",
            death_risk=True,
            warning_yellow="DE gelb",
            warning_orange="DE orange",
            warning_red="DE rot",
            warning_black="DE schwarz",
        )
    )
    db.commit()

    assert get_risk_consequence(db, "heating", "DE").warning_yellow == "DE gelb"
    assert get_risk_consequence(db, "heating", "CH").warning_yellow.startswith("Heizungswartung")
    assert get_risk_consequence(db, "heating", None).country == "AT"


def test_lookup_falls_back_for_unknown_types(db):
    consequence = get_risk_consequence(db, "garden", "AT")

    assert consequence == fallback_consequence("garden")
    assert consequence.insurance_void is True
    assert (consequence.damage_cost_min, consequence.damage_cost_max) == (1000, 50000)


@pytest.mark.parametrize(
    "level,expected",
    [
        ("safe", "Wartung aktuell"),
        ("warning", "Wartung bald fällig. Jetzt Termin vereinbaren."),
        ("danger", "⚠️ Wartung überfällig! Bitte schnellstmöglich durchführen."),
        ("critical", "🚨 WARNUNG: Wartung stark überfällig! Versicherungsschutz gefährdet."),
        ("legal", "⚫ KRITISCH: Wartung massiv überfällig! Rechtliche Konsequenzen möglich."),
    ],
)
def test_warning_message_per_band(level, expected):
    assert warning_message(fallback_consequence("other"), level) == expected
