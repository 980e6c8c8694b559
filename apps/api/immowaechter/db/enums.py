"""Enum definitions for application constants."""

from enum import Enum


class PropertyType(str, Enum):
    """Kinds of real estate an owner can register."""
    HOUSE = "house"
    APARTMENT = "apartment"
    MULTI_FAMILY = "multi_family"
    COMMERCIAL = "commercial"


class ComponentType(str, Enum):
    """
    Risk classification of a maintenance component.

    Keys match COMPONENT_TYPE_WEIGHTS; interval categories are mapped onto
    these by risk_score_service.classify_component_type.
    """
    HEATING = "heating"
    ELECTRICAL = "electrical"
    PLUMBING = "plumbing"
    SECURITY = "security"
    FIRE_SAFETY = "fire_safety"
    ELEVATOR = "elevator"
    ROOF = "roof"
    FACADE = "facade"
    BASEMENT = "basement"
    GARDEN = "garden"
    PARKING = "parking"
    OTHER = "other"


class PropertyRiskLevel(str, Enum):
    """Coarse level derived from the 0-100 property risk score."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ComponentRiskLevel(str, Enum):
    """
    Per-component band by days overdue.

    safe (> 90 days ahead) → warning → danger (< 6 months overdue)
    → critical (< 1 year) → legal (1 year or more).
    """
    SAFE = "safe"
    WARNING = "warning"
    DANGER = "danger"
    CRITICAL = "critical"
    LEGAL = "legal"

