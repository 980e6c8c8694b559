"""Property lookups and display helpers."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from immowaechter.db.models import Component, Property


def format_address(address: str | None, postal_code: str | None, city: str | None) -> str:
    """
    Build ``"Street 1, 1010 Wien"`` for display.

    Missing parts are dropped together with their separators, so an empty
    property yields an empty string rather than ``", "``.
    """
    locality = " ".join(part.strip() for part in (postal_code, city) if part and part.strip())
    parts = [part for part in ((address or "").strip(), locality) if part]
    return ", ".join(parts)


def get_property(db: Session, property_id: UUID) -> Property | None:
    return db.get(Property, property_id)


def get_property_components(db: Session, property_id: UUID) -> list[Component]:
    """Active components of a property with their interval definitions loaded."""
    stmt = (
        select(Component)
        .options(selectinload(Component.interval))
        .where(
            Component.property_id == property_id,
            Component.is_active.is_(True),
        )
    )
    return list(db.execute(stmt).scalars().all())
