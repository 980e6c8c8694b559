"""SQLAlchemy ORM models for owners, properties and maintenance components."""

import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean, Date, ForeignKey, Index, Integer, Numeric, String, Text, UniqueConstraint, Uuid, func
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from immowaechter.db.base import Base
from immowaechter.db.enums import PropertyType


# =============================================================================
# Owners
# =============================================================================

class Profile(Base):
    """
    Property owner profile.

    Mirrors the Supabase ``profiles`` table; id equals the auth user id.
    Read-only for the reminder sweep.
    """
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    country: Mapped[str] = mapped_column(String(2), default="AT", nullable=False)

    # Notification preferences
    email_notifications: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    push_notifications: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)

    properties: Mapped[list["Property"]] = relationship(back_populates="owner")


# =============================================================================
# Properties
# =============================================================================

class Property(Base):
    """A real-estate asset owned by a single profile."""
    __tablename__ = "properties"
    __table_args__ = (
        Index("idx_properties_user", "user_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    postal_code: Mapped[str | None] = mapped_column(String(10), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    country: Mapped[str] = mapped_column(String(2), default="AT", nullable=False)

    property_type: Mapped[str] = mapped_column(
        String(30), default=PropertyType.HOUSE.value, nullable=False
    )
    build_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    living_area: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)

    created_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)

    owner: Mapped["Profile"] = relationship(back_populates="properties")
    components: Mapped[list["Component"]] = relationship(back_populates="owning_property")

    @property
    def display_address(self) -> str:
        """``"Street, 1010 City"`` with empty parts dropped."""
        from immowaechter.services.property_service import format_address

        return format_address(self.address, self.postal_code, self.city)


# =============================================================================
# Maintenance catalog & components
# =============================================================================

class MaintenanceInterval(Base):
    """
    Catalog entry describing a maintenance task and its recurrence.

    Not user-owned; seeded from the Austrian regulations catalog.
    """
    __tablename__ = "maintenance_intervals"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    category: Mapped[str] = mapped_column(String(50), nullable=False)  # ComponentType key
    component: Mapped[str] = mapped_column(String(255), nullable=False)  # human label
    interval_months: Mapped[int] = mapped_column(Integer, nullable=False)

    is_legal_requirement: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    legal_reference: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    cost_min: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    cost_max: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)


class Component(Base):
    """
    A tracked piece of property infrastructure (heating, smoke detector, ...).

    Removal from tracking sets is_active=False; rows are never deleted by the app.
    """
    __tablename__ = "components"
    __table_args__ = (
        Index("idx_components_property", "property_id"),
        Index("idx_components_active_next", "is_active", "next_maintenance"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False
    )
    interval_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("maintenance_intervals.id"), nullable=False
    )

    custom_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    brand: Mapped[str | None] = mapped_column(String(100), nullable=True)
    model: Mapped[str | None] = mapped_column(String(100), nullable=True)

    last_maintenance: Mapped[date | None] = mapped_column(Date, nullable=True)
    next_maintenance: Mapped[date | None] = mapped_column(Date, nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), onupdate=func.now(), nullable=False
    )

    owning_property: Mapped["Property"] = relationship(back_populates="components")
    interval: Mapped["MaintenanceInterval"] = relationship()

    @property
    def display_name(self) -> str:
        if self.custom_name:
            return self.custom_name
        return self.interval.component if self.interval else ""


class RiskConsequence(Base):
    """
    What can happen when a component type goes unmaintained.

    One row per component type and country; drives the warning texts and
    consequence flags of the component risk endpoint.
    """
    __tablename__ = "risk_consequences"
    __table_args__ = (
        UniqueConstraint("component_type", "country", name="uq_risk_consequence_type_country"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    component_type: Mapped[str] = mapped_column(String(50), nullable=False)  # ComponentType key
    country: Mapped[str] = mapped_column(String(2), default="AT", nullable=False)

    death_risk: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    injury_risk: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    insurance_void: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    criminal_liability: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    criminal_paragraph: Mapped[str | None] = mapped_column(String(255), nullable=True)

    damage_cost_min: Mapped[int | None] = mapped_column(Integer, nullable=True)
    damage_cost_max: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Warning text per band: yellow=warning, orange=danger, red=critical, black=legal
    warning_yellow: Mapped[str] = mapped_column(Text, nullable=False)
    warning_orange: Mapped[str] = mapped_column(Text, nullable=False)
    warning_red: Mapped[str] = mapped_column(Text, nullable=False)
    warning_black: Mapped[str] = mapped_column(Text, nullable=False)

    real_case: Mapped[str | None] = mapped_column(Text, nullable=True)
    statistic: Mapped[str | None] = mapped_column(Text, nullable=True)
