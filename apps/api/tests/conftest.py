"""
Test configuration and fixtures.

Provides:
- In-memory SQLite database, schema rebuilt for every test
- HTTPX AsyncClient bound to the app with the test session
- Factories for owners, properties, intervals and components
"""
import os
import uuid
from datetime import date
from typing import AsyncGenerator, Generator

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.orm import Session

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["TESTING"] = "1"
os.environ["CRON_SECRET"] = "test-cron-secret"
os.environ["RESEND_API_KEY"] = ""

from immowaechter.main import app
from immowaechter.db.base import Base
from immowaechter.db.session import engine, SessionLocal
from immowaechter.core.deps import get_db
from immowaechter.db.models import Component, MaintenanceInterval, Profile, Property

CRON_SECRET = "test-cron-secret"


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Fresh schema per test.

    The in-memory database lives on a single shared connection, so dropping
    and recreating the tables is enough for isolation.
    """
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


# =============================================================================
# Factories
# =============================================================================

@pytest.fixture(scope="function")
def make_owner(db: Session):
    def _make(
        email: str | None = None,
        full_name: str | None = "Maria Huber",
        email_notifications: bool = True,
    ) -> Profile:
        owner = Profile(
            id=uuid.uuid4(),
            email=email or f"owner-{uuid.uuid4().hex[:8]}@example.at",
            full_name=full_name,
            email_notifications=email_notifications,
        )
        db.add(owner)
        db.flush()
        return owner

    return _make


@pytest.fixture(scope="function")
def make_property(db: Session, make_owner):
    def _make(owner: Profile | None = None, name: str = "Haus Döbling", **kwargs) -> Property:
        prop = Property(
            id=uuid.uuid4(),
            user_id=(owner or make_owner()).id,
            name=name,
            address=kwargs.pop("address", "Hauptstraße 1"),
            postal_code=kwargs.pop("postal_code", "1190"),
            city=kwargs.pop("city", "Wien"),
            **kwargs,
        )
        db.add(prop)
        db.flush()
        return prop

    return _make


@pytest.fixture(scope="function")
def make_interval(db: Session):
    def _make(
        category: str = "heating",
        component: str = "Gasheizung (Thermenwartung)",
        interval_months: int = 12,
        is_legal_requirement: bool = True,
        legal_reference: str | None = "Landes-Heizungsanlagengesetz",
    ) -> MaintenanceInterval:
        interval = MaintenanceInterval(
            id=uuid.uuid4(),
            category=category,
            component=component,
            interval_months=interval_months,
            is_legal_requirement=is_legal_requirement,
            legal_reference=legal_reference,
        )
        db.add(interval)
        db.flush()
        return interval

    return _make


@pytest.fixture(scope="function")
def make_component(db: Session, make_property, make_interval):
    def _make(
        prop: Property | None = None,
        interval: MaintenanceInterval | None = None,
        next_maintenance: date | None = None,
        last_maintenance: date | None = None,
        is_active: bool = True,
        custom_name: str | None = None,
    ) -> Component:
        component = Component(
            id=uuid.uuid4(),
            property_id=(prop or make_property()).id,
            interval_id=(interval or make_interval()).id,
            next_maintenance=next_maintenance,
            last_maintenance=last_maintenance,
            is_active=is_active,
            custom_name=custom_name,
        )
        db.add(component)
        db.commit()
        return component

    return _make


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture(scope="function")
async def client(db: Session) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient for the app, sharing the test database session."""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def cron_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {CRON_SECRET}"}
