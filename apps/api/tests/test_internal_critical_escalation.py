from __future__ import annotations

import uuid
from datetime import date, timedelta

import pytest

from immowaechter.core.deps import get_critical_notifier, get_today
from immowaechter.main import app
from immowaechter.schemas.escalation import EscalationRecord
from immowaechter.schemas.maintenance import OwnerProfile
from immowaechter.services.escalation_service import CriticalMaintenanceNotifier
from immowaechter.services.resend_email_service import EmailSendResult

TODAY = date(2025, 1, 1)
ENDPOINTS = ["/api/cron/check-maintenances", "/internal/scheduled/critical-escalation"]


class _Supplier:
    def __init__(self, records=(), error=None):
        self.records = list(records)
        self.error = error
        self.fetch_calls = 0

    def fetch_critical(self, today):
        self.fetch_calls += 1
        if self.error is not None:
            raise self.error
        return self.records


class _Transport:
    def __init__(self):
        self.sent = []

    async def send(self, *, from_email, to, subject, html):
        self.sent.append((to, subject))
        return EmailSendResult(success=True, message_id="msg_1")


@pytest.fixture
def supplier():
    return _Supplier()


@pytest.fixture
def transport():
    return _Transport()


@pytest.fixture
def fake_notifier(supplier, transport):
    app.dependency_overrides[get_critical_notifier] = lambda: CriticalMaintenanceNotifier(
        supplier, transport, from_email="ImmoWächter <noreply@immowaechter.at>", app_url="https://www.immowaechter.at"
    )
    app.dependency_overrides[get_today] = lambda: TODAY
    yield
    app.dependency_overrides.pop(get_critical_notifier, None)
    app.dependency_overrides.pop(get_today, None)


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ENDPOINTS)
async def test_missing_token_is_rejected_before_any_fetch(client, fake_notifier, supplier, path):
    response = await client.get(path)

    assert response.status_code == 401
    assert response.json() == {"detail": "Unauthorized"}
    assert supplier.fetch_calls == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ENDPOINTS)
async def test_empty_escalation_summary(client, fake_notifier, cron_headers, path):
    response = await client.get(path, headers=cron_headers)

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "No critical maintenances found",
        "checked": 0,
        "notificationsSent": 0,
        "skipped": 0,
        "notifications": [],
    }


@pytest.mark.asyncio
async def test_escalation_summary_uses_camel_case(client, fake_notifier, supplier, transport, cron_headers):
    owner = OwnerProfile(id=uuid.uuid4(), email="maria@example.at", full_name="Maria Huber")
    quiet = OwnerProfile(id=uuid.uuid4(), email="quiet@example.at", email_notifications=False)
    supplier.records = [
        EscalationRecord(
            component_id=uuid.uuid4(),
            component_name="Aufzug",
            property_id=uuid.uuid4(),
            property_name="Zinshaus Favoriten",
            next_maintenance=TODAY - timedelta(days=400),
            owner=owner,
        ),
        EscalationRecord(
            component_id=uuid.uuid4(),
            component_name="Therme",
            property_id=uuid.uuid4(),
            next_maintenance=TODAY - timedelta(days=200),
            owner=quiet,
        ),
    ]

    response = await client.get(ENDPOINTS[0], headers=cron_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Critical maintenance check completed"
    assert body["checked"] == 2
    assert body["notificationsSent"] == 1
    assert body["skipped"] == 1
    assert "errors" not in body
    notification = body["notifications"][0]
    assert notification["userEmail"] == "maria@example.at"
    assert notification["propertyName"] == "Zinshaus Favoriten"
    assert notification["daysOverdue"] == 400
    assert notification["riskLevel"] == "legal"
    assert transport.sent == [("maria@example.at", "🚨 DRINGEND: Aufzug 400 Tage überfällig!")]


@pytest.mark.asyncio
async def test_fetch_failure_returns_500(client, fake_notifier, supplier, cron_headers):
    supplier.error = RuntimeError("relation \"components\" does not exist")

    response = await client.get(ENDPOINTS[1], headers=cron_headers)

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Failed"
    assert "components" in body["details"]


@pytest.mark.asyncio
async def test_escalation_against_database(
    client, db, make_owner, make_property, make_component, cron_headers
):
    quiet = make_owner(email="quiet@example.at", email_notifications=False)
    loud = make_owner(email="franz@example.at")
    make_component(prop=make_property(owner=quiet), next_maintenance=date(2024, 6, 1))
    make_component(prop=make_property(owner=loud), next_maintenance=date(2024, 6, 1))
    make_component(prop=make_property(owner=loud), next_maintenance=date(2024, 12, 1))
    app.dependency_overrides[get_today] = lambda: TODAY

    try:
        response = await client.get(ENDPOINTS[0], headers=cron_headers)
    finally:
        app.dependency_overrides.pop(get_today, None)

    assert response.status_code == 200
    body = response.json()
    assert body["checked"] == 2
    assert body["notificationsSent"] == 0
    assert body["skipped"] == 1
    assert body["errors"] == [
        "franz@example.at: Email transport not configured (missing RESEND_API_KEY)"
    ]
