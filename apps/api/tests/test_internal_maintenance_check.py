from __future__ import annotations

import uuid
from datetime import date

import pytest

from immowaechter.core.deps import get_maintenance_notifier, get_today
from immowaechter.main import app
from immowaechter.schemas.maintenance import MaintenanceRecord, OwnerProfile
from immowaechter.services.notification_sweep_service import MaintenanceNotifier
from immowaechter.services.resend_email_service import EmailSendResult

TODAY = date(2025, 1, 1)
ENDPOINTS = ["/api/notifications/check", "/internal/scheduled/maintenance-check"]


class _Supplier:
    def __init__(self, records=(), owner=None, error=None):
        self.records = list(records)
        self.owner = owner
        self.error = error
        self.fetch_calls = 0

    def fetch_due(self, today):
        self.fetch_calls += 1
        if self.error is not None:
            raise self.error
        return self.records

    def get_owner(self, owner_id):
        return self.owner


class _Transport:
    def __init__(self):
        self.sent = []

    async def send(self, *, from_email, to, subject, html):
        self.sent.append(to)
        return EmailSendResult(success=True, message_id="msg_1")


@pytest.fixture
def supplier():
    return _Supplier()


@pytest.fixture
def transport():
    return _Transport()


@pytest.fixture
def fake_notifier(supplier, transport):
    app.dependency_overrides[get_maintenance_notifier] = lambda: MaintenanceNotifier(
        supplier, transport, from_email="ImmoWächter <noreply@immowaechter.at>", app_url="https://www.immowaechter.at"
    )
    app.dependency_overrides[get_today] = lambda: TODAY
    yield
    app.dependency_overrides.pop(get_maintenance_notifier, None)
    app.dependency_overrides.pop(get_today, None)


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ENDPOINTS)
async def test_missing_token_is_rejected_before_any_fetch(client, fake_notifier, supplier, path):
    response = await client.get(path)

    assert response.status_code == 401
    assert response.json() == {"detail": "Unauthorized"}
    assert supplier.fetch_calls == 0


@pytest.mark.asyncio
async def test_wrong_token_is_rejected(client, fake_notifier, supplier):
    response = await client.get(ENDPOINTS[0], headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401
    assert supplier.fetch_calls == 0


@pytest.mark.asyncio
async def test_unset_secret_rejects_everything(client, fake_notifier, supplier, monkeypatch):
    from immowaechter.core.config import settings

    monkeypatch.setattr(settings, "CRON_SECRET", "")

    response = await client.get(ENDPOINTS[0], headers={"Authorization": "Bearer "})

    assert response.status_code == 401
    assert supplier.fetch_calls == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ENDPOINTS)
async def test_empty_sweep_summary(client, fake_notifier, cron_headers, path):
    response = await client.get(path, headers=cron_headers)

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "No maintenance notifications needed",
        "checked": 0,
        "sent": 0,
        "notifications": [],
    }


@pytest.mark.asyncio
async def test_sweep_summary_uses_camel_case(client, fake_notifier, supplier, transport, cron_headers):
    owner = OwnerProfile(id=uuid.uuid4(), email="maria@example.at", full_name="Maria Huber")
    supplier.owner = owner
    supplier.records = [
        MaintenanceRecord.model_validate(
            {
                "id": uuid.uuid4(),
                "next_maintenance": date(2025, 1, 8),
                "properties": [
                    {"id": uuid.uuid4(), "name": "Haus Döbling", "address": "Hauptstraße 1", "postal_code": "1190", "city": "Wien", "user_id": owner.id}
                ],
                "maintenance_intervals": [
                    {"id": uuid.uuid4(), "component": "Rauchwarnmelder", "category": "fire_safety", "interval_months": 12}
                ],
            }
        )
    ]

    response = await client.get(ENDPOINTS[0], headers=cron_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Notification check completed"
    assert body["checked"] == 1
    assert body["sent"] == 1
    assert "errors" not in body
    notification = body["notifications"][0]
    assert notification["userEmail"] == "maria@example.at"
    assert notification["componentName"] == "Rauchwarnmelder"
    assert notification["propertyAddress"] == "Hauptstraße 1, 1190 Wien"
    assert notification["nextMaintenance"] == "2025-01-08"
    assert notification["daysUntil"] == 7
    assert notification["isOverdue"] is False
    assert transport.sent == ["maria@example.at"]


@pytest.mark.asyncio
async def test_fetch_failure_returns_500(client, fake_notifier, supplier, cron_headers):
    supplier.error = RuntimeError("relation \"components\" does not exist")

    response = await client.get(ENDPOINTS[1], headers=cron_headers)

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Database query failed"
    assert "components" in body["details"]


@pytest.mark.asyncio
async def test_sweep_against_database_reports_unconfigured_transport(
    client, db, make_owner, make_property, make_component, cron_headers
):
    owner = make_owner(email="franz@example.at")
    make_component(prop=make_property(owner=owner), next_maintenance=TODAY)
    make_component(prop=make_property(owner=owner), next_maintenance=date(2025, 1, 20))
    app.dependency_overrides[get_today] = lambda: TODAY

    try:
        response = await client.get(ENDPOINTS[0], headers=cron_headers)
    finally:
        app.dependency_overrides.pop(get_today, None)

    assert response.status_code == 200
    body = response.json()
    assert body["checked"] == 2
    assert body["sent"] == 0
    assert body["errors"] == [
        "franz@example.at: Email transport not configured (missing RESEND_API_KEY)"
    ]
