from immowaechter.services.maintenance_email_service import (
    CriticalMaintenanceData,
    MaintenanceReminderData,
    render_critical_html,
    render_critical_subject,
    render_html,
    render_subject,
)


def _data(**overrides) -> MaintenanceReminderData:
    data = {
        "user_name": "Maria Huber",
        "property_name": "Haus Döbling",
        "property_address": "Hauptstraße 1, 1190 Wien",
        "component_name": "Gasheizung (Thermenwartung)",
        "next_maintenance_date": "2025-01-15",
        "days_until": 14,
        "is_overdue": False,
    }
    data.update(overrides)
    return MaintenanceReminderData(**data)


def test_subject_for_upcoming_and_overdue():
    assert render_subject(_data()) == "🔔 Wartungserinnerung: Gasheizung (Thermenwartung) in Haus Döbling"
    assert render_subject(_data(is_overdue=True)) == (
        "⚠️ Überfällige Wartung: Gasheizung (Thermenwartung) in Haus Döbling"
    )


def test_html_upcoming():
    html = render_html(_data(), "https://www.immowaechter.at/")

    assert "Hallo Maria Huber," in html
    assert "in <strong>14 Tagen</strong> fällig" in html
    assert 'href="https://www.immowaechter.at/dashboard"' in html
    assert "2025-01-15" in html


def test_html_due_today():
    assert "<strong>heute</strong> fällig" in render_html(_data(days_until=0), "https://x.at")


def test_html_overdue():
    html = render_html(_data(days_until=21, is_overdue=True), "https://x.at")

    assert "21 Tage überfällig" in html
    assert "#dc2626" in html


def test_html_escapes_user_values():
    html = render_html(_data(property_name="<script>alert(1)</script>", user_name="A & B"), "https://x.at")

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "Hallo A &amp; B," in html


def _critical(**overrides) -> CriticalMaintenanceData:
    data = {
        "user_name": "Maria Huber",
        "property_name": "Haus Döbling",
        "component_name": "Gasheizung (Thermenwartung)",
        "days_overdue": 210,
        "risk_level": "critical",
        "details_url": "https://www.immowaechter.at/properties/abc",
    }
    data.update(overrides)
    return CriticalMaintenanceData(**data)


def test_critical_subject():
    assert render_critical_subject(_critical()) == "🚨 DRINGEND: Gasheizung (Thermenwartung) 210 Tage überfällig!"


def test_critical_html_badges():
    critical = render_critical_html(_critical())
    legal = render_critical_html(_critical(risk_level="legal", days_overdue=400))

    assert "🚨 Kritische Wartung überfällig!" in critical
    assert "⚫ KRITISCH" in critical
    assert "seit <strong>210 Tagen</strong> überfällig" in critical
    assert 'href="https://www.immowaechter.at/properties/abc"' in critical
    assert "⚖️ RECHTLICH" in legal
    assert "⚫ KRITISCH" not in legal


def test_critical_html_escapes_user_values():
    html = render_critical_html(_critical(user_name="<b>Eve</b>", component_name="Therme & Co"))

    assert "&lt;b&gt;Eve&lt;/b&gt;" in html
    assert "Therme &amp; Co" in html
