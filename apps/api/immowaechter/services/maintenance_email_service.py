"""Maintenance reminder email (German copy)."""

from __future__ import annotations

import html
from dataclasses import dataclass

DEFAULT_USER_NAME = "Immobilien-Eigentümer"
DEFAULT_PROPERTY_NAME = "Ihre Immobilie"

URGENT_WITHIN_DAYS = 7

_COLORS = {
    "overdue": ("#dc2626", "#fef2f2"),
    "soon": ("#f59e0b", "#fffbeb"),
    "upcoming": ("#667eea", "#eef2ff"),
}


@dataclass(frozen=True)
class MaintenanceReminderData:
    user_name: str
    property_name: str
    property_address: str
    component_name: str
    next_maintenance_date: str  # ISO date
    days_until: int  # absolute value
    is_overdue: bool


def render_subject(data: MaintenanceReminderData) -> str:
    if data.is_overdue:
        return f"⚠️ Überfällige Wartung: {data.component_name} in {data.property_name}"
    return f"🔔 Wartungserinnerung: {data.component_name} in {data.property_name}"


def _urgency(data: MaintenanceReminderData) -> str:
    if data.is_overdue:
        return "overdue"
    if data.days_until <= URGENT_WITHIN_DAYS:
        return "soon"
    return "upcoming"


def _status_text(data: MaintenanceReminderData) -> str:
    if data.is_overdue:
        return (
            '<strong style="color: #dc2626;">'
            f"Ihre Wartung ist {data.days_until} Tage überfällig!</strong>"
        )
    if data.days_until == 0:
        return "Ihre Wartung ist <strong>heute</strong> fällig."
    return f"Ihre Wartung ist in <strong>{data.days_until} Tagen</strong> fällig."


def _urgency_message(urgency: str) -> str:
    if urgency == "overdue":
        return (
            "⚠️ <strong>Wichtig:</strong> Bitte kümmern Sie sich zeitnah um diese Wartung, "
            "um die Sicherheit Ihrer Immobilie zu gewährleisten und mögliche Haftungsrisiken "
            "zu vermeiden."
        )
    if urgency == "soon":
        return (
            "🔔 <strong>Bald fällig:</strong> Vereinbaren Sie rechtzeitig einen Termin mit "
            "einem qualifizierten Fachbetrieb."
        )
    return (
        "💡 <strong>Tipp:</strong> Vereinbaren Sie rechtzeitig einen Termin mit einem "
        "qualifizierten Fachbetrieb, um böse Überraschungen zu vermeiden."
    )


def _detail_row(label: str, value: str, color: str = "#111827", weight: int = 500) -> str:
    return f"""
                      <tr>
                        <td style="padding: 8px 0; color: #6b7280; font-size: 14px; width: 40%;">{label}</td>
                        <td style="padding: 8px 0; color: {color}; font-size: 14px; font-weight: {weight};">{html.escape(value)}</td>
                      </tr>"""


def render_html(data: MaintenanceReminderData, app_url: str) -> str:
    """Render the reminder body. All user-supplied values are escaped."""
    urgency = _urgency(data)
    color, background = _COLORS[urgency]
    base_url = app_url.rstrip("/")

    rows = "".join(
        [
            _detail_row("🏢 Immobilie:", data.property_name),
            _detail_row("📍 Adresse:", data.property_address, weight=400),
            _detail_row("🔧 Komponente:", data.component_name),
            _detail_row("📅 Fälligkeitsdatum:", data.next_maintenance_date, color=color, weight=600),
        ]
    )

    return f"""<!DOCTYPE html>
<html lang="de">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Wartungserinnerung</title>
</head>
<body style="margin: 0; padding: 0; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif; background-color: #f3f4f6;">
  <table role="presentation" cellspacing="0" cellpadding="0" border="0" width="100%" style="background-color: #f3f4f6;">
    <tr>
      <td style="padding: 40px 20px;">
        <table role="presentation" cellspacing="0" cellpadding="0" border="0" width="600" style="margin: 0 auto; background-color: #ffffff; border-radius: 8px;">
          <tr>
            <td style="background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); padding: 30px; text-align: center; border-radius: 8px 8px 0 0;">
              <h1 style="margin: 0; color: #ffffff; font-size: 24px;">🏠 ImmoWächter</h1>
              <p style="margin: 10px 0 0 0; color: #e0e7ff; font-size: 14px;">Ihr digitaler Wartungsassistent</p>
            </td>
          </tr>
          <tr>
            <td style="padding: 30px 30px 0 30px;">
              <p style="margin: 0; font-size: 16px; color: #111827;">Hallo {html.escape(data.user_name)},</p>
            </td>
          </tr>
          <tr>
            <td style="padding: 20px 30px;">
              <div style="background-color: {background}; border-left: 4px solid {color}; padding: 15px; border-radius: 4px;">
                <p style="margin: 0; color: #111827; font-size: 16px;">{_status_text(data)}</p>
              </div>
            </td>
          </tr>
          <tr>
            <td style="padding: 0 30px 20px 30px;">
              <table role="presentation" cellspacing="0" cellpadding="0" border="0" width="100%" style="background-color: #f9fafb; border-radius: 8px; padding: 20px;">
                <tr>
                  <td>
                    <p style="margin: 0 0 15px 0; color: #6b7280; font-size: 14px; font-weight: 600; text-transform: uppercase;">Wartungsdetails</p>
                    <table role="presentation" cellspacing="0" cellpadding="0" border="0" width="100%">{rows}
                    </table>
                  </td>
                </tr>
              </table>
            </td>
          </tr>
          <tr>
            <td style="padding: 0 30px 20px 30px;">
              <p style="margin: 0; padding: 15px; background-color: #eff6ff; border-radius: 6px; color: #1e40af; font-size: 14px; line-height: 1.6;">{_urgency_message(urgency)}</p>
            </td>
          </tr>
          <tr>
            <td style="padding: 0 30px 30px 30px; text-align: center;">
              <a href="{html.escape(base_url, quote=True)}/dashboard" style="display: inline-block; background: #667eea; color: #ffffff; text-decoration: none; padding: 14px 32px; border-radius: 6px; font-weight: 600; font-size: 16px;">Zum Dashboard</a>
            </td>
          </tr>
          <tr>
            <td style="background-color: #f9fafb; padding: 30px; text-align: center; border-top: 1px solid #e5e7eb;">
              <p style="margin: 0 0 10px 0; color: #6b7280; font-size: 14px;">Diese E-Mail wurde automatisch von ImmoWächter versendet.</p>
              <p style="margin: 0 0 15px 0; color: #9ca3af; font-size: 12px;">Sie erhalten diese E-Mail, weil Sie sich bei ImmoWächter registriert haben.</p>
              <p style="margin: 0; color: #9ca3af; font-size: 12px;">
                <a href="{html.escape(base_url, quote=True)}/datenschutz" style="color: #667eea; text-decoration: none;">Datenschutz</a> •
                <a href="{html.escape(base_url, quote=True)}/impressum" style="color: #667eea; text-decoration: none;">Impressum</a>
              </p>
            </td>
          </tr>
        </table>
      </td>
    </tr>
  </table>
</body>
</html>
"""


# =============================================================================
# Critical escalation
# =============================================================================


@dataclass(frozen=True)
class CriticalMaintenanceData:
    user_name: str
    property_name: str
    component_name: str
    days_overdue: int
    risk_level: str  # "critical" or "legal"
    details_url: str


def render_critical_subject(data: CriticalMaintenanceData) -> str:
    return f"🚨 DRINGEND: {data.component_name} {data.days_overdue} Tage überfällig!"


def render_critical_html(data: CriticalMaintenanceData) -> str:
    """Escalation body for components in the critical or legal band."""
    badge = "⚖️ RECHTLICH" if data.risk_level == "legal" else "⚫ KRITISCH"

    return f"""<!DOCTYPE html>
<html lang="de">
<head>
  <meta charset="UTF-8">
  <title>Kritische Wartung überfällig</title>
</head>
<body style="margin: 0; padding: 0; font-family: Arial, sans-serif; line-height: 1.6; color: #333333;">
  <table role="presentation" cellspacing="0" cellpadding="0" border="0" width="600" style="margin: 0 auto;">
    <tr>
      <td style="background-color: #dc2626; color: #ffffff; padding: 20px; border-radius: 8px 8px 0 0;">
        <h1 style="margin: 0;">🚨 Kritische Wartung überfällig!</h1>
      </td>
    </tr>
    <tr>
      <td style="background-color: #f9fafb; padding: 30px; border-radius: 0 0 8px 8px;">
        <p>Hallo {html.escape(data.user_name)},</p>
        <p>Ihre <strong>{html.escape(data.component_name)}</strong> in <strong>{html.escape(data.property_name)}</strong> ist seit <strong>{data.days_overdue} Tagen</strong> überfällig!</p>
        <div style="background-color: #fef2f2; border-left: 4px solid #dc2626; padding: 15px; margin: 20px 0;">
          <strong>{badge}:</strong> Rechtliche Konsequenzen möglich!<br>
          • Versicherungsschutz gefährdet<br>
          • Grobe Fahrlässigkeit nach ABGB<br>
          • Strafrechtliche Folgen bei Schäden
        </div>
        <p><strong>Handeln Sie jetzt:</strong></p>
        <ol>
          <li>Handwerker beauftragen</li>
          <li>Wartung durchführen lassen</li>
          <li>In ImmoWächter dokumentieren</li>
        </ol>
        <a href="{html.escape(data.details_url, quote=True)}" style="display: inline-block; background-color: #dc2626; color: #ffffff; padding: 12px 24px; text-decoration: none; border-radius: 6px; font-weight: bold; margin-top: 20px;">Risiko-Details anzeigen</a>
        <p style="margin-top: 30px; font-size: 12px; color: #666666;">
          Diese E-Mail wurde automatisch von ImmoWächter versendet.<br>
          Sie erhalten sie, weil eine kritische Wartung überfällig ist.
        </p>
      </td>
    </tr>
  </table>
</body>
</html>
"""
