"""Structured logging helpers (PII-safe)."""

from typing import Any


def mask_email(email: str | None) -> str:
    """Mask the local part of an address for log lines."""
    if not email:
        return ""
    local, _, domain = email.partition("@")
    prefix = local[:2] if local else ""
    return f"{prefix}***@{domain}" if domain else f"{prefix}***"


def build_log_context(
    *,
    run_id: str | None = None,
    route: str | None = None,
    method: str | None = None,
    property_id: str | None = None,
    component_id: str | None = None,
    checked: int | None = None,
    sent: int | None = None,
) -> dict[str, Any]:
    """Return a PII-safe log context dict."""
    context: dict[str, Any] = {}
    if run_id:
        context["run_id"] = run_id
    if route:
        context["route"] = route
    if method:
        context["method"] = method
    if property_id:
        context["property_id"] = property_id
    if component_id:
        context["component_id"] = component_id
    if checked is not None:
        context["checked"] = checked
    if sent is not None:
        context["sent"] = sent
    return context
