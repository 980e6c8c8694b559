"""Resend email transport.

Single-attempt delivery: a failed send is reported to the caller and picked up
again by a later sweep if the component still qualifies.
"""

from __future__ import annotations

import html as html_module
import logging
import re
from dataclasses import dataclass
from typing import Protocol

import httpx

from immowaechter.core.structured_logging import mask_email

logger = logging.getLogger(__name__)

RESEND_SEND_URL = "https://api.resend.com/emails"
RESEND_TIMEOUT_SECONDS = 20.0


@dataclass(frozen=True)
class EmailSendResult:
    success: bool
    message_id: str | None = None
    error: str | None = None


class EmailTransport(Protocol):
    async def send(
        self,
        *,
        from_email: str,
        to: str,
        subject: str,
        html: str,
    ) -> EmailSendResult:
        """Deliver one message. Never raises for delivery failures."""


def _html_to_text(content: str) -> str:
    """Convert HTML into readable text (deliverability + inbox previews)."""
    text = re.sub(r"<(script|style|head)[^>]*>.*?</\1>", "", content, flags=re.DOTALL | re.I)
    text = re.sub(r"<[^>]+>", " ", text)
    text = re.sub(r"\s+", " ", text).strip()
    return html_module.unescape(text)


def _error_detail(response: httpx.Response) -> str | None:
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        return data.get("message") or data.get("error")
    return None


class ResendEmailTransport:
    """EmailTransport backed by the Resend HTTP API."""

    def __init__(
        self,
        api_key: str,
        *,
        timeout: float = RESEND_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self._client = client

    async def _post(self, headers: dict[str, str], payload: dict[str, object]) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(RESEND_SEND_URL, headers=headers, json=payload)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(RESEND_SEND_URL, headers=headers, json=payload)

    async def send(
        self,
        *,
        from_email: str,
        to: str,
        subject: str,
        html: str,
    ) -> EmailSendResult:
        if not self.api_key:
            return EmailSendResult(success=False, error="Email transport not configured (missing RESEND_API_KEY)")

        payload: dict[str, object] = {
            "from": from_email,
            "to": [to],
            "subject": subject,
            "html": html,
        }
        text = _html_to_text(html)
        if text:
            payload["text"] = text

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = await self._post(headers, payload)
        except httpx.TimeoutException:
            logger.warning("Resend timeout for %s", mask_email(to))
            return EmailSendResult(success=False, error="Connection timeout")
        except httpx.RequestError as e:
            logger.warning("Resend connection error for %s: %s", mask_email(to), e.__class__.__name__)
            return EmailSendResult(success=False, error=f"Connection error: {e.__class__.__name__}")

        if 200 <= response.status_code < 300:
            message_id = None
            try:
                data = response.json()
                if isinstance(data, dict):
                    message_id = data.get("id")
            except ValueError:
                pass
            return EmailSendResult(success=True, message_id=message_id)

        error_msg = f"Resend API error: {response.status_code}"
        detail = _error_detail(response)
        if detail:
            error_msg = f"{error_msg} ({detail})"
        return EmailSendResult(success=False, error=error_msg)
