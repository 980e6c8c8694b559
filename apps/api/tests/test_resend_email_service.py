import json

import httpx
import pytest

from immowaechter.services.resend_email_service import RESEND_SEND_URL, ResendEmailTransport


def _transport(handler, api_key: str = "re_test_key") -> ResendEmailTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ResendEmailTransport(api_key, client=client)


async def _send(transport: ResendEmailTransport):
    return await transport.send(
        from_email="ImmoWächter <noreply@immowaechter.at>",
        to="maria@example.at",
        subject="🔔 Wartungserinnerung: Aufzug in Haus Döbling",
        html="<p>Hallo <strong>Maria</strong></p>",
    )


@pytest.mark.asyncio
async def test_send_posts_single_recipient_payload():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers["Authorization"]
        captured["payload"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "msg_123"})

    result = await _send(_transport(handler))

    assert result.success is True
    assert result.message_id == "msg_123"
    assert captured["url"] == RESEND_SEND_URL
    assert captured["auth"] == "Bearer re_test_key"
    assert captured["payload"]["to"] == ["maria@example.at"]
    assert captured["payload"]["from"] == "ImmoWächter <noreply@immowaechter.at>"
    # Plain-text alternative is derived from the HTML body
    assert captured["payload"]["text"] == "Hallo Maria"


@pytest.mark.asyncio
async def test_send_reports_api_error_with_detail():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json={"message": "Invalid `to` field"})

    result = await _send(_transport(handler))

    assert result.success is False
    assert result.error == "Resend API error: 422 (Invalid `to` field)"


@pytest.mark.asyncio
async def test_send_reports_api_error_without_json_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="Bad Gateway")

    result = await _send(_transport(handler))

    assert result.error == "Resend API error: 502"


@pytest.mark.asyncio
async def test_send_reports_timeout_without_retrying():
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        raise httpx.ReadTimeout("timed out", request=request)

    result = await _send(_transport(handler))

    assert result.success is False
    assert result.error == "Connection timeout"
    assert calls["count"] == 1


@pytest.mark.asyncio
async def test_send_reports_connection_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    result = await _send(_transport(handler))

    assert result.error == "Connection error: ConnectError"


@pytest.mark.asyncio
async def test_send_without_api_key_never_calls_resend():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("should not be called")

    result = await _send(_transport(handler, api_key=""))

    assert result.success is False
    assert "RESEND_API_KEY" in result.error
