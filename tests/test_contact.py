"""Tests for the contact form relay."""

from unittest.mock import AsyncMock

import httpx
import pytest

from factories import MockResponse
from mcp_marketplace.config import CONTACT_RELAY_URL
from mcp_marketplace.contact import build_form_payload, relay_inquiry, strip_html
from mcp_marketplace.exceptions import ContactRelayError
from mcp_marketplace.models import ContactInquiry


def inquiry(**overrides) -> ContactInquiry:
    data = {"name": "홍길동", "email": " hong@example.com ", "message": "모터 견적 문의드립니다."}
    data.update(overrides)
    return ContactInquiry(**data)


def test_strip_html_removes_markup_and_scripts():
    assert strip_html("<p>Hello</p><script>alert(1)</script><style>p{}</style>") == "Hello"
    assert strip_html("plain text") == "plain text"
    assert strip_html("") == ""


def test_build_form_payload_cleans_fields():
    payload = build_form_payload(inquiry(name="<b>홍길동</b>"))
    assert payload == {
        "name": "홍길동",
        "email": "hong@example.com",
        "message": "모터 견적 문의드립니다.",
    }


@pytest.mark.asyncio
async def test_relay_posts_form(mock_http_client):
    receipt = await relay_inquiry(inquiry(), mock_http_client)

    assert receipt == {"status": "sent", "status_code": 200}
    mock_http_client.post.assert_awaited_once()
    args, kwargs = mock_http_client.post.call_args
    assert args[0] == CONTACT_RELAY_URL
    assert kwargs["headers"] == {"Accept": "application/json"}
    assert kwargs["data"]["email"] == "hong@example.com"


@pytest.mark.asyncio
async def test_relay_uses_given_endpoint(mock_http_client):
    await relay_inquiry(inquiry(), mock_http_client, "https://forms.example/f/abc")
    assert mock_http_client.post.call_args.args[0] == "https://forms.example/f/abc"


@pytest.mark.asyncio
async def test_relay_rejects_markup_only_message(mock_http_client):
    with pytest.raises(ContactRelayError):
        await relay_inquiry(inquiry(message="<script>x()</script>"), mock_http_client)
    mock_http_client.post.assert_not_awaited()


@pytest.mark.asyncio
async def test_relay_http_error_status():
    client = AsyncMock()
    client.post = AsyncMock(return_value=MockResponse('{"error": "bad"}', status_code=422))

    with pytest.raises(ContactRelayError) as excinfo:
        await relay_inquiry(inquiry(), client)

    assert excinfo.value.details == {"status_code": 422}


@pytest.mark.asyncio
async def test_relay_network_failure():
    client = AsyncMock()
    client.post = AsyncMock(side_effect=httpx.ConnectError("connection refused"))

    with pytest.raises(ContactRelayError) as excinfo:
        await relay_inquiry(inquiry(), client)

    assert "connection refused" in excinfo.value.details["error"]
