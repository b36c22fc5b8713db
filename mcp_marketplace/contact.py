"""Contact form relay to the hosted form endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from bs4 import BeautifulSoup

from .config import CONTACT_RELAY_URL
from .exceptions import ContactRelayError
from .models import ContactInquiry

logger = logging.getLogger("mcp_marketplace.contact")


def strip_html(text: str) -> str:
    """Return the visible text of ``text`` with any markup removed."""
    soup = BeautifulSoup(text or "", "html.parser")
    for element in soup(["script", "style"]):
        element.decompose()
    return soup.get_text(separator=" ").strip()


def build_form_payload(inquiry: ContactInquiry) -> dict[str, str]:
    return {
        "name": strip_html(inquiry.name),
        "email": inquiry.email.strip(),
        "message": strip_html(inquiry.message),
    }


async def relay_inquiry(
    inquiry: ContactInquiry,
    client: httpx.AsyncClient,
    endpoint: str = CONTACT_RELAY_URL,
) -> dict[str, Any]:
    """
    Post a contact inquiry to the form endpoint.

    Args:
        inquiry: Validated contact form contents
        client: HTTP client to send with
        endpoint: Form endpoint URL

    Returns:
        Dictionary with delivery status and the endpoint's status code

    Raises:
        ContactRelayError: If the endpoint rejects the form or is unreachable
    """
    payload = build_form_payload(inquiry)
    if not payload["message"]:
        raise ContactRelayError("Inquiry message is empty after removing markup")

    try:
        response = await client.post(
            endpoint,
            data=payload,
            headers={"Accept": "application/json"},
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        logger.error("Contact relay rejected inquiry: HTTP %s", exc.response.status_code)
        raise ContactRelayError(
            "Form submission failed",
            {"status_code": exc.response.status_code},
        ) from exc
    except httpx.HTTPError as exc:
        logger.error("Contact relay unreachable: %s", exc)
        raise ContactRelayError("Form endpoint unreachable", {"error": str(exc)}) from exc

    logger.info("Inquiry from %s relayed", payload["email"])
    return {"status": "sent", "status_code": response.status_code}
