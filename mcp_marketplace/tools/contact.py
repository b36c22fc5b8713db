"""
Contact form tool for the marketplace.
"""

import logging
from typing import Any

from mcp.server.fastmcp import Context
from pydantic import Field
from pydantic import ValidationError as PydanticValidationError

from ..config import ENABLE_CONTACT_RELAY, MAX_INQUIRY_LENGTH
from ..contact import relay_inquiry
from ..context_utils import error_payload
from ..exceptions import ContactRelayError, ValidationError
from ..http import get_http_client
from ..models import ContactInquiry
from ..monitoring import monitor_request
from ..server import tool

logger = logging.getLogger("mcp_marketplace.tools.contact")


@tool()  # pragma: no cover
@monitor_request
async def submit_inquiry(
    name: str = Field(..., description="Sender name"),
    email: str = Field(..., description="Reply-to email address"),
    message: str = Field(..., description="Inquiry text", max_length=MAX_INQUIRY_LENGTH),
    *,
    ctx: Context,
) -> dict[str, Any]:
    """
    Send a message to the marketplace operators through the contact form.

    Returns:
        dict: Delivery status
    """
    if not ENABLE_CONTACT_RELAY:
        return {"status": "disabled", "message": "Contact relay is disabled"}

    try:
        inquiry = ContactInquiry(name=name, email=email, message=message)
    except PydanticValidationError as e:
        error = ValidationError("Invalid inquiry", {"errors": e.errors(include_url=False)})
        return await error_payload(ctx, error, "submit_inquiry")

    logger.info("submit_inquiry called by %s", inquiry.email)
    client, should_close = get_http_client(ctx)
    try:
        receipt = await relay_inquiry(inquiry, client)
    except ContactRelayError as e:
        return await error_payload(ctx, e, "submit_inquiry", recoverable=True)
    finally:
        if should_close:
            await client.aclose()

    return {"status": "success", "data": receipt}
