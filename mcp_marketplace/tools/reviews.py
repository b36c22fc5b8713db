"""
Review and sanction tools for the marketplace.
"""

import logging
from typing import Any

from mcp.server.fastmcp import Context
from pydantic import Field

from ..config import SANCTION_PRESETS
from ..context_utils import error_payload, get_store
from ..exceptions import MarketplaceError
from ..models import SessionContext
from ..monitoring import monitor_request
from ..server import tool

logger = logging.getLogger("mcp_marketplace.tools.reviews")

_PRESET_DAYS = ", ".join(str(days) for days in SANCTION_PRESETS if days is not None)


@tool()  # pragma: no cover
@monitor_request
async def add_vendor_review(
    vendor_id: str = Field(..., description="Vendor to review"),
    rating: int = Field(..., description="Rating from 1 to 5"),
    text: str = Field(default="", description="Review text", max_length=2000),
    user_id: str = Field(..., description="Author's user id"),
    role: str = Field(default="buyer", description="Author's role: buyer or seller"),
    *,
    ctx: Context,
) -> dict[str, Any]:
    """
    Leave a review for a vendor and refresh its rating.

    Returns:
        dict: The stored review and the vendor's updated rating
    """
    logger.info("add_vendor_review called for vendor %s by %s", vendor_id, user_id)
    session = SessionContext(user_id=user_id, role=role if role in ("buyer", "seller") else None)
    store = get_store(ctx)
    try:
        review = store.add_review(session, vendor_id, rating, text)
    except MarketplaceError as e:
        return await error_payload(ctx, e, "add_vendor_review")

    vendor = store.get_vendor(vendor_id)
    return {
        "status": "success",
        "data": {
            "review": review.model_dump(mode="json"),
            "avg_rating": vendor.avg_rating,
            "review_count": vendor.review_count,
        },
    }


@tool()  # pragma: no cover
@monitor_request
async def sanction_vendor(
    vendor_id: str = Field(..., description="Vendor to block"),
    days: int | None = Field(
        default=None,
        description=f"Block length in days (presets: {_PRESET_DAYS}); omit for indefinite",
        ge=1,
    ),
    admin_user_id: str = Field(..., description="Administrator user id"),
    *,
    ctx: Context,
) -> dict[str, Any]:
    """
    Block a vendor from ordinary search and listings.

    Returns:
        dict: Vendor status and block expiry
    """
    logger.info("sanction_vendor called for vendor %s (days=%s)", vendor_id, days)
    session = SessionContext(user_id=admin_user_id, role="admin")
    try:
        vendor = get_store(ctx).apply_vendor_sanction(session, vendor_id, days)
    except MarketplaceError as e:
        return await error_payload(ctx, e, "sanction_vendor")

    return {
        "status": "success",
        "data": {
            "vendor_id": vendor.id,
            "status": vendor.status,
            "blocked_until": vendor.blocked_until.isoformat() if vendor.blocked_until else None,
        },
    }


@tool()  # pragma: no cover
@monitor_request
async def lift_vendor_sanction(
    vendor_id: str = Field(..., description="Vendor to unblock"),
    admin_user_id: str = Field(..., description="Administrator user id"),
    *,
    ctx: Context,
) -> dict[str, Any]:
    """
    Lift a vendor's sanction.

    Returns:
        dict: Vendor status after the change
    """
    session = SessionContext(user_id=admin_user_id, role="admin")
    try:
        vendor = get_store(ctx).clear_vendor_sanction(session, vendor_id)
    except MarketplaceError as e:
        return await error_payload(ctx, e, "lift_vendor_sanction")

    return {"status": "success", "data": {"vendor_id": vendor.id, "status": vendor.status}}
