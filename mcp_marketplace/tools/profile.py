"""
Vendor profile tools for sellers.
"""

import logging
from typing import Any

from mcp.server.fastmcp import Context
from pydantic import Field
from pydantic import ValidationError as PydanticValidationError

from ..context_utils import error_payload, get_store
from ..exceptions import MarketplaceError, ValidationError
from ..models import SessionContext, VendorContact, VendorProfileDraft, VendorProfilePatch
from ..monitoring import monitor_request
from ..server import tool

logger = logging.getLogger("mcp_marketplace.tools.profile")


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def _clean_categories(categories: list[str] | None) -> list[str] | None:
    if categories is None:
        return None
    return [c.strip() for c in categories if c.strip()] or None


@tool()  # pragma: no cover
@monitor_request
async def register_vendor(
    company_name: str = Field(default="", description="Company name; blank uses '신규 업체'"),
    categories: list[str] = Field(
        default_factory=list, description="Categories served; empty uses ['기타']"
    ),
    phone: str | None = Field(default=None, description="Contact phone"),
    email: str | None = Field(default=None, description="Contact email"),
    kakao: str | None = Field(default=None, description="KakaoTalk id"),
    contact_public: bool = Field(default=False, description="Show contact details to buyers"),
    user_id: str = Field(..., description="Seller's user id"),
    *,
    ctx: Context,
) -> dict[str, Any]:
    """
    Create the vendor listing for a seller account.

    A seller owns at most one vendor. The listing starts with no reviews
    and is never marked as sample data.

    Returns:
        dict: The stored vendor
    """
    logger.info("register_vendor called by %s: %s", user_id, company_name)
    fields: dict[str, Any] = {
        "contact": VendorContact(phone=_clean(phone), email=_clean(email), kakao=_clean(kakao)),
        "contact_public": contact_public,
    }
    name = _clean(company_name)
    if name:
        fields["company_name"] = name
    cleaned = _clean_categories(categories)
    if cleaned:
        fields["categories"] = cleaned

    try:
        vendor = get_store(ctx).register_vendor(
            SessionContext(user_id=user_id, role="seller"), VendorProfileDraft(**fields)
        )
    except MarketplaceError as e:
        return await error_payload(ctx, e, "register_vendor")

    return {"status": "success", "data": vendor.model_dump(mode="json")}


@tool()  # pragma: no cover
@monitor_request
async def update_vendor_profile(
    company_name: str | None = Field(default=None, description="New company name"),
    categories: list[str] | None = Field(default=None, description="Replacement categories"),
    phone: str | None = Field(default=None, description="New contact phone"),
    email: str | None = Field(default=None, description="New contact email"),
    kakao: str | None = Field(default=None, description="New KakaoTalk id"),
    contact_public: bool | None = Field(default=None, description="Show contact details to buyers"),
    user_id: str = Field(..., description="Seller's user id"),
    *,
    ctx: Context,
) -> dict[str, Any]:
    """
    Update the seller's own vendor profile; omitted fields are kept.

    Company name and categories feed vendor search and category filters,
    so changes show up in the next search.

    Returns:
        dict: The updated vendor
    """
    logger.info("update_vendor_profile called by %s", user_id)
    store = get_store(ctx)
    session = SessionContext(user_id=user_id, role="seller")
    current = store.vendor_for_owner(user_id)

    fields: dict[str, Any] = {}
    if company_name is not None:
        fields["company_name"] = company_name.strip()
    if categories is not None:
        fields["categories"] = [c.strip() for c in categories if c.strip()]
    contact_changes = {
        key: _clean(value)
        for key, value in {"phone": phone, "email": email, "kakao": kakao}.items()
        if value is not None
    }
    if contact_changes:
        base = current.contact if current is not None else VendorContact()
        fields["contact"] = base.model_copy(update=contact_changes)
    if contact_public is not None:
        fields["contact_public"] = contact_public

    try:
        patch = VendorProfilePatch(**fields)
    except PydanticValidationError as e:
        error = ValidationError("Invalid vendor profile", {"errors": e.errors(include_url=False)})
        return await error_payload(ctx, error, "update_vendor_profile")

    try:
        vendor = store.update_vendor_profile(session, patch)
    except MarketplaceError as e:
        return await error_payload(ctx, e, "update_vendor_profile")

    return {"status": "success", "data": vendor.model_dump(mode="json")}
