"""
Product management tools for sellers.
"""

import logging
from typing import Any

from mcp.server.fastmcp import Context
from pydantic import Field
from pydantic import ValidationError as PydanticValidationError

from ..context_utils import error_payload, get_store
from ..exceptions import MarketplaceError, ValidationError
from ..models import ProductDraft, ProductPatch, SessionContext
from ..monitoring import monitor_request
from ..server import tool

logger = logging.getLogger("mcp_marketplace.tools.products")


def _seller(user_id: str) -> SessionContext:
    return SessionContext(user_id=user_id, role="seller")


@tool()  # pragma: no cover
@monitor_request
async def create_vendor_product(
    name: str = Field(..., description="Product name, e.g. '75kW 유도 모터'"),
    category: str = Field(..., description="Category label, e.g. '기계'"),
    desc: str = Field(default="", description="Product description"),
    tags: list[str] = Field(default_factory=list, description="Search tags"),
    price_min: float | None = Field(default=None, description="Lower price; omit for 'inquire'"),
    price_max: float | None = Field(default=None, description="Upper price; omit for 'inquire'"),
    user_id: str = Field(..., description="Seller's user id"),
    *,
    ctx: Context,
) -> dict[str, Any]:
    """
    Add a product to the seller's own vendor listing.

    Search keywords are derived from the name, description, tags and category.

    Returns:
        dict: The stored product
    """
    logger.info("create_vendor_product called by %s: %s", user_id, name)
    try:
        draft = ProductDraft(
            name=name,
            category=category,
            desc=desc,
            tags=tags,
            price_min=price_min,
            price_max=price_max,
        )
    except PydanticValidationError as e:
        error = ValidationError("Invalid product", {"errors": e.errors(include_url=False)})
        return await error_payload(ctx, error, "create_vendor_product")

    try:
        product = get_store(ctx).create_product(_seller(user_id), draft)
    except MarketplaceError as e:
        return await error_payload(ctx, e, "create_vendor_product")

    return {"status": "success", "data": product.model_dump(mode="json")}


@tool()  # pragma: no cover
@monitor_request
async def update_vendor_product(
    product_id: str = Field(..., description="Product to change"),
    name: str | None = Field(default=None, description="New name"),
    category: str | None = Field(default=None, description="New category label"),
    desc: str | None = Field(default=None, description="New description"),
    tags: list[str] | None = Field(default=None, description="Replacement tags"),
    price_min: float | None = Field(default=None, description="New lower price"),
    price_max: float | None = Field(default=None, description="New upper price"),
    clear_prices: bool = Field(default=False, description="Reset both prices to 'inquire'"),
    user_id: str = Field(..., description="Seller's user id"),
    *,
    ctx: Context,
) -> dict[str, Any]:
    """
    Update fields of one of the seller's products; omitted fields are kept.

    Prices given together with ``clear_prices`` are ignored.

    Returns:
        dict: The updated product
    """
    logger.info("update_vendor_product called by %s for %s", user_id, product_id)
    fields: dict[str, Any] = {
        key: value
        for key, value in {
            "name": name,
            "category": category,
            "desc": desc,
            "tags": tags,
            "price_min": price_min,
            "price_max": price_max,
        }.items()
        if value is not None
    }
    if clear_prices:
        fields.update(price_min=None, price_max=None)

    try:
        patch = ProductPatch(**fields)
    except PydanticValidationError as e:
        error = ValidationError("Invalid product update", {"errors": e.errors(include_url=False)})
        return await error_payload(ctx, error, "update_vendor_product")

    try:
        product = get_store(ctx).update_product(_seller(user_id), product_id, patch)
    except MarketplaceError as e:
        return await error_payload(ctx, e, "update_vendor_product")

    return {"status": "success", "data": product.model_dump(mode="json")}


@tool()  # pragma: no cover
@monitor_request
async def delete_vendor_product(
    product_id: str = Field(..., description="Product to remove"),
    user_id: str = Field(..., description="Seller's user id"),
    *,
    ctx: Context,
) -> dict[str, Any]:
    """
    Remove one of the seller's products.

    Returns:
        dict: The removed product id
    """
    logger.info("delete_vendor_product called by %s for %s", user_id, product_id)
    try:
        get_store(ctx).delete_product(_seller(user_id), product_id)
    except MarketplaceError as e:
        return await error_payload(ctx, e, "delete_vendor_product")

    return {"status": "success", "data": {"product_id": product_id}}
