"""
Search tools for the marketplace.
"""

import logging
import traceback
from typing import Any

from mcp.server.fastmcp import Context
from pydantic import Field

from ..config import ENABLE_NATURAL_LANGUAGE, MAX_QUERY_LENGTH, VENDOR_PAGE_SIZE
from ..context_utils import get_store
from ..exceptions import MarketplaceError
from ..intent import parse_natural_query
from ..models import NaturalQueryResult, SearchQuery, SearchResponse, SessionContext
from ..monitoring import monitor_request
from ..pagination import paginate, slice_page
from ..search import run_search
from ..server import mcp
from ..vendors import contact_view, list_vendors

# Configure logging
logger = logging.getLogger("mcp_marketplace.tools.search")


def _session(user_id: str | None, role: str | None) -> SessionContext:
    if role not in ("buyer", "seller", "admin"):
        role = None
    return SessionContext(user_id=user_id or None, role=role)


@mcp.tool()  # pragma: no cover
@monitor_request
async def marketplace_search(
    query: str = Field(
        default="",
        description="Product search text, e.g. '75kw 모터 인버터'",
        max_length=MAX_QUERY_LENGTH,
    ),
    vendor_query: str = Field(
        default="",
        description="Vendor name terms; every result must match at least one",
        max_length=MAX_QUERY_LENGTH,
    ),
    category: str = Field(default="", description="Category label filter, e.g. '기계'"),
    vendor_id: str = Field(default="", description="Restrict results to one vendor id"),
    min_rating: float = Field(default=0, description="Minimum vendor rating (0 = any)", ge=0, le=5),
    natural_language: bool = Field(
        default=False,
        description="Interpret the query heuristically to infer keywords and categories",
    ),
    view: str = Field(default="product", description="'product' list or 'vendor' groups"),
    page: int = Field(default=1, description="Page number (default 1)", ge=1),
    role: str | None = Field(default=None, description="Caller role: buyer, seller or admin"),
    *,
    ctx: Context,
) -> SearchResponse:
    """
    Search marketplace products and vendors.

    Results are filtered by category, vendor and rating, scored by token
    overlap with the query, and ranked with sample vendors last.

    Args:
        query: Product search text
        vendor_query: Vendor name terms
        category: Category label filter
        vendor_id: Restrict to one vendor
        min_rating: Minimum vendor average rating
        natural_language: Enable heuristic query interpretation
        view: "product" or "vendor"
        page: Page number, clamped into range
        role: Caller role; administrators also see sanctioned vendors
        ctx: MCP context object (automatically injected)

    Returns:
        A SearchResponse with one page of results and pagination metadata

    Example:
        marketplace_search(query="75kw 모터", natural_language=True)
    """
    logger.info(
        "marketplace_search called with query: %s, vendor_query: %s, category: %s, page: %s",
        query,
        vendor_query,
        category,
        page,
    )
    try:
        search_query = SearchQuery(
            q=query,
            vendor_query=vendor_query,
            category=category,
            vendor_id=vendor_id,
            min_rating=min_rating,
            natural_language=natural_language and ENABLE_NATURAL_LANGUAGE,
        )
        snapshot = get_store(ctx).snapshot()
        return run_search(
            snapshot,
            search_query,
            view="vendor" if view == "vendor" else "product",
            page=page,
            session=_session(None, role),
        )
    except Exception as e:
        error_msg = f"Error in marketplace_search: {e!s}"
        logger.error(error_msg)
        logger.error(traceback.format_exc())
        if hasattr(ctx, "error"):
            await ctx.error(error_msg)
        raise MarketplaceError(error_msg) from e


@mcp.tool()  # pragma: no cover
async def interpret_marketplace_query(
    query: str = Field(..., description="Natural-language request", max_length=MAX_QUERY_LENGTH),
) -> NaturalQueryResult:
    """
    Show the keywords and categories inferred from a natural-language request.

    Example:
        interpret_marketplace_query(query="75kw 모터 인버터 업체 찾아줘")
    """
    return parse_natural_query(query)


@mcp.tool()  # pragma: no cover
@monitor_request
async def list_marketplace_vendors(
    category: str = Field(default="", description="Category label filter"),
    page: int = Field(default=1, description="Page number (default 1)", ge=1),
    role: str | None = Field(default=None, description="Caller role: buyer, seller or admin"),
    *,
    ctx: Context,
) -> dict[str, Any]:
    """
    List vendors, optionally filtered by category.

    Private contact details are masked.

    Returns:
        dict: Vendors on the requested page with pagination metadata
    """
    snapshot = get_store(ctx).snapshot()
    vendors = list_vendors(snapshot, category or None, session=_session(None, role))
    window = paginate(len(vendors), VENDOR_PAGE_SIZE, page)

    rows = []
    for vendor in slice_page(vendors, window.current_page, VENDOR_PAGE_SIZE):
        row = vendor.model_dump(mode="json", exclude={"owner_user_id"})
        row["contact"] = contact_view(vendor).model_dump()
        rows.append(row)

    return {
        "vendors": rows,
        "total_vendors": len(vendors),
        "page": window.current_page,
        "total_pages": window.total_pages,
        "page_items": window.items,
    }
