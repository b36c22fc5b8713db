"""
MCP prompt definitions for the marketplace.
"""

from __future__ import annotations

from pydantic import Field

from .config import CATEGORIES
from .server import mcp


@mcp.prompt()  # pragma: no cover
def material_search_assistant(
    request: str = Field(..., description="What the buyer is looking for"),
) -> str:
    """
    Creates a prompt to turn a buyer's request into a marketplace search.
    """
    categories = ", ".join(CATEGORIES)
    return f"""
    A buyer needs the following materials:

    "{request}"

    Please:
    1. Pick the most specific product terms, keeping ratings such as "75kw" or "50mm" together
    2. Choose a category if one clearly applies ({categories})
    3. Call marketplace_search with natural_language=True and those terms
    4. Summarise the best matches, noting vendor rating and price range (or "inquire")
    """


@mcp.prompt()  # pragma: no cover
def vendor_comparison_assistant(
    product: str = Field(..., description="Product to compare vendors for"),
    min_rating: float = Field(default=0, description="Minimum vendor rating"),
) -> str:
    """
    Creates a prompt to compare vendors offering a product.
    """
    return f"""
    I want to compare vendors that sell "{product}".

    Please:
    1. Call marketplace_search with query="{product}", view="vendor" and min_rating={min_rating}
    2. For each vendor group, list matching products and the vendor's average rating
    3. Point out which vendors are bundled sample listings
    4. Recommend at most three vendors to request quotes from
    """
