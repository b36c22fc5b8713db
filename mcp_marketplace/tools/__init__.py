"""
Tools for the marketplace MCP server.
This module contains search, vendor profile, product, review, sanction, contact and health tools.
"""

from mcp_marketplace.tools.contact import submit_inquiry
from mcp_marketplace.tools.health import health_check
from mcp_marketplace.tools.products import (
    create_vendor_product,
    delete_vendor_product,
    update_vendor_product,
)
from mcp_marketplace.tools.profile import register_vendor, update_vendor_profile
from mcp_marketplace.tools.reviews import (
    add_vendor_review,
    lift_vendor_sanction,
    sanction_vendor,
)
from mcp_marketplace.tools.search import (
    interpret_marketplace_query,
    list_marketplace_vendors,
    marketplace_search,
)

__all__ = [
    "add_vendor_review",
    "create_vendor_product",
    "delete_vendor_product",
    "health_check",
    "interpret_marketplace_query",
    "lift_vendor_sanction",
    "list_marketplace_vendors",
    "marketplace_search",
    "register_vendor",
    "sanction_vendor",
    "submit_inquiry",
    "update_vendor_product",
    "update_vendor_profile",
]
