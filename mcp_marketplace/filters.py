"""Hard constraints applied to search candidates before scoring."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from datetime import datetime

from .models import MarketSnapshot, NaturalQueryResult, Product, SearchQuery, Vendor
from .sanctions import is_vendor_blocked

logger = logging.getLogger("mcp_marketplace.filters")


def matches_category(product: Product, vendor: Vendor, category: str) -> bool:
    """Product category equality or vendor category membership."""
    return product.category == category or category in vendor.categories


def effective_min_rating(value: float | None) -> float:
    """Normalise a rating threshold; missing, NaN or non-positive means none."""
    if value is None:
        return 0.0
    try:
        threshold = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(threshold) or threshold <= 0:
        return 0.0
    return threshold


def passes_filters(
    product: Product,
    vendor: Vendor,
    query: SearchQuery,
    nlq: NaturalQueryResult | None = None,
    *,
    is_admin: bool = False,
    now: datetime | None = None,
) -> bool:
    """Apply category, inferred-category, vendor, rating and visibility filters.

    Args:
        product: Candidate product
        vendor: The product's resolved vendor
        query: Search request
        nlq: Interpretation result when natural-language mode is on
        is_admin: Administrative callers also see blocked vendors
        now: Evaluation time for block expiry

    Returns:
        True when every constraint passes
    """
    if query.category and not matches_category(product, vendor, query.category):
        return False

    if nlq is not None and nlq.categories:
        if not any(matches_category(product, vendor, c) for c in nlq.categories):
            return False

    if query.vendor_id and vendor.id != query.vendor_id:
        return False

    threshold = effective_min_rating(query.min_rating)
    if threshold > 0 and vendor.avg_rating < threshold:
        return False

    if not is_admin and is_vendor_blocked(vendor, now):
        return False

    return True


def iter_candidates(
    snapshot: MarketSnapshot,
    query: SearchQuery,
    nlq: NaturalQueryResult | None = None,
    *,
    is_admin: bool = False,
    now: datetime | None = None,
) -> Iterator[tuple[Product, Vendor]]:
    """Yield (product, vendor) pairs from ``snapshot`` that pass every filter.

    Products whose vendor cannot be resolved are skipped.
    """
    vendors = {vendor.id: vendor for vendor in snapshot.vendors}
    for product in snapshot.products:
        vendor = vendors.get(product.vendor_id)
        if vendor is None:
            logger.debug("Skipping product %s with unknown vendor %s", product.id, product.vendor_id)
            continue
        if passes_filters(product, vendor, query, nlq, is_admin=is_admin, now=now):
            yield product, vendor
