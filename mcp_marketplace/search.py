"""
Search orchestration for the marketplace.

Raw query → interpretation → filters → scoring → ranking → pagination.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from .config import PAGE_SIZE, PAGE_WINDOW
from .filters import iter_candidates
from .intent import DEFAULT_DICTIONARY, QueryDictionary, parse_natural_query
from .models import (
    MarketSnapshot,
    NaturalQueryResult,
    ProductResult,
    ResultView,
    SearchQuery,
    SearchResponse,
    SessionContext,
)
from .pagination import paginate, slice_page
from .rerank import group_by_vendor, rank_results
from .sanctions import utc_now
from .scoring import QueryTerms, score_candidate
from .tokenizer import iter_tokens

# Configure logging
logger = logging.getLogger("mcp_marketplace.search")


def build_query_terms(query: SearchQuery, nlq: NaturalQueryResult | None = None) -> QueryTerms:
    """Merge raw query tokens with interpreted keywords for both scoring axes."""
    product_terms = set(iter_tokens(query.q))
    if nlq is not None:
        product_terms.update(nlq.keywords)
    return QueryTerms(
        product_terms=frozenset(product_terms),
        vendor_terms=frozenset(iter_tokens(query.vendor_query)),
    )


def interpret_query(
    query: SearchQuery, dictionary: QueryDictionary = DEFAULT_DICTIONARY
) -> NaturalQueryResult | None:
    """Run the natural-language interpreter when the query opts in."""
    if not query.natural_language or not query.q.strip():
        return None
    return parse_natural_query(query.q, dictionary)


def search_products(
    snapshot: MarketSnapshot,
    query: SearchQuery,
    nlq: NaturalQueryResult | None = None,
    *,
    session: SessionContext | None = None,
    now: datetime | None = None,
) -> list[ProductResult]:
    """
    Filter, score and rank products of one snapshot.

    Args:
        snapshot: Store snapshot to search
        query: Search request
        nlq: Precomputed interpretation for natural-language mode
        session: Caller identity; administrators also see blocked vendors
        now: Evaluation time for sanction expiry (defaults to current UTC time)

    Returns:
        Results in flat-view order
    """
    is_admin = session is not None and session.is_admin
    evaluated_at = now or utc_now()
    terms = build_query_terms(query, nlq)

    results: list[ProductResult] = []
    for product, vendor in iter_candidates(
        snapshot, query, nlq, is_admin=is_admin, now=evaluated_at
    ):
        score = score_candidate(terms, product, vendor)
        if score is None:
            continue
        results.append(ProductResult(product=product, vendor=vendor, score=score))

    ranked = rank_results(results)
    logger.debug(
        "Search q=%r vendor_query=%r category=%r matched %d of %d products",
        query.q,
        query.vendor_query,
        query.category,
        len(ranked),
        len(snapshot.products),
    )
    return ranked


def run_search(
    snapshot: MarketSnapshot,
    query: SearchQuery,
    *,
    view: ResultView = "product",
    page: Any = 1,
    page_size: int = PAGE_SIZE,
    session: SessionContext | None = None,
    now: datetime | None = None,
    dictionary: QueryDictionary = DEFAULT_DICTIONARY,
) -> SearchResponse:
    """
    Perform a full search and return one page of the requested view.

    Both views come from the same ranked list, so switching view does not
    change which vendors appear.

    Args:
        snapshot: Store snapshot to search
        query: Search request
        view: "product" for the flat list, "vendor" for vendor groups
        page: Requested page, clamped into range
        page_size: Items (or groups) per page
        session: Caller identity
        now: Evaluation time for sanction expiry
        dictionary: Interpretation table for natural-language mode

    Returns:
        SearchResponse with page contents and pagination metadata
    """
    nlq = interpret_query(query, dictionary)
    results = search_products(snapshot, query, nlq, session=session, now=now)
    groups = group_by_vendor(results)

    total = len(results) if view == "product" else len(groups)
    window = paginate(total, page_size, page, PAGE_WINDOW)

    logger.info(
        "Search returned %d products from %d vendors (page %d/%d, view=%s)",
        len(results),
        len(groups),
        window.current_page,
        window.total_pages,
        view,
    )

    return SearchResponse(
        view=view,
        results=slice_page(results, window.current_page, page_size) if view == "product" else [],
        groups=slice_page(groups, window.current_page, page_size) if view == "vendor" else [],
        total_results=len(results),
        total_vendors=len(groups),
        page=window.current_page,
        total_pages=window.total_pages,
        page_items=window.items,
        has_next=window.has_next,
        has_previous=window.has_previous,
        interpretation=nlq,
    )
