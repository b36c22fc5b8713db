"""
Materials marketplace search for Model Context Protocol.

This package provides product/vendor search, ranking and pagination over an
in-memory marketplace store.
"""

__version__ = "0.1.0"

from .intent import DEFAULT_DICTIONARY, QueryDictionary, parse_natural_query
from .main import main
from .models import (
    MarketSnapshot,
    NaturalQueryResult,
    PageWindow,
    Product,
    ProductResult,
    Review,
    SearchQuery,
    SearchResponse,
    SessionContext,
    Vendor,
    VendorGroup,
)
from .pagination import paginate
from .rerank import group_by_vendor, rank_results
from .search import run_search, search_products
from .store import MarketStore, recalc_vendor_stats
from .tokenizer import tokenize

__all__ = [
    "DEFAULT_DICTIONARY",
    "MarketSnapshot",
    "MarketStore",
    "NaturalQueryResult",
    "PageWindow",
    "Product",
    "ProductResult",
    "QueryDictionary",
    "Review",
    "SearchQuery",
    "SearchResponse",
    "SessionContext",
    "Vendor",
    "VendorGroup",
    "group_by_vendor",
    "main",
    "paginate",
    "parse_natural_query",
    "rank_results",
    "recalc_vendor_stats",
    "run_search",
    "search_products",
    "tokenize",
]


def __main__() -> None:
    main()
