"""Token-overlap relevance scoring for products and vendors."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .models import Product, Vendor
from .tokenizer import tokenize_parts


def product_token_set(product: Product, vendor: Vendor) -> set[str]:
    """Searchable tokens of a product together with its vendor."""
    return tokenize_parts(
        [
            product.name,
            product.desc,
            *product.tags,
            *product.keywords,
            vendor.company_name,
            *vendor.categories,
        ]
    )


def vendor_token_set(vendor: Vendor) -> set[str]:
    """Searchable tokens of a vendor's name and categories."""
    return tokenize_parts([vendor.company_name, *vendor.categories])


def overlap_score(query_tokens: Iterable[str], entity_tokens: set[str]) -> int:
    """Count query tokens present in ``entity_tokens``; each counts once."""
    return len(set(query_tokens) & entity_tokens)


@dataclass(frozen=True)
class QueryTerms:
    """Token sets for the two scoring axes of one search."""

    product_terms: frozenset[str]
    vendor_terms: frozenset[str]


def score_candidate(terms: QueryTerms, product: Product, vendor: Vendor) -> int | None:
    """Score one candidate, or return ``None`` when a text axis excludes it.

    Vendor-name search is an AND constraint: with vendor terms present a
    vendor-side score of 0 excludes the candidate. The same holds for the
    product axis. With no terms on either axis every candidate scores 0.

    Args:
        terms: Query tokens for both axes
        product: Candidate product
        vendor: The product's resolved vendor

    Returns:
        Summed score, or None if the candidate is excluded
    """
    product_score = 0
    if terms.product_terms:
        product_score = overlap_score(terms.product_terms, product_token_set(product, vendor))
        if product_score == 0:
            return None

    vendor_score = 0
    if terms.vendor_terms:
        vendor_score = overlap_score(terms.vendor_terms, vendor_token_set(vendor))
        if vendor_score == 0:
            return None

    return product_score + vendor_score
