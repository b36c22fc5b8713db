"""Deterministic ordering of scored search results."""

from __future__ import annotations

from collections.abc import Iterable

from .models import ProductResult, Vendor, VendorGroup


def _rank_key(vendor: Vendor, score: int) -> tuple[bool, int, float]:
    # Sample vendors last, then higher score, then higher rating
    return (vendor.is_sample, -score, -vendor.avg_rating)


def rank_results(results: Iterable[ProductResult]) -> list[ProductResult]:
    """Order results for the flat product view.

    Real vendors always precede sample vendors regardless of score; ties
    keep their input order.
    """
    return sorted(results, key=lambda item: _rank_key(item.vendor, item.score))


def group_by_vendor(results: Iterable[ProductResult]) -> list[VendorGroup]:
    """Group results by vendor for the vendor view.

    Each group keeps all of its items and its best score. Groups are
    ordered by the same rule as the flat view, using the best score.

    Args:
        results: Scored results, usually already ranked

    Returns:
        Ordered list of vendor groups
    """
    grouped: dict[str, VendorGroup] = {}
    for item in results:
        current = grouped.get(item.vendor.id)
        if current is None:
            grouped[item.vendor.id] = VendorGroup(
                vendor=item.vendor, items=[item], best_score=item.score
            )
            continue
        current.items.append(item)
        current.best_score = max(current.best_score, item.score)

    return sorted(grouped.values(), key=lambda group: _rank_key(group.vendor, group.best_score))
