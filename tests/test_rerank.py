"""Tests for result ranking and vendor grouping."""

from factories import make_product, make_vendor
from mcp_marketplace.models import ProductResult
from mcp_marketplace.rerank import group_by_vendor, rank_results


def result(product_id: str, vendor, score: int) -> ProductResult:
    return ProductResult(product=make_product(product_id, vendor.id), vendor=vendor, score=score)


REAL_HIGH = make_vendor("real-high", avg_rating=4.8)
REAL_LOW = make_vendor("real-low", avg_rating=2.1)
SAMPLE = make_vendor("sample", avg_rating=5.0, is_sample=True)


def test_sample_vendors_always_rank_last():
    ranked = rank_results([result("s", SAMPLE, 10), result("r", REAL_LOW, 1)])
    assert [item.product.id for item in ranked] == ["r", "s"]


def test_higher_score_first_then_higher_rating():
    ranked = rank_results(
        [
            result("a", REAL_LOW, 2),
            result("b", REAL_HIGH, 1),
            result("c", REAL_HIGH, 2),
        ]
    )
    assert [item.product.id for item in ranked] == ["c", "a", "b"]


def test_full_ties_keep_input_order():
    ranked = rank_results([result("first", REAL_HIGH, 1), result("second", REAL_HIGH, 1)])
    assert [item.product.id for item in ranked] == ["first", "second"]


def test_group_by_vendor_keeps_best_score_and_all_items():
    groups = group_by_vendor(
        [
            result("h1", REAL_HIGH, 1),
            result("l1", REAL_LOW, 3),
            result("h2", REAL_HIGH, 2),
        ]
    )

    assert [group.vendor.id for group in groups] == ["real-low", "real-high"]
    assert groups[0].best_score == 3
    assert groups[1].best_score == 2
    assert [item.product.id for item in groups[1].items] == ["h1", "h2"]


def test_group_order_puts_samples_last():
    groups = group_by_vendor([result("s", SAMPLE, 9), result("r", REAL_LOW, 0)])
    assert [group.vendor.id for group in groups] == ["real-low", "sample"]


def test_group_by_vendor_empty():
    assert group_by_vendor([]) == []
