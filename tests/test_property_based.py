"""
Property-based tests for the marketplace search core using Hypothesis.

Generated queries and catalogues exercise ordering, visibility and
pagination rules that must hold for every input.
"""

from hypothesis import given, settings, strategies as st
from hypothesis.strategies import composite

from factories import NOW, build_snapshot, make_product, make_vendor
from mcp_marketplace.intent import parse_natural_query
from mcp_marketplace.models import MarketSnapshot, ProductResult, SearchQuery
from mcp_marketplace.pagination import ELLIPSIS, build_page_items, paginate
from mcp_marketplace.rerank import rank_results
from mcp_marketplace.scoring import overlap_score, product_token_set, vendor_token_set
from mcp_marketplace.search import build_query_terms, run_search, search_products
from mcp_marketplace.tokenizer import tokenize

WORDS = ["모터", "인버터", "75kw", "패널", "차단기", "감속기", "펌프", "드릴", "케이블", "센서"]
CATEGORIES = ["기계", "전기", "건축", "공구", "계장", "기타"]


@composite
def query_text(draw):
    """Query text mixing catalogue words, stop words and punctuation."""
    parts = draw(
        st.lists(
            st.sampled_from(WORDS + ["업체", "찾아줘", "추천", "!", ",", "380 v", "50mm"]),
            max_size=6,
        )
    )
    return " ".join(parts)


@composite
def catalogue(draw):
    """Random snapshot of real, sample and blocked vendors with products."""
    vendor_count = draw(st.integers(min_value=1, max_value=6))
    vendors = []
    for index in range(vendor_count):
        blocked = draw(st.booleans())
        vendors.append(
            make_vendor(
                f"v{index}",
                company_name=f"업체{index}",
                categories=draw(st.lists(st.sampled_from(CATEGORIES), min_size=1, max_size=2)),
                avg_rating=draw(st.sampled_from([0.0, 2.5, 3.0, 4.0, 4.5, 5.0])),
                is_sample=draw(st.booleans()),
                status="blocked" if blocked else "active",
            )
        )

    product_count = draw(st.integers(min_value=0, max_value=25))
    products = [
        make_product(
            f"p{index}",
            f"v{draw(st.integers(min_value=0, max_value=vendor_count - 1))}",
            name=" ".join(draw(st.lists(st.sampled_from(WORDS), min_size=1, max_size=3))),
            category=draw(st.sampled_from(CATEGORIES)),
        )
        for index in range(product_count)
    ]
    return MarketSnapshot(vendors=vendors, products=products)


class TestTokenizerProperties:
    @given(st.text(max_size=200))
    def test_tokenize_is_idempotent(self, text: str):
        tokens = tokenize(text)
        assert tokenize(" ".join(sorted(tokens))) == tokens

    @given(st.text(max_size=200))
    def test_tokens_are_lowercase_and_nonempty(self, text: str):
        for token in tokenize(text):
            assert token
            assert token == token.lower()
            assert not any(ch.isspace() for ch in token)


class TestInterpreterProperties:
    @given(query_text())
    def test_interpretation_is_deterministic(self, text: str):
        assert parse_natural_query(text) == parse_natural_query(text)

    @given(query_text())
    def test_keywords_never_contain_stop_words(self, text: str):
        keywords = parse_natural_query(text).keywords
        assert "업체" not in keywords
        assert "찾아줘" not in keywords
        assert len(keywords) == len(set(keywords))


class TestSearchProperties:
    @settings(max_examples=50, deadline=None)
    @given(catalogue(), query_text())
    def test_blocked_vendors_never_visible_to_non_admin(self, snapshot, text):
        results = search_products(snapshot, SearchQuery(q=text), now=NOW)
        assert all(item.vendor.status != "blocked" for item in results)

    @settings(max_examples=50, deadline=None)
    @given(catalogue(), query_text(), st.sampled_from(["업체0", "업체1", "기계", "없음"]))
    def test_every_result_matches_each_non_empty_axis(self, snapshot, text, vendor_text):
        query = SearchQuery(q=text, vendor_query=vendor_text)
        terms = build_query_terms(query)
        for item in search_products(snapshot, query, now=NOW):
            if terms.product_terms:
                assert overlap_score(terms.product_terms, product_token_set(item.product, item.vendor)) >= 1
            assert overlap_score(terms.vendor_terms, vendor_token_set(item.vendor)) >= 1

    @settings(max_examples=50, deadline=None)
    @given(catalogue(), query_text())
    def test_sample_vendors_rank_after_real_ones(self, snapshot, text):
        flags = [item.vendor.is_sample for item in search_products(snapshot, SearchQuery(q=text), now=NOW)]
        assert flags == sorted(flags)

    @settings(max_examples=50, deadline=None)
    @given(catalogue(), query_text())
    def test_scores_descend_within_each_partition(self, snapshot, text):
        results = search_products(snapshot, SearchQuery(q=text), now=NOW)
        for sample in (False, True):
            scores = [item.score for item in results if item.vendor.is_sample is sample]
            assert scores == sorted(scores, reverse=True)

    @settings(max_examples=50, deadline=None)
    @given(catalogue(), query_text(), st.sampled_from(CATEGORIES), st.sampled_from([0, 3, 4.5]))
    def test_adding_filters_never_adds_results(self, snapshot, text, category, min_rating):
        loose = search_products(snapshot, SearchQuery(q=text), now=NOW)
        strict = search_products(
            snapshot, SearchQuery(q=text, category=category, min_rating=min_rating), now=NOW
        )
        loose_ids = {item.product.id for item in loose}
        assert {item.product.id for item in strict} <= loose_ids

    @settings(max_examples=50, deadline=None)
    @given(catalogue(), query_text())
    def test_views_agree_on_vendor_set(self, snapshot, text):
        query = SearchQuery(q=text)
        products = run_search(snapshot, query, view="product", page_size=1000, now=NOW)
        vendors = run_search(snapshot, query, view="vendor", page_size=1000, now=NOW)

        assert {item.vendor.id for item in products.results} == {
            group.vendor.id for group in vendors.groups
        }
        assert products.total_vendors == vendors.total_vendors

    @given(query_text())
    def test_search_is_pure(self, text):
        snapshot = build_snapshot()
        first = search_products(snapshot, SearchQuery(q=text), now=NOW)
        second = search_products(snapshot, SearchQuery(q=text), now=NOW)
        assert first == second

    @given(st.lists(st.booleans(), max_size=10))
    def test_rank_is_stable_for_equal_keys(self, flags):
        vendor = make_vendor("same", avg_rating=3.0)
        results = [
            ProductResult(product=make_product(f"p{i}", "same"), vendor=vendor, score=1)
            for i, _ in enumerate(flags)
        ]
        assert rank_results(results) == results


class TestPaginationProperties:
    @given(st.integers(min_value=0, max_value=5000), st.integers(min_value=-10, max_value=1000))
    def test_page_is_always_in_range(self, total, requested):
        window = paginate(total, 9, requested)
        assert 1 <= window.current_page <= window.total_pages

    @given(st.integers(min_value=1, max_value=300), st.data())
    def test_window_shape(self, total_pages, data):
        current = data.draw(st.integers(min_value=1, max_value=total_pages))
        items = build_page_items(current, total_pages, 5)

        numbers = [item for item in items if item != ELLIPSIS]
        assert numbers[0] == 1
        assert numbers[-1] == total_pages
        assert current in numbers
        assert numbers == sorted(set(numbers))
        # Markers never sit next to each other
        for left, right in zip(items, items[1:]):
            assert not (left == ELLIPSIS and right == ELLIPSIS)
        assert len(numbers) <= 7
