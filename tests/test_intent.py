"""Tests for natural-language query interpretation."""

from mcp_marketplace.intent import (
    DEFAULT_DICTIONARY,
    QueryDictionary,
    extract_unit_phrases,
    infer_categories,
    parse_natural_query,
)


def test_example_query_drops_stop_words_and_infers_categories():
    result = parse_natural_query("75kw 모터 인버터 업체 찾아줘")

    assert "업체" not in result.keywords
    assert "찾아줘" not in result.keywords
    assert "75kw" in result.keywords
    assert set(result.keywords) == {"75kw", "모터", "인버터"}
    assert "기계" in result.categories
    assert "전기" in result.categories


def test_interpretation_is_deterministic():
    query = "380V 케이블 50 mm 추천 좀 해줘"
    assert parse_natural_query(query) == parse_natural_query(query)


def test_unit_phrases_normalise_inner_space():
    assert extract_unit_phrases("75 kw") == ["75kw"]
    assert extract_unit_phrases("75kw") == ["75kw"]


def test_unit_phrases_cover_each_default_suffix():
    phrases = extract_unit_phrases("380V 50 mm 2 ton 100kva 20A 30kg")
    assert phrases == ["380v", "50mm", "2ton", "100kva", "20a", "30kg"]


def test_spaced_unit_phrase_is_added_alongside_split_tokens():
    result = parse_natural_query("75 kw 모터")
    assert result.keywords == ["75", "kw", "모터", "75kw"]
    assert result.categories == ["기계"]


def test_category_inference_uses_substring_match():
    assert infer_categories(["모터류"]) == ["기계"]
    assert infer_categories(["plc제어반"]) == ["계장"]


def test_category_order_follows_dictionary():
    result = parse_natural_query("드릴 인버터 모터")
    assert result.categories == ["기계", "전기", "공구"]


def test_english_filler_is_removed():
    result = parse_natural_query("please recommend motor vendors")
    assert result.keywords == ["motor"]
    assert result.categories == ["기계"]


def test_empty_or_unmatched_query_yields_empty_result():
    assert parse_natural_query("").keywords == []
    assert parse_natural_query("").categories == []

    unmatched = parse_natural_query("업체 찾아줘")
    assert unmatched.keywords == []
    assert unmatched.categories == []


def test_injected_dictionary_replaces_defaults():
    fixture = QueryDictionary(
        categories={"pumps": ("pump",)},
        stop_words=frozenset({"need"}),
        unit_suffixes=("bar",),
    )

    result = parse_natural_query("need 10 bar pumps 모터", fixture)

    assert result.keywords == ["10", "bar", "pumps", "모터", "10bar"]
    assert result.categories == ["pumps"]


def test_dictionary_without_units_extracts_no_phrases():
    fixture = QueryDictionary(unit_suffixes=())
    assert extract_unit_phrases("75kw", fixture) == []


def test_default_dictionary_has_every_search_category():
    assert set(DEFAULT_DICTIONARY.categories) == {"기계", "전기", "건축", "공구", "계장", "기타"}
