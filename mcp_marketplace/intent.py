"""Heuristic natural-language query interpretation for material search."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import cached_property

from .models import NaturalQueryResult
from .tokenizer import iter_tokens

_DEFAULT_CATEGORY_WORDS: dict[str, tuple[str, ...]] = {
    "기계": (
        "모터",
        "감속기",
        "컨베이어",
        "유압",
        "윈치",
        "기계",
        "motor",
        "reducer",
        "conveyor",
        "hydraulic",
        "winch",
    ),
    "전기": (
        "인버터",
        "차단기",
        "분전",
        "배선",
        "케이블",
        "전기",
        "mcc",
        "inverter",
        "breaker",
        "cable",
        "wiring",
    ),
    "건축": (
        "시멘트",
        "철골",
        "패널",
        "건축",
        "단열",
        "방수",
        "cement",
        "panel",
        "insulation",
        "waterproof",
    ),
    "공구": (
        "드릴",
        "렌치",
        "절단기",
        "그라인더",
        "공구",
        "임팩",
        "drill",
        "wrench",
        "grinder",
    ),
    "계장": (
        "센서",
        "트랜스미터",
        "plc",
        "유량계",
        "계장",
        "계측",
        "sensor",
        "transmitter",
        "flowmeter",
    ),
    "기타": (
        "소모품",
        "안전",
        "작업등",
        "기타",
        "consumable",
        "safety",
    ),
}

_DEFAULT_STOP_WORDS: frozenset[str] = frozenset(
    {
        "업체",
        "찾아줘",
        "추천",
        "보여줘",
        "원해",
        "필요",
        "좀",
        "해줘",
        "vendor",
        "vendors",
        "supplier",
        "suppliers",
        "recommend",
        "please",
        "find",
        "show",
    }
)

_DEFAULT_UNIT_SUFFIXES: tuple[str, ...] = ("kw", "kva", "v", "a", "mm", "kg", "ton")


@dataclass(frozen=True)
class QueryDictionary:
    """Static configuration table driving query interpretation.

    Attributes:
        categories: Category label mapped to representative substrings
        stop_words: Conversational filler dropped from keywords
        unit_suffixes: Engineering units kept together with a leading number
    """

    categories: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(_DEFAULT_CATEGORY_WORDS)
    )
    stop_words: frozenset[str] = _DEFAULT_STOP_WORDS
    unit_suffixes: tuple[str, ...] = _DEFAULT_UNIT_SUFFIXES

    @cached_property
    def unit_pattern(self) -> re.Pattern[str] | None:
        if not self.unit_suffixes:
            return None
        alternatives = "|".join(re.escape(suffix.lower()) for suffix in self.unit_suffixes)
        return re.compile(rf"[0-9]+\s?(?:{alternatives})")


DEFAULT_DICTIONARY = QueryDictionary()


def extract_unit_phrases(text: str, dictionary: QueryDictionary = DEFAULT_DICTIONARY) -> list[str]:
    """Return number+unit phrases from ``text`` with inner whitespace removed.

    ``"75 kw"`` and ``"75kw"`` both come back as ``"75kw"``.
    """
    pattern = dictionary.unit_pattern
    if pattern is None:
        return []
    return ["".join(match.split()) for match in pattern.findall((text or "").lower())]


def infer_categories(
    keywords: list[str], dictionary: QueryDictionary = DEFAULT_DICTIONARY
) -> list[str]:
    """Categories whose representative words occur inside any keyword."""
    inferred: list[str] = []
    for category, words in dictionary.categories.items():
        if any(word in keyword for keyword in keywords for word in words):
            inferred.append(category)
    return inferred


def parse_natural_query(
    text: str, dictionary: QueryDictionary = DEFAULT_DICTIONARY
) -> NaturalQueryResult:
    """Extract keyword and category intent from an unstructured query.

    Args:
        text: Raw query such as ``"75kw 모터 인버터 업체 찾아줘"``
        dictionary: Category, stop-word and unit table to interpret with

    Returns:
        NaturalQueryResult with deduplicated keywords and inferred categories
    """
    keywords = [token for token in iter_tokens(text) if token not in dictionary.stop_words]
    for phrase in extract_unit_phrases(text, dictionary):
        if phrase not in keywords:
            keywords.append(phrase)

    return NaturalQueryResult(
        keywords=keywords,
        categories=infer_categories(keywords, dictionary),
    )
