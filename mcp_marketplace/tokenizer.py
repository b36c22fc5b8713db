"""Text normalisation into comparable search tokens."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

# Anything outside ASCII digits/letters, Hangul syllables and whitespace.
_NON_TOKEN_CHARS = re.compile(r"[^0-9a-z가-힣\s]")


def iter_tokens(text: str) -> Iterator[str]:
    """Yield lowercase tokens of ``text`` in first-seen order, without repeats.

    Args:
        text: Free text to tokenise

    Returns:
        Iterator over unique tokens
    """
    cleaned = _NON_TOKEN_CHARS.sub(" ", (text or "").lower())
    seen: set[str] = set()
    for token in cleaned.split():
        if token not in seen:
            seen.add(token)
            yield token


def tokenize(text: str) -> set[str]:
    """Return the set of lowercase tokens in ``text``.

    Punctuation and symbols become separators. No stemming and no stop-word
    removal happen here; an empty string gives an empty set.
    """
    return set(iter_tokens(text))


def tokenize_parts(parts: Iterable[str]) -> set[str]:
    """Tokenise several text fragments as if they were joined by spaces."""
    return tokenize(" ".join(parts))
