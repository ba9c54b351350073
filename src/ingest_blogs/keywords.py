"""Tokenization and keyword derivation for blog articles."""

from __future__ import annotations

import re
from typing import Iterable

MAX_KEYWORDS = 36
BODY_KEYWORD_CHARS = 2500
MIN_TOKEN_LENGTH = 3

STOP_WORDS = frozenset({
    "about", "above", "after", "again", "against", "all", "also", "and", "any", "are",
    "because", "been", "before", "being", "below", "between", "both", "but", "can",
    "could", "did", "does", "doing", "down", "during", "each", "every", "few", "for",
    "from", "further", "get", "gets", "had", "has", "have", "having", "her", "here",
    "hers", "him", "his", "how", "into", "its", "itself", "just", "know", "let", "like",
    "make", "many", "more", "most", "much", "must", "need", "not", "now", "off", "once",
    "one", "only", "other", "our", "ours", "out", "over", "own", "read", "same", "she",
    "should", "some", "such", "than", "that", "the", "their", "theirs", "them", "then",
    "there", "these", "they", "this", "those", "through", "too", "under", "until", "very",
    "via", "was", "way", "ways", "were", "what", "when", "where", "which", "while", "who",
    "whom", "why", "will", "with", "would", "you", "your", "yours", "yourself",
    "blog", "skids", "http", "https", "www", "com",
})

STAGE_WORDS = (
    "newborn", "neonate", "infant", "infancy", "baby", "babies", "toddler", "toddlers",
    "preschool", "preschooler", "kindergarten", "school-age", "tween", "preteen",
    "teen", "teenager", "adolescent", "adolescence", "puberty",
)

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_STAGE_RE = re.compile(r"\b(" + "|".join(re.escape(w) for w in STAGE_WORDS) + r")\b", re.IGNORECASE)
_AGE_RE = re.compile(r"\b(\d{1,2})\s*[- ]?\s*(months?|mos?|years?|yrs?)\b", re.IGNORECASE)


def tokenize(text: str | None) -> list[str]:
    """Lower-case, split on non-alphanumerics, drop short and stop-word tokens."""
    if not text:
        return []
    tokens = _NON_ALNUM_RE.sub(" ", text.lower()).split()
    return [t for t in tokens if len(t) >= MIN_TOKEN_LENGTH and t not in STOP_WORDS]


def normalize_category(category: str) -> str:
    return " ".join(_NON_ALNUM_RE.sub(" ", category.lower()).split())


def extract_age_signals(text: str | None) -> list[str]:
    """Developmental-stage words and `N months/years` mentions, normalized."""
    if not text:
        return []
    signals = [m.group(1).lower() for m in _STAGE_RE.finditer(text)]
    for m in _AGE_RE.finditer(text):
        unit = "months" if m.group(2).lower().startswith("mo") else "years"
        signals.append(f"{int(m.group(1))}-{unit}")
    return signals


def _unique(values: Iterable[str], limit: int) -> list[str]:
    seen: set[str] = set()
    result = []
    for value in values:
        if not value or value in seen:
            continue
        seen.add(value)
        result.append(value)
        if len(result) >= limit:
            break
    return result


def build_keywords(
    title: str = "",
    excerpt: str = "",
    body: str = "",
    categories: Iterable[str] = (),
    limit: int = MAX_KEYWORDS,
) -> tuple[str, ...]:
    """Derive the keyword set for an article.

    Age signals are ranked right after the curated categories so that long
    bodies cannot push them past the cap.
    """
    categories = [c for c in categories if c and c.strip()]
    body = (body or "")[:BODY_KEYWORD_CHARS]
    combined = " ".join([title or "", excerpt or "", body, " ".join(categories)])

    candidates: list[str] = []
    candidates.extend(normalize_category(c) for c in categories)
    for category in categories:
        candidates.extend(tokenize(category))
    candidates.extend(extract_age_signals(combined))
    candidates.extend(tokenize(title))
    candidates.extend(tokenize(excerpt))
    candidates.extend(tokenize(body))
    return tuple(_unique(candidates, limit))
