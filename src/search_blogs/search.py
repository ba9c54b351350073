"""Token-overlap ranking over the cached catalog."""

from __future__ import annotations

from typing import Iterable, Sequence

from common.datetime import published_sort_key
from ingest_blogs.keywords import tokenize
from ingest_blogs.models import ArticleSummary

# Trust order: title > curated keywords > excerpt > URL
TITLE_WEIGHT = 6
KEYWORD_WEIGHT = 5
EXCERPT_WEIGHT = 3
LINK_WEIGHT = 1


def query_tokens(query: str | None) -> list[str]:
    """Unique query tokens, tokenized the same way as article keywords."""
    seen: set[str] = set()
    tokens = []
    for token in tokenize(query):
        if token not in seen:
            seen.add(token)
            tokens.append(token)
    return tokens


def score(article: ArticleSummary, tokens: Iterable[str]) -> int:
    title_tokens = set(tokenize(article.title))
    keyword_tokens = set(article.keywords)
    excerpt_tokens = set(tokenize(article.excerpt))
    link_tokens = set(tokenize(article.link))

    total = 0
    for token in tokens:
        if token in title_tokens:
            total += TITLE_WEIGHT
        if token in keyword_tokens:
            total += KEYWORD_WEIGHT
        if token in excerpt_tokens:
            total += EXCERPT_WEIGHT
        if token in link_tokens:
            total += LINK_WEIGHT
    return total


def search(catalog: Sequence[ArticleSummary], query: str | None) -> list[ArticleSummary]:
    """Rank the catalog against a free-text query, most relevant first.

    An empty query returns the catalog in its existing (newest-first) order.
    Zero-score articles are dropped; ties go to the more recent article.
    """
    if not query or not query.strip():
        return list(catalog)

    tokens = query_tokens(query)
    if not tokens:
        return []

    scored = [(score(article, tokens), article) for article in catalog]
    ranked = sorted(
        ((s, a) for s, a in scored if s > 0),
        key=lambda pair: (pair[0], published_sort_key(pair[1].published_at)),
        reverse=True,
    )
    return [article for _, article in ranked]
