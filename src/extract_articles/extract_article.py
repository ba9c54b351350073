"""On-demand full-body extraction for one blog article."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import httpx

from common.cache import TTLCache
from common.errors import GatewayError, NotFound, UpstreamUnavailable
from common.html_meta import meta_content, page_image_candidates, parse_html
from common.text import clean_text, paragraphs_to_html, truncate
from common.urls import article_id_from_link
from extract_articles.strategies import extract_paragraphs, json_ld_blocks
from extract_articles.tree_walk import find_first
from ingest_blogs.catalog import BlogCatalog
from ingest_blogs.feed_parser import EXCERPT_CHARS
from ingest_blogs.keywords import build_keywords
from ingest_blogs.models import ArticleBody, ArticleSummary

logger = logging.getLogger(__name__)


class ArticleExtractor:
    """Fetches, extracts and caches article bodies keyed by canonical link."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        catalog: BlogCatalog,
        ttl_seconds: float = 20 * 60,
        clock: Callable[[], float] | None = None,
    ):
        self.client = client
        self.catalog = catalog
        cache_kwargs = {"clock": clock} if clock else {}
        self._cache: TTLCache[ArticleBody] = TTLCache(ttl_seconds, name="article", **cache_kwargs)

    async def extract_article(self, link: str | None) -> ArticleBody:
        canonical = self.catalog.canonicalize(link)
        if canonical is None:
            raise NotFound("Unknown blog link", details=f"Not a source-site article link: {link}")
        return await self._cache.get_or_load(canonical, lambda: self._extract(canonical))

    async def _summary(self, link: str) -> Optional[ArticleSummary]:
        try:
            return await self.catalog.find(link)
        except GatewayError as e:
            logger.warning("Catalog unavailable while extracting %s: %s", link, e)
            return None

    async def _fetch(self, link: str) -> tuple[str, str]:
        try:
            response = await self.client.get(link)
        except httpx.HTTPError as e:
            raise UpstreamUnavailable("Article fetch failed", str(e)) from e
        if response.status_code == 404:
            raise NotFound("Article not found", details=link)
        if not response.is_success:
            raise UpstreamUnavailable("Article fetch failed", f"HTTP {response.status_code} for {link}")
        return response.text, str(response.url)

    async def _extract(self, link: str) -> ArticleBody:
        summary = await self._summary(link)
        html, final_url = await self._fetch(link)

        paragraphs, strategy = extract_paragraphs(html)
        logger.info("Extracted %d paragraphs from %s via %s", len(paragraphs), link, strategy)

        tree = parse_html(html)
        return build_article_body(link, final_url, tree, paragraphs, summary)


def build_article_body(
    link: str,
    page_url: str,
    tree: Any,
    paragraphs: list[str],
    summary: Optional[ArticleSummary],
) -> ArticleBody:
    """Merge page metadata, extracted paragraphs and the catalog summary."""
    structured = json_ld_blocks(tree) if tree is not None else []

    title = ""
    published_at = ""
    description = ""
    image_url = ""
    if tree is not None:
        title = (
            meta_content(tree, "og:title", "twitter:title")
            or find_first(structured, ("headline",))
            or clean_text(" ".join(tree.xpath("//title//text()")))
            or ""
        )
        published_at = (
            meta_content(tree, "article:published_time", "datePublished", "date")
            or find_first(structured, ("datePublished", "dateCreated"))
            or ""
        )
        description = meta_content(tree, "og:description", "description", "twitter:description")
        candidates = page_image_candidates(tree, page_url)
        image_url = candidates[0] if candidates else ""

    if summary is not None:
        title = title or summary.title
        published_at = published_at or summary.published_at
        image_url = summary.image_url or image_url

    if not paragraphs and not title:
        raise NotFound("Article has no readable content", details=link)

    excerpt_source = (summary.excerpt if summary else "") or description or (paragraphs[0] if paragraphs else "")
    excerpt = truncate(clean_text(excerpt_source) or "", EXCERPT_CHARS)
    if not paragraphs and excerpt:
        paragraphs = [excerpt]

    keywords = summary.keywords if summary and summary.keywords else ()
    if not keywords:
        keywords = build_keywords(title=title, excerpt=excerpt, body=" ".join(paragraphs))

    return ArticleBody(
        id=article_id_from_link(link),
        link=link,
        title=clean_text(title) or "",
        published_at=published_at,
        excerpt=excerpt,
        image_url=image_url,
        keywords=tuple(keywords),
        paragraphs=tuple(paragraphs),
        body_html=paragraphs_to_html(paragraphs),
    )
