"""Paginated feed crawl behind a time-boxed in-memory cache."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from common.cache import TTLCache
from common.datetime import published_sort_key
from common.errors import UpstreamUnavailable
from common.urls import DEFAULT_PATH_PREFIX, DEFAULT_SITE_URL, canonicalize_link
from ingest_blogs.feed_parser import parse_feed_page
from ingest_blogs.models import ArticleSummary

logger = logging.getLogger(__name__)

_CATALOG_KEY = "catalog"


@dataclass
class CrawlSettings:
    feed_url: str = "https://skids.clinic/blog/feed/"
    page_param: str = "paged"
    max_pages: int = 20
    site_url: str = DEFAULT_SITE_URL
    path_prefix: str = DEFAULT_PATH_PREFIX


class BlogCatalog:
    """Owns the article-summary catalog and its refresh policy."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: CrawlSettings | None = None,
        ttl_seconds: float = 15 * 60,
        clock: Callable[[], float] | None = None,
    ):
        self.client = client
        self.settings = settings or CrawlSettings()
        cache_kwargs = {"clock": clock} if clock else {}
        self._cache: TTLCache[tuple[ArticleSummary, ...]] = TTLCache(ttl_seconds, name="catalog", **cache_kwargs)

    async def get_catalog(self, force_refresh: bool = False) -> tuple[ArticleSummary, ...]:
        """Return every known article, newest first."""
        if force_refresh:
            self.invalidate()
        return await self._cache.get_or_load(_CATALOG_KEY, self._crawl)

    def invalidate(self) -> None:
        self._cache.invalidate(_CATALOG_KEY)

    async def find(self, link: str, force_refresh: bool = False) -> Optional[ArticleSummary]:
        """Look up the summary for a canonical link."""
        for article in await self.get_catalog(force_refresh=force_refresh):
            if article.link == link:
                return article
        return None

    def canonicalize(self, link: str | None) -> Optional[str]:
        return canonicalize_link(link, self.settings.site_url, self.settings.path_prefix)

    async def _fetch_page(self, page: int) -> bytes:
        params = {self.settings.page_param: page} if page > 1 else None
        response = await self.client.get(self.settings.feed_url, params=params)
        response.raise_for_status()
        return response.content

    async def _crawl(self) -> tuple[ArticleSummary, ...]:
        """Crawl feed pages until empty, duplicate, or the page ceiling."""
        merged: dict[str, ArticleSummary] = {}
        stale_pages = 0

        for page in range(1, self.settings.max_pages + 1):
            try:
                body = await self._fetch_page(page)
            except httpx.HTTPError as e:
                if page == 1:
                    raise UpstreamUnavailable("Blog feed unavailable", str(e)) from e
                logger.warning("Feed page %d failed, keeping %d articles: %s", page, len(merged), e)
                break

            items = parse_feed_page(body, self.settings.site_url, self.settings.path_prefix)
            if not items:
                if page == 1:
                    raise UpstreamUnavailable("Blog feed returned no articles")
                break

            new_links = 0
            for item in items:
                if item.link not in merged:
                    merged[item.link] = item
                    new_links += 1

            # A feed that ignores the page parameter keeps serving page 1
            stale_pages = stale_pages + 1 if new_links == 0 else 0
            if stale_pages >= 2:
                logger.info("Feed stopped yielding new links at page %d", page)
                break

        articles = sorted(merged.values(), key=lambda a: published_sort_key(a.published_at), reverse=True)
        logger.info("Crawled %d articles from %s", len(articles), self.settings.feed_url)
        return tuple(articles)
