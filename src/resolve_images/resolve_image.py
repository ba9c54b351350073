"""Resolve a representative image for a blog article.

Resolution order, each step tried only when the previous one yields nothing
usable (empty, logo-like, or not actually an image):

1. previously resolved image URL (image cache)
2. image captured in the catalog summary
3. the same after forcing a catalog refresh (upstream image URLs rotate)
4. og:image / twitter:image / first inline image of the article page

The candidate's bytes are proxied through only when the upstream declares an
image content type. When everything fails a static placeholder is returned,
so a valid article link always yields an image.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AsyncIterator, Callable

import httpx

from common.cache import TTLCache
from common.errors import GatewayError, NotFound
from common.html_meta import page_image_candidates, parse_html
from common.urls import is_logo_asset
from ingest_blogs.catalog import BlogCatalog
from resolve_images.placeholder import PLACEHOLDER_CACHE_CONTROL, PLACEHOLDER_CONTENT_TYPE, PLACEHOLDER_SVG

logger = logging.getLogger(__name__)

IMAGE_CACHE_CONTROL = "public, max-age=21600"


@dataclass(frozen=True)
class ImageResult:
    body: bytes
    content_type: str
    cache_control: str
    source: str
    url: str = ""

    @property
    def is_placeholder(self) -> bool:
        return self.source == "placeholder"


def placeholder_image() -> ImageResult:
    return ImageResult(
        body=PLACEHOLDER_SVG,
        content_type=PLACEHOLDER_CONTENT_TYPE,
        cache_control=PLACEHOLDER_CACHE_CONTROL,
        source="placeholder",
    )


class ImageUnavailable(Exception):
    """No tier produced a usable image."""


class ImageResolver:
    """Resolves and proxies article images, caching the resolved URL per link."""

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
        self._cache: TTLCache[str] = TTLCache(ttl_seconds, name="image", **cache_kwargs)

    async def resolve_image(self, link: str | None) -> ImageResult:
        canonical = self.catalog.canonicalize(link)
        if canonical is None:
            raise NotFound("Unknown blog link", details=f"Not a source-site article link: {link}")

        cached_url = self._cache.get(canonical)
        if cached_url:
            result = await self._proxy(cached_url, "cache")
            if result is not None:
                return result
            self._cache.invalidate(canonical)

        located: dict[str, ImageResult] = {}

        async def locate() -> str:
            result = await self._locate(canonical)
            located["result"] = result
            return result.url

        try:
            url = await self._cache.get_or_load(canonical, locate)
        except ImageUnavailable:
            logger.info("No image for %s, serving placeholder", canonical)
            return placeholder_image()

        if "result" in located:
            return located["result"]
        # Joined another request's lookup; fetch the bytes it settled on
        return await self._proxy(url, "cache") or placeholder_image()

    async def _locate(self, link: str) -> ImageResult:
        tried: set[str] = set()
        async for source, candidates in self._candidate_tiers(link):
            for url in candidates:
                if not url or url in tried or is_logo_asset(url):
                    continue
                tried.add(url)
                result = await self._proxy(url, source)
                if result is not None:
                    return result
        raise ImageUnavailable(link)

    async def _candidate_tiers(self, link: str) -> AsyncIterator[tuple[str, list[str]]]:
        yield "catalog", await self._catalog_candidates(link, force_refresh=False)
        yield "catalog-refresh", await self._catalog_candidates(link, force_refresh=True)
        yield "page", await self._page_candidates(link)

    async def _catalog_candidates(self, link: str, force_refresh: bool) -> list[str]:
        try:
            summary = await self.catalog.find(link, force_refresh=force_refresh)
        except GatewayError as e:
            logger.warning("Catalog unavailable while resolving image for %s: %s", link, e)
            return []
        if summary is None or not summary.image_url:
            return []
        return [summary.image_url]

    async def _page_candidates(self, link: str) -> list[str]:
        try:
            response = await self.client.get(link)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Article page fetch failed for %s: %s", link, e)
            return []
        tree = parse_html(response.text)
        if tree is None:
            return []
        return page_image_candidates(tree, str(response.url))

    async def _proxy(self, url: str, source: str) -> ImageResult | None:
        """Fetch candidate bytes; None unless the upstream serves an image."""
        try:
            response = await self.client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            # IDNA host failures surface as ValueError, not HTTPError
            logger.warning("Image fetch failed for %s: %s", url, e)
            return None

        content_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
        if not response.is_success or not content_type.startswith("image/") or not response.content:
            logger.info("Rejected image candidate %s (status %d, type %r)", url, response.status_code, content_type)
            return None

        return ImageResult(
            body=response.content,
            content_type=content_type,
            cache_control=IMAGE_CACHE_CONTROL,
            source=source,
            url=url,
        )
