"""Process-resident service objects shared by all requests."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from extract_articles.extract_article import ArticleExtractor
from gateway_api.config import GatewayConfig
from generate_guidance.identity import IdentityVerifier
from generate_guidance.orchestrator import GuidanceOrchestrator
from generate_guidance.providers import GeminiProvider, GroqProvider, GuidanceProvider
from ingest_blogs.catalog import BlogCatalog, CrawlSettings
from resolve_images.resolve_image import ImageResolver

logger = logging.getLogger(__name__)


@dataclass
class GatewayServices:
    catalog: BlogCatalog
    images: ImageResolver
    articles: ArticleExtractor
    guidance: GuidanceOrchestrator
    identity: IdentityVerifier

    async def aclose(self) -> None:
        for provider in self.guidance.providers:
            close = getattr(provider, "aclose", None)
            if close is not None:
                await close()


def build_providers(config: GatewayConfig, client: httpx.AsyncClient) -> list[GuidanceProvider]:
    """Providers in configured order; unknown names are skipped."""
    settings = config.providers
    available = {
        "gemini": lambda: GeminiProvider(
            client,
            config.secrets.gemini_api_key,
            model=settings.gemini_model,
            temperature=settings.temperature,
        ),
        "groq": lambda: GroqProvider(
            config.secrets.groq_api_key,
            model=settings.groq_model,
            temperature=settings.temperature,
            timeout_seconds=settings.timeout_seconds,
        ),
    }
    providers = []
    for name in settings.order:
        factory = available.get(name)
        if factory is None:
            logger.warning("Unknown provider in config: %s", name)
            continue
        providers.append(factory())
    return providers


def build_services(config: GatewayConfig, client: httpx.AsyncClient) -> GatewayServices:
    feed = config.feed
    catalog = BlogCatalog(
        client,
        CrawlSettings(
            feed_url=feed.feed_url,
            page_param=feed.page_param,
            max_pages=feed.max_pages,
            site_url=feed.site_url,
            path_prefix=feed.path_prefix,
        ),
        ttl_seconds=config.cache.catalog_ttl_seconds,
    )
    return GatewayServices(
        catalog=catalog,
        images=ImageResolver(client, catalog, ttl_seconds=config.cache.image_ttl_seconds),
        articles=ArticleExtractor(client, catalog, ttl_seconds=config.cache.article_ttl_seconds),
        guidance=GuidanceOrchestrator(
            build_providers(config, client),
            max_input_chars=config.providers.max_input_chars,
        ),
        identity=IdentityVerifier(
            client, config.secrets.firebase_web_api_key, lookup_url=config.identity.lookup_url
        ),
    )
