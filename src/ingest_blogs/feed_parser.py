"""Turn one fetched feed page into article summaries.

Syndication entries are read with feedparser. Pages that carry no entries
(the site served its HTML listing instead) fall back to scraping repeated
card structures with lxml.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Optional

import feedparser

from common.html_meta import parse_html
from common.text import clean_text, strip_tags, collapse_whitespace, truncate
from common.urls import DEFAULT_SITE_URL, DEFAULT_PATH_PREFIX, absolutize, canonicalize_link, is_logo_asset
from ingest_blogs.keywords import build_keywords
from ingest_blogs.models import ArticleSummary

logger = logging.getLogger(__name__)

EXCERPT_CHARS = 260

_INLINE_IMG_RE = re.compile(r"<img\b[^>]*?\bsrc\s*=\s*[\"']([^\"']+)[\"']", re.IGNORECASE)
_CARD_CLASSES = ("post", "card", "entry", "post-card", "blog-card", "blog-post", "blog-item", "post-item")
_CARD_XPATH = "//article | " + " | ".join(
    f"//*[contains(concat(' ', normalize-space(@class), ' '), ' {name} ')]" for name in _CARD_CLASSES
)


def parse_feed_page(
    raw_body: str | bytes,
    site_url: str = DEFAULT_SITE_URL,
    path_prefix: str = DEFAULT_PATH_PREFIX,
) -> list[ArticleSummary]:
    """Parse one feed page; syndication records first, HTML cards otherwise."""
    if not raw_body:
        return []

    items = _parse_syndication(raw_body, site_url, path_prefix)
    if items:
        return items

    items = _parse_html_cards(raw_body, site_url, path_prefix)
    if items:
        logger.info("Feed page had no syndication entries; scraped %d cards", len(items))
    return items


def _parse_syndication(raw_body: str | bytes, site_url: str, path_prefix: str) -> list[ArticleSummary]:
    # feedparser treats a str argument as a possible URL or filename
    data = raw_body.encode("utf-8") if isinstance(raw_body, str) else raw_body
    feed = feedparser.parse(data)
    results: dict[str, ArticleSummary] = {}

    for entry in feed.entries:
        try:
            article = _parse_entry(entry, site_url, path_prefix)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Failed to parse feed entry: %s", e)
            continue
        if article is not None and article.link not in results:
            results[article.link] = article

    return list(results.values())


def _parse_entry(entry: Any, site_url: str, path_prefix: str) -> Optional[ArticleSummary]:
    """Parse a single syndication entry into an ArticleSummary."""
    link = canonicalize_link(entry.get("link"), site_url, path_prefix)
    if link is None:
        return None

    title = clean_text(entry.get("title")) or ""
    if not title:
        return None

    body_html = _entry_content(entry)
    summary_html = entry.get("summary") or entry.get("description") or ""
    excerpt_source = strip_tags(summary_html) or strip_tags(body_html)
    excerpt = truncate(collapse_whitespace(excerpt_source), EXCERPT_CHARS)

    categories = [
        collapse_whitespace(strip_tags(tag.get("term") or tag.get("label") or ""))
        for tag in entry.get("tags") or []
    ]

    image_url = _entry_image(entry, body_html, summary_html, link) or ""
    published_at = (entry.get("published") or entry.get("updated") or "").strip()

    keywords = build_keywords(
        title=title,
        excerpt=excerpt,
        body=collapse_whitespace(strip_tags(body_html)),
        categories=categories,
    )

    return ArticleSummary(
        title=title,
        link=link,
        published_at=published_at,
        excerpt=excerpt,
        image_url=image_url,
        keywords=keywords,
    )


def _entry_content(entry: Any) -> str:
    content = entry.get("content") or []
    values = [c.get("value", "") for c in content if isinstance(c, dict)]
    return "\n".join(v for v in values if v)


def _entry_image(entry: Any, body_html: str, summary_html: str, base_url: str) -> Optional[str]:
    """Rich-media tag, then enclosure, then first inline image; logos rejected."""
    candidates: list[Optional[str]] = []
    for media in (entry.get("media_content") or []) + (entry.get("media_thumbnail") or []):
        candidates.append(media.get("url"))

    for enclosure in _enclosures(entry):
        if (enclosure.get("type") or "image/").lower().startswith("image/"):
            candidates.append(enclosure.get("href") or enclosure.get("url"))

    for markup in (body_html, summary_html):
        candidates.extend(_INLINE_IMG_RE.findall(markup or ""))

    return _first_usable_image(candidates, base_url)


def _enclosures(entry: Any) -> list[dict]:
    enclosures = list(entry.get("enclosures") or [])
    for link in entry.get("links") or []:
        if link.get("rel") == "enclosure" and link not in enclosures:
            enclosures.append(link)
    return enclosures


def _first_usable_image(candidates: Iterable[Optional[str]], base_url: str) -> Optional[str]:
    for candidate in candidates:
        url = absolutize(clean_text(candidate), base_url)
        if url and not is_logo_asset(url):
            return url
    return None


def _parse_html_cards(raw_body: str | bytes, site_url: str, path_prefix: str) -> list[ArticleSummary]:
    tree = parse_html(raw_body)
    if tree is None:
        return []

    cards = [c for c in tree.xpath(_CARD_XPATH) if _card_link(c, site_url, path_prefix)]
    card_set = set(cards)
    # Keep innermost cards only; wrappers would repeat their first child
    innermost = [c for c in cards if not any(d in card_set for d in c.iterdescendants())]

    results: dict[str, ArticleSummary] = {}
    for card in innermost:
        article = _parse_card(card, site_url, path_prefix)
        if article is not None and article.link not in results:
            results[article.link] = article
    return list(results.values())


def _card_link(card: Any, site_url: str, path_prefix: str) -> Optional[tuple[str, str]]:
    for anchor in card.iter("a"):
        link = canonicalize_link(anchor.get("href"), site_url, path_prefix)
        if link:
            return link, anchor.get("title") or anchor.text_content()
    return None


def _parse_card(card: Any, site_url: str, path_prefix: str) -> Optional[ArticleSummary]:
    found = _card_link(card, site_url, path_prefix)
    if found is None:
        return None
    link, anchor_text = found

    headings = card.xpath(".//h1 | .//h2 | .//h3 | .//h4")
    title = clean_text(headings[0].text_content() if headings else anchor_text) or ""
    if not title:
        return None

    paragraphs = [clean_text(p.text_content()) for p in card.iter("p")]
    paragraphs = [p for p in paragraphs if p]
    excerpt = truncate(paragraphs[0], EXCERPT_CHARS) if paragraphs else ""

    images = [img.get("src") or img.get("data-src") for img in card.iter("img")]
    image_url = _first_usable_image(images, site_url) or ""

    times = card.xpath(".//time")
    published_at = ""
    if times:
        published_at = (times[0].get("datetime") or times[0].text_content() or "").strip()

    categories = [
        collapse_whitespace(el.text_content())
        for el in card.xpath(".//*[contains(@class, 'category') or contains(@class, 'tag')]")
    ]

    return ArticleSummary(
        title=title,
        link=link,
        published_at=published_at,
        excerpt=excerpt,
        image_url=image_url,
        keywords=build_keywords(
            title=title,
            excerpt=excerpt,
            body=" ".join(paragraphs),
            categories=categories,
        ),
    )
