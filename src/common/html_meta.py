"""Page-level HTML helpers: parsing, meta tags, representative images."""

from __future__ import annotations

import logging
from typing import Any, Optional

from lxml import etree
from lxml import html as lxml_html

from common.text import collapse_whitespace
from common.urls import absolutize, is_logo_asset

logger = logging.getLogger(__name__)


def parse_html(markup: str | bytes | None) -> Optional[Any]:
    """Parse a page into an lxml tree; None for empty or unparseable input."""
    if not markup:
        return None
    text = markup.decode("utf-8", "ignore") if isinstance(markup, bytes) else markup
    if not text.strip():
        return None
    try:
        return lxml_html.fromstring(markup)
    except (etree.ParserError, ValueError) as e:
        logger.warning("Unparseable HTML: %s", e)
        return None


def meta_content(tree: Any, *names: str) -> str:
    """First non-empty `content` of a <meta> whose property or name matches, in `names` order."""
    for name in names:
        for attr in ("property", "name", "itemprop"):
            for el in tree.xpath(f"//meta[@{attr}=$value]", value=name):
                content = collapse_whitespace(el.get("content"))
                if content:
                    return content
    return ""


def page_image_candidates(tree: Any, base_url: str) -> list[str]:
    """og:image, then twitter:image, then the first non-logo inline image."""
    candidates: list[str] = []
    for names in (("og:image", "og:image:url", "og:image:secure_url"), ("twitter:image", "twitter:image:src")):
        url = absolutize(meta_content(tree, *names), base_url)
        if url and not is_logo_asset(url):
            candidates.append(url)

    for img in tree.iter("img"):
        src = img.get("src") or img.get("data-src") or img.get("data-lazy-src")
        url = absolutize(src, base_url)
        if url and not is_logo_asset(url):
            candidates.append(url)
            break
    return candidates
