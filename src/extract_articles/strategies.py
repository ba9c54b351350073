"""Body extraction strategies, tried in order until one yields paragraphs.

1. JSON-LD blocks
2. framework hydration blobs (__NEXT_DATA__, window.__NUXT__ and friends)
3. paragraph blocks inside the primary content container
4. visible page text split into sentence chunks
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Optional

import trafilatura
from lxml import etree
from readability import Document

from common.html_meta import parse_html
from extract_articles.paragraphs import element_blocks, filter_paragraphs, split_sentences, split_text_value
from extract_articles.tree_walk import walk_strings

logger = logging.getLogger(__name__)

CONTAINER_XPATHS = (
    "//*[@itemprop='articleBody']",
    "//*[contains(@class, 'entry-content') or contains(@class, 'post-content')"
    " or contains(@class, 'article-body') or contains(@class, 'blog-content')]",
    "//article",
    "//main",
)

_STATE_ASSIGN_RE = re.compile(
    r"window\.__(?:NUXT|INITIAL_STATE|APOLLO_STATE|PRELOADED_STATE)__\s*=\s*(\{.*\})\s*;?\s*$",
    re.DOTALL,
)


def json_ld_blocks(tree: Any) -> list[Any]:
    """Decoded `application/ld+json` payloads; malformed blocks are skipped."""
    blocks = []
    for script in tree.xpath("//script[@type='application/ld+json']"):
        data = _loads(script.text)
        if data is not None:
            blocks.append(data)
    return blocks


def framework_blobs(tree: Any) -> list[Any]:
    blobs = []
    for script in tree.xpath("//script[@id='__NEXT_DATA__' or @id='__NUXT_DATA__' or @type='application/json']"):
        data = _loads(script.text)
        if data is not None:
            blobs.append(data)
    for script in tree.xpath("//script[not(@src)]"):
        match = _STATE_ASSIGN_RE.search((script.text or "").strip())
        if match:
            data = _loads(match.group(1))
            if data is not None:
                blobs.append(data)
    return blobs


def _loads(text: Optional[str]) -> Any:
    if not text or not text.strip():
        return None
    try:
        return json.loads(text)
    except ValueError:
        return None


def _paragraphs_from_structured(payloads: list[Any]) -> list[str]:
    blocks: list[str] = []
    for payload in payloads:
        for value in walk_strings(payload):
            blocks.extend(split_text_value(value))
    return filter_paragraphs(blocks)


def from_json_ld(tree: Any, html: str) -> list[str]:
    return _paragraphs_from_structured(json_ld_blocks(tree))


def from_framework_data(tree: Any, html: str) -> list[str]:
    return _paragraphs_from_structured(framework_blobs(tree))


def from_content_container(tree: Any, html: str) -> list[str]:
    """Paragraph blocks of the primary container, readability's pick, or the whole page."""
    for xpath in CONTAINER_XPATHS:
        for container in tree.xpath(xpath):
            paragraphs = filter_paragraphs(element_blocks(container))
            if paragraphs:
                return paragraphs

    try:
        summary = parse_html(Document(html).summary())
    except (etree.ParserError, ValueError, TypeError) as e:
        logger.warning("readability failed: %s", e)
        summary = None
    if summary is not None:
        paragraphs = filter_paragraphs(element_blocks(summary))
        if paragraphs:
            return paragraphs

    return filter_paragraphs(element_blocks(tree))


def from_visible_text(tree: Any, html: str) -> list[str]:
    text = trafilatura.extract(html) if html else None
    if not text:
        for el in tree.xpath("//script | //style | //noscript"):
            el.drop_tree()
        text = tree.text_content()
    return filter_paragraphs(split_sentences(text or ""))


STRATEGIES: tuple[tuple[str, Callable[[Any, str], list[str]]], ...] = (
    ("json-ld", from_json_ld),
    ("framework-data", from_framework_data),
    ("content-container", from_content_container),
    ("visible-text", from_visible_text),
)


def extract_paragraphs(html: str) -> tuple[list[str], str]:
    """Run the strategies in order; returns (paragraphs, strategy name)."""
    tree = parse_html(html)
    if tree is None:
        return [], "none"
    for name, strategy in STRATEGIES:
        paragraphs = strategy(tree, html)
        if paragraphs:
            return paragraphs, name
    return [], "none"
