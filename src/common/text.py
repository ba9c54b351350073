"""Text normalization helpers shared by the feed parser and article extractor."""

from __future__ import annotations

import html
import re
from typing import Iterable, Optional

_CDATA_RE = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.DOTALL)
_SCRIPT_STYLE_RE = re.compile(r"<(script|style|noscript)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")


def decode_entities(text: Optional[str]) -> str:
    """Decode named and numeric HTML entities and unwrap CDATA sections."""
    if not text:
        return ""
    text = _CDATA_RE.sub(r"\1", text)
    # Feeds are frequently double-encoded (&amp;#8217;)
    decoded = html.unescape(text)
    if decoded != text and "&" in decoded:
        decoded = html.unescape(decoded)
    return decoded.replace("\xa0", " ")


def strip_tags(markup: Optional[str]) -> str:
    """Remove markup (including script/style bodies) and decode entities."""
    if not markup:
        return ""
    text = _CDATA_RE.sub(r"\1", markup)
    text = _COMMENT_RE.sub(" ", text)
    text = _SCRIPT_STYLE_RE.sub(" ", text)
    text = _TAG_RE.sub(" ", text)
    return decode_entities(text)


def collapse_whitespace(text: Optional[str]) -> str:
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def clean_text(text: Optional[str]) -> Optional[str]:
    """Clean text by stripping HTML, fixing escapes, and collapsing whitespace."""
    if not text:
        return None
    text = strip_tags(text)
    # Remove escaped quotes
    text = text.replace('\\"', '"')
    text = collapse_whitespace(text)
    return text if text else None


def truncate(text: str, limit: int) -> str:
    """Cut text to at most `limit` characters, preferring a word boundary."""
    if len(text) <= limit:
        return text
    cut = text[:limit]
    boundary = cut.rfind(" ")
    if boundary > limit * 0.6:
        cut = cut[:boundary]
    return cut.rstrip(" ,;:-")


def dedupe_paragraphs(blocks: Iterable[str]) -> list[str]:
    """Drop repeated blocks (case-insensitive), keeping first occurrence order."""
    seen: set[str] = set()
    result = []
    for block in blocks:
        key = collapse_whitespace(block).lower()
        if not key or key in seen:
            continue
        seen.add(key)
        result.append(block)
    return result


def escape_html(text: Optional[str]) -> str:
    return html.escape(text or "", quote=True).replace("&#x27;", "&#39;")


def paragraphs_to_html(paragraphs: Iterable[str]) -> str:
    return "\n".join(f"<p>{escape_html(p)}</p>" for p in paragraphs)
