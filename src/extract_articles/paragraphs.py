"""Paragraph cleaning and boilerplate filtering."""

from __future__ import annotations

import re
from typing import Iterable

from common.html_meta import parse_html
from common.text import clean_text, collapse_whitespace, dedupe_paragraphs

MIN_PARAGRAPH_CHARS = 50
NAV_CUE_THRESHOLD = 4
NAV_WORD_SHARE = 0.5
BLOCK_TAGS = ("p", "li", "h2", "h3", "blockquote")

NAV_CUES = (
    "home", "about", "about us", "services", "contact", "contact us", "blog", "careers",
    "login", "sign in", "book appointment", "book now", "menu", "faq", "gallery", "locations",
)

# Longest first so "about us" wins over "about"
_NAV_CUE_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(cue) for cue in sorted(NAV_CUES, key=len, reverse=True)) + r")\b"
)
_BOILERPLATE_RE = re.compile(
    r"privacy policy|cookie (?:policy|settings|preferences)|(?:use|accept(?: all)?) cookies|subscribe|newsletter|all rights reserved|copyright|©"
    r"|terms (?:of|and) (?:use|service|conditions)|sign up for|follow us on|share this",
    re.IGNORECASE,
)
_PIN_CODE_RE = re.compile(r"\b\d{3}\s?\d{3}\b")
_ADDRESS_WORD_RE = re.compile(r"\b(?:floor|road|street|nagar|layout|cross|sector|suite|plot no|opp\.?)\b", re.IGNORECASE)
_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+(?=[A-Z0-9\"'])")
_MARKUP_RE = re.compile(r"<(?:p|br|div|li|h[1-6]|ul|ol|span|strong|em|a)\b", re.IGNORECASE)


def is_address_like(text: str) -> bool:
    return bool(_PIN_CODE_RE.search(text)) and bool(_ADDRESS_WORD_RE.search(text))


def _nav_cue_matches(text: str) -> list[str]:
    return _NAV_CUE_RE.findall(text.lower())


def nav_cue_count(text: str) -> int:
    """Number of navigation labels in `text`; "About Us" counts once."""
    return len(_nav_cue_matches(text))


def is_navigation(text: str) -> bool:
    """Enough labels, and the labels make up most of the block's words."""
    matches = _nav_cue_matches(text)
    if len(matches) < NAV_CUE_THRESHOLD:
        return False
    cue_words = sum(len(m.split()) for m in matches)
    return cue_words / max(len(text.split()), 1) >= NAV_WORD_SHARE


def is_boilerplate(text: str) -> bool:
    return (
        bool(_BOILERPLATE_RE.search(text))
        or is_address_like(text)
        or is_navigation(text)
    )


def filter_paragraphs(blocks: Iterable[str]) -> list[str]:
    """Clean, dedupe (case-insensitive) and drop short or boilerplate blocks."""
    cleaned = [clean_text(block) for block in blocks]
    kept = [
        block for block in cleaned
        if block and len(block) >= MIN_PARAGRAPH_CHARS and not is_boilerplate(block)
    ]
    return dedupe_paragraphs(kept)


def element_blocks(root) -> list[str]:
    """Text of paragraph-level elements beneath an lxml element."""
    blocks = []
    for el in root.iter(*BLOCK_TAGS):
        text = collapse_whitespace(el.text_content())
        if text:
            blocks.append(text)
    return blocks


def split_text_value(value: str) -> list[str]:
    """Split a structured-data string into blocks; markup is parsed, plain text split on line breaks."""
    if _MARKUP_RE.search(value):
        tree = parse_html(f"<div>{value}</div>")
        if tree is not None:
            blocks = element_blocks(tree)
            if blocks:
                return blocks
            return [tree.text_content()]
    return [part for part in re.split(r"\n\s*\n|\r?\n", value) if part.strip()]


def split_sentences(text: str, max_sentences: int = 3, max_chars: int = 480) -> list[str]:
    """Group visible text into sentence-like chunks of a few sentences each."""
    chunks: list[str] = []
    current: list[str] = []
    for sentence in _SENTENCE_SPLIT_RE.split(collapse_whitespace(text)):
        sentence = sentence.strip()
        if not sentence:
            continue
        if current and (len(current) >= max_sentences or len(" ".join(current + [sentence])) > max_chars):
            chunks.append(" ".join(current))
            current = []
        current.append(sentence)
    if current:
        chunks.append(" ".join(current))
    return chunks
