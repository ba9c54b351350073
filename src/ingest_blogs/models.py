"""Data models for the blog catalog."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ArticleSummary:
    """One article as listed in the feed. Replaced wholesale on catalog refresh."""
    title: str
    link: str
    published_at: str
    excerpt: str
    image_url: str
    keywords: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "link": self.link,
            "publishedAt": self.published_at,
            "excerpt": self.excerpt,
            "imageUrl": self.image_url,
            "keywords": list(self.keywords),
        }


@dataclass(frozen=True)
class ArticleBody:
    """Full extracted article for one canonical link."""
    id: str
    link: str
    title: str
    published_at: str
    excerpt: str
    image_url: str
    keywords: tuple[str, ...]
    paragraphs: tuple[str, ...]
    body_html: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "link": self.link,
            "title": self.title,
            "publishedAt": self.published_at,
            "excerpt": self.excerpt,
            "imageUrl": self.image_url,
            "keywords": list(self.keywords),
            "paragraphs": list(self.paragraphs),
            "bodyHtml": self.body_html,
        }
