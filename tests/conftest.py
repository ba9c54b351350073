"""Shared fixtures: feed and page builders, HTTP doubles."""

from typing import Callable, Iterable, Optional

import httpx
import pytest

SITE = "https://skids.clinic"
FEED_URL = "https://skids.clinic/blog/feed/"


def rss_item(
    slug: str,
    title: Optional[str] = None,
    pub_date: str = "Mon, 05 Feb 2024 08:00:00 +0000",
    description: str = "<p>Practical tips for parents.</p>",
    extra: str = "",
    link: Optional[str] = None,
) -> str:
    title = slug.replace("-", " ").title() if title is None else title
    link = link or f"{SITE}/blog/{slug}/"
    return (
        "<item>"
        f"<title>{title}</title>"
        f"<link>{link}</link>"
        f"<pubDate>{pub_date}</pubDate>"
        f"<description><![CDATA[{description}]]></description>"
        f"{extra}"
        "</item>"
    )


def rss_feed(items: Iterable[str]) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/" '
        'xmlns:media="http://search.yahoo.com/mrss/">'
        f"<channel><title>SKIDS Blog</title><link>{SITE}/blog/</link>"
        + "".join(items)
        + "</channel></rss>"
    )


@pytest.fixture
def make_item() -> Callable[..., str]:
    return rss_item


@pytest.fixture
def make_feed() -> Callable[[Iterable[str]], str]:
    return rss_feed


@pytest.fixture
def mock_client():
    """Build an httpx.AsyncClient whose requests are answered by `handler`."""
    clients = []

    def build(handler) -> httpx.AsyncClient:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)
        clients.append(client)
        return client

    return build
