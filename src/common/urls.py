"""Link canonicalization and URL heuristics."""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import unquote, urljoin, urlsplit, urlunsplit

import httpx

DEFAULT_SITE_URL = "https://skids.clinic"
DEFAULT_PATH_PREFIX = "/blog/"


def _bare_host(host: str) -> str:
    host = host.lower().rstrip(".")
    return host[4:] if host.startswith("www.") else host


def canonicalize_link(
    link: Optional[str],
    site_url: str = DEFAULT_SITE_URL,
    path_prefix: str = DEFAULT_PATH_PREFIX,
) -> Optional[str]:
    """Return the canonical form of an article link, or None if it is not one.

    Relative links are resolved against `site_url`. The result is absolute,
    has no query or fragment, uses the site's scheme and host, and has a path
    under `path_prefix` with at least one segment after it.
    """
    if not link or not isinstance(link, str):
        return None
    link = link.strip()
    if not link or any(ch.isspace() for ch in link):
        return None

    try:
        absolute = urljoin(site_url.rstrip("/") + "/", link)
        parts = urlsplit(absolute)
        site = urlsplit(site_url)
        port = parts.port
    except ValueError:
        return None

    if parts.scheme not in ("http", "https") or not parts.hostname:
        return None
    if _bare_host(parts.hostname) != _bare_host(site.hostname or ""):
        return None
    if port not in (None, 80, 443):
        return None

    path = re.sub(r"/{2,}", "/", parts.path)
    if not path.startswith(path_prefix):
        return None
    slug = path[len(path_prefix):].strip("/")
    if not slug:
        return None

    return urlunsplit((site.scheme or "https", site.netloc.lower(), path_prefix + slug, "", ""))


def article_id_from_link(link: str) -> str:
    """Last non-empty path segment of a link."""
    segments = [s for s in urlsplit(link).path.split("/") if s]
    return segments[-1] if segments else ""


def is_logo_asset(url: Optional[str]) -> bool:
    """Heuristic: the image is probably a site logo rather than article art."""
    if not url:
        return False
    return "logo" in unquote(unquote(url)).lower()


def is_http_url(value: Optional[str]) -> bool:
    if not value or not isinstance(value, str):
        return False
    try:
        parts = urlsplit(value.strip())
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def is_fetchable(url: str) -> bool:
    """True when the HTTP client can build a request for `url` (valid host encoding included)."""
    try:
        return bool(httpx.URL(url).host)
    except (httpx.InvalidURL, ValueError):
        return False


def absolutize(url: Optional[str], base_url: str) -> Optional[str]:
    """Resolve a possibly relative URL against `base_url`; None if unusable."""
    if not url:
        return None
    url = url.strip()
    if url.startswith("data:"):
        return None
    try:
        resolved = urljoin(base_url, url)
    except ValueError:
        return None
    return resolved if is_http_url(resolved) and is_fetchable(resolved) else None
