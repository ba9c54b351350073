"""Shared async HTTP client construction."""

import httpx

USER_AGENT = "pairents-gateway/1.0 (+https://skids.clinic)"


def build_http_client(timeout_seconds: float = 15.0, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """Build the process-wide client used for every upstream call."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout_seconds),
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
        transport=transport,
    )
