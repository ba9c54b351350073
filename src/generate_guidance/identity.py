"""Bearer-token verification against the Firebase Identity Toolkit."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

LOOKUP_URL = "https://identitytoolkit.googleapis.com/v1/accounts:lookup"


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an `Authorization: Bearer <token>` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


class IdentityVerifier:
    """Exchanges an ID token for the stable user id (`localId`)."""

    def __init__(self, client: httpx.AsyncClient, api_key: Optional[str], lookup_url: str = LOOKUP_URL):
        self.client = client
        self.api_key = api_key
        self.lookup_url = lookup_url

    async def verify(self, token: str) -> Optional[str]:
        """Return the user id, or None when the token cannot be verified."""
        if not self.api_key:
            logger.error("FIREBASE_WEB_API_KEY is not configured; rejecting token")
            return None

        try:
            response = await self.client.post(
                self.lookup_url,
                params={"key": self.api_key},
                json={"idToken": token},
            )
        except httpx.HTTPError as e:
            logger.warning("Identity lookup failed: %s", e)
            return None

        if not response.is_success:
            logger.info("Identity lookup rejected token (status %d)", response.status_code)
            return None

        try:
            users = response.json().get("users") or []
        except (ValueError, AttributeError):
            return None
        uid = users[0].get("localId") if users and isinstance(users[0], dict) else None
        return uid or None
