"""Generative providers behind one interface: `await provider.generate(prompt) -> str`.

Each provider requests JSON-mode output. Any transport failure, non-2xx
status, or malformed response body is raised as ProviderError so the
orchestrator can move on to the next provider.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx
from openai import APIError, AsyncOpenAI

from common.errors import ProviderError

logger = logging.getLogger(__name__)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
GROQ_BASE_URL = "https://api.groq.com/openai/v1"


class GuidanceProvider(ABC):
    name: str = "provider"

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Return the provider's raw text for `prompt`."""


class GeminiProvider(GuidanceProvider):
    """Google Gemini `generateContent` REST endpoint."""

    name = "gemini"

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: Optional[str],
        model: str = "gemini-2.0-flash",
        temperature: float = 0.2,
        base_url: str = GEMINI_BASE_URL,
    ):
        self.client = client
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.base_url = base_url.rstrip("/")

    async def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise ProviderError(self.name, "Missing GEMINI_API_KEY")

        url = f"{self.base_url}/models/{self.model}:generateContent"
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.temperature,
                "responseMimeType": "application/json",
            },
        }
        try:
            response = await self.client.post(url, params={"key": self.api_key}, json=payload)
        except httpx.HTTPError as e:
            raise ProviderError(self.name, f"request failed: {e}") from e

        if not response.is_success:
            raise ProviderError(self.name, f"failed with status {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(self.name, "response body is not JSON") from e
        return _gemini_text(data, self.name)


def _gemini_text(data: Any, provider: str) -> str:
    try:
        candidate = data["candidates"][0]
        parts = candidate["content"]["parts"]
    except (KeyError, IndexError, TypeError) as e:
        raise ProviderError(provider, "response has no candidates") from e

    if candidate.get("finishReason") == "MAX_TOKENS":
        logger.warning("%s hit max tokens", provider)
    text = "\n".join(p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str))
    if not text.strip():
        raise ProviderError(provider, "response has no text")
    return text


class GroqProvider(GuidanceProvider):
    """Groq chat completions through its OpenAI-compatible API."""

    name = "groq"

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "llama-3.1-8b-instant",
        temperature: float = 0.2,
        base_url: str = GROQ_BASE_URL,
        timeout_seconds: float = 30.0,
    ):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self._client: AsyncOpenAI | None = None

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout_seconds,
                max_retries=0,
            )
        return self._client

    async def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise ProviderError(self.name, "Missing GROQ_API_KEY")

        try:
            response = await self._get_client().chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                messages=[{"role": "user", "content": prompt}],
                response_format={"type": "json_object"},
            )
        except APIError as e:
            raise ProviderError(self.name, f"request failed: {e}") from e

        try:
            choice = response.choices[0]
            content = choice.message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise ProviderError(self.name, "response has no choices") from e

        if getattr(choice, "finish_reason", "") == "length":
            logger.warning("%s hit max tokens", self.name)
        if not content or not content.strip():
            raise ProviderError(self.name, "response has no text")
        return content

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
