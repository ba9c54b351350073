"""Guidance orchestration: policy check, prompt, provider fallback, envelope."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from common.errors import ProviderError, UpstreamUnavailable
from generate_guidance.envelope import build_envelope, parse_model_output
from generate_guidance.models import GuidanceRequest, GuidanceResult
from generate_guidance.policy import enforce_input_policy
from generate_guidance.prompt import build_prompt
from generate_guidance.providers import GuidanceProvider

logger = logging.getLogger(__name__)


class GuidanceOrchestrator:
    """Tries each provider in order until one answers."""

    def __init__(self, providers: Sequence[GuidanceProvider], max_input_chars: int = 2000):
        self.providers = list(providers)
        self.max_input_chars = max_input_chars

    async def answer(self, request: GuidanceRequest) -> GuidanceResult:
        """Raises PolicyViolation before any provider call, UpstreamUnavailable when all fail."""
        request = replace(request, text=enforce_input_policy(request.text, self.max_input_chars))
        prompt = build_prompt(request)

        attempts: list[str] = []
        last_error: ProviderError | None = None
        for provider in self.providers:
            attempts.append(provider.name)
            try:
                raw_text = await provider.generate(prompt)
            except ProviderError as e:
                logger.warning("Provider %s failed: %s", provider.name, e)
                last_error = e
                continue

            envelope = build_envelope(parse_model_output(raw_text))
            logger.info("Guidance answered by %s (%s)", provider.name, envelope.parse_mode)
            return GuidanceResult(provider=provider.name, envelope=envelope, attempts=attempts)

        details = str(last_error) if last_error else "No providers configured"
        raise UpstreamUnavailable("AI providers unavailable", details)
