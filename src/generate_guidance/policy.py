"""Input policy checks applied before any provider call."""

import re

from common.errors import PolicyViolation

MAX_INPUT_CHARS = 2000

# Instruction-override phrasing. Medical wording ("prescribe", "medication")
# is deliberately absent: the answer envelope handles that.
INJECTION_PHRASES = (
    "ignore previous instructions",
    "ignore all previous",
    "ignore the above",
    "ignore your instructions",
    "disregard previous",
    "disregard the above",
    "disregard your instructions",
    "forget your instructions",
    "override your rules",
    "system prompt",
    "reveal your instructions",
    "from now on you are",
    "developer mode",
    "jailbreak",
    "pretend to be",
    "do anything now",
)

_SPACES_RE = re.compile(r"\s+")


def find_injection_phrase(text: str) -> str | None:
    lowered = _SPACES_RE.sub(" ", text.lower())
    for phrase in INJECTION_PHRASES:
        if phrase in lowered:
            return phrase
    return None


def enforce_input_policy(text: str | None, max_chars: int = MAX_INPUT_CHARS) -> str:
    """Return the stripped input or raise PolicyViolation."""
    cleaned = (text or "").strip()
    if not cleaned:
        raise PolicyViolation("Missing input text")
    if len(cleaned) > max_chars:
        raise PolicyViolation(
            "Input is too long",
            details=f"Limit is {max_chars} characters, got {len(cleaned)}",
        )
    phrase = find_injection_phrase(cleaned)
    if phrase:
        raise PolicyViolation("Request violates input safety policy", details=f"Blocked phrase: {phrase}")
    return cleaned
