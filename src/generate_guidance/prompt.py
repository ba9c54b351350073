"""Deterministic prompt construction for guidance requests."""

from common.text import collapse_whitespace, truncate
from generate_guidance.instructions import GUIDANCE_INSTRUCTIONS
from generate_guidance.models import GuidanceRequest

MILESTONE_CONTEXT_CHARS = 1200
CONVERSATION_CONTEXT_CHARS = 2000
PARENT_CONTEXT_CHARS = 600
FOCUS_DOMAIN_CHARS = 80

MODE_LABELS = {
    "ask": "Parent question",
    "checkin": "Parent daily check-in summary",
}


def _context(value: str | None, limit: int) -> str:
    text = collapse_whitespace(value)
    return truncate(text, limit) if text else "none provided"


def format_age(months: int | None) -> str:
    if months is None or months < 0:
        return "not provided"
    if months >= 24 and months % 12 == 0:
        return f"{months // 12} years ({months} months)"
    return f"{months} months"


def build_prompt(request: GuidanceRequest) -> str:
    """Build the single prompt string sent to every provider."""
    label = MODE_LABELS.get(request.mode, MODE_LABELS["ask"])
    lines = [
        GUIDANCE_INSTRUCTIONS,
        "",
        f"Mode: {request.mode}",
        f"Child age: {format_age(request.child_age_months)}",
        f"Focus domain: {_context(request.focus_domain, FOCUS_DOMAIN_CHARS)}",
        f"Milestone context: {_context(request.milestone_context, MILESTONE_CONTEXT_CHARS)}",
        f"Parent context: {_context(request.parent_context, PARENT_CONTEXT_CHARS)}",
        f"Recent conversation: {_context(request.conversation_context, CONVERSATION_CONTEXT_CHARS)}",
        "",
        f"{label}: {collapse_whitespace(request.text)}",
    ]
    return "\n".join(lines)
