"""Parse provider output into a five-part answer envelope.

Parsing is tolerant: strict JSON first, then the outermost brace span; when
neither yields a five-part block the raw text is kept as a `Recovered`
result. Post-processing always leaves five non-empty fields, 1-4 valid
citations, and an uncertainty level in {low, medium, high}.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

from common.text import collapse_whitespace, truncate
from common.urls import is_http_url
from generate_guidance.models import (
    FIVE_PART_KEYS,
    Citation,
    GuidanceEnvelope,
    ParseResult,
    Recovered,
    Structured,
    Uncertainty,
)

logger = logging.getLogger(__name__)

MAX_CITATIONS = 4
RECOVERED_TEXT_CHARS = 1200
NESTED_ANSWER_KEYS = ("fivePartAnswer", "response", "answer")
UNCERTAINTY_LEVELS = ("low", "medium", "high")

FIELD_FALLBACK = "Not enough context yet. Continue observing and tracking changes."

RECOVERED_FIELDS = {
    "whatParentsMayNotice": (
        "Every child develops at their own pace. Watch how this shows up across everyday "
        "routines over the next few weeks."
    ),
    "whatIsNormalVariation": (
        "A wide range of timing is normal, and small differences between children of the same age are common."
    ),
    "whatToDoAtHome": "Offer short, playful practice during daily routines and note what you observe.",
    "whenToSeekClinicalScreening": "Talk with your pediatrician if your concern continues.",
}

CHECKUP_REMINDER = (
    "Keep a simple log of what you notice and bring it to your child's next routine checkup."
)
ESCALATION_SENTENCE = (
    "If you see loss of previously gained skills, no progress over several weeks, or your worry keeps "
    "growing, ask your pediatrician about a developmental screening."
)
EMERGENCY_SENTENCE = (
    "If your child has trouble breathing, a seizure, is unusually hard to wake, or you think it is an "
    "emergency, seek immediate in-person medical care or call your local emergency number."
)

_CHECKUP_RE = re.compile(r"\bcheck-?ups?\b|\bwell[- ]child (?:visit|check)", re.IGNORECASE)
_ESCALATION_RE = re.compile(
    r"\bdevelopmental (?:screening|evaluation|assessment)\b"
    r"|\bloss of (?:previously )?(?:gained|learned|acquired) skills\b",
    re.IGNORECASE,
)
_EMERGENCY_RE = re.compile(
    r"\bemergency (?:number|services|room|department|care)\b"
    r"|\bimmediate (?:in-person )?(?:medical )?(?:care|help|attention)\b"
    r"|\bcall (?:911|112|108|999|an ambulance)\b",
    re.IGNORECASE,
)
_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)

BASELINE_CITATIONS = (
    Citation(title="CDC: Developmental Milestones", url="https://www.cdc.gov/act-early/milestones/"),
    Citation(
        title="HealthyChildren.org (American Academy of Pediatrics): Ages & Stages",
        url="https://www.healthychildren.org/English/ages-stages/Pages/default.aspx",
    ),
)

DEFAULT_UNCERTAINTY_REASON = (
    "Guidance is general and based only on what was shared; a clinician who examines your child can say more."
)
RECOVERED_UNCERTAINTY_REASON = (
    "The answer could not be fully structured, so it is summarized in general terms."
)


def _loads_object(text: str) -> Optional[dict]:
    try:
        data = json.loads(text)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def _five_part_block(data: dict) -> Optional[dict]:
    if any(key in data for key in FIVE_PART_KEYS):
        return data
    for key in NESTED_ANSWER_KEYS:
        nested = data.get(key)
        if isinstance(nested, dict) and any(k in nested for k in FIVE_PART_KEYS):
            return nested
    return None


def parse_model_output(raw_text: Optional[str]) -> ParseResult:
    """Parse raw provider text into Structured, or fall back to Recovered."""
    text = _FENCE_RE.sub("", (raw_text or "").strip()).strip()

    data = _loads_object(text)
    if data is None:
        start, end = text.find("{"), text.rfind("}")
        if 0 <= start < end:
            data = _loads_object(text[start:end + 1])

    block = _five_part_block(data) if data is not None else None
    if block is None:
        logger.warning("Model output was not a five-part JSON object; recovering from raw text")
        return Recovered(raw_text=raw_text or "")

    return Structured(
        answer=block,
        citations=data.get("citations", block.get("citations")),
        uncertainty=data.get("uncertainty", block.get("uncertainty")),
    )


def _field_text(value: Any) -> str:
    if isinstance(value, list):
        value = " ".join(str(v) for v in value if v is not None)
    elif value is not None and not isinstance(value, str):
        value = str(value)
    return collapse_whitespace(value)


def _append_sentence(text: str, sentence: str) -> str:
    text = text.rstrip()
    if text and text[-1] not in ".!?":
        text += "."
    return f"{text} {sentence}".strip()


def ensure_safety_notes(answer: dict[str, str]) -> tuple[dict[str, str], bool]:
    """Append the checkup, escalation and emergency sentences where no equivalent exists.

    Idempotent: a second application finds every phrase and changes nothing.
    """
    result = dict(answer)
    added = False

    home = result.get("whatToDoAtHome", "")
    if not _CHECKUP_RE.search(home):
        result["whatToDoAtHome"] = _append_sentence(home, CHECKUP_REMINDER)
        added = True

    screening = result.get("whenToSeekClinicalScreening", "")
    if not _ESCALATION_RE.search(screening):
        screening = _append_sentence(screening, ESCALATION_SENTENCE)
        added = True
    if not _EMERGENCY_RE.search(screening):
        screening = _append_sentence(screening, EMERGENCY_SENTENCE)
        added = True
    result["whenToSeekClinicalScreening"] = screening

    return result, added


def normalize_citations(raw: Any) -> list[Citation]:
    """Keep entries with a title and an http(s) URL, deduped by URL, at most four."""
    if not isinstance(raw, list):
        return []
    citations: list[Citation] = []
    seen: set[str] = set()
    for item in raw:
        if not isinstance(item, dict):
            continue
        title = _field_text(item.get("title"))
        url = item.get("url")
        url = url.strip() if isinstance(url, str) else ""
        if not title or not is_http_url(url) or url in seen:
            continue
        seen.add(url)
        citations.append(Citation(title=title, url=url))
        if len(citations) >= MAX_CITATIONS:
            break
    return citations


def coerce_uncertainty(raw: Any, default_reason: str = DEFAULT_UNCERTAINTY_REASON) -> Uncertainty:
    level, reason = "medium", ""
    if isinstance(raw, dict):
        candidate = _field_text(raw.get("level")).lower()
        if candidate in UNCERTAINTY_LEVELS:
            level = candidate
        reason = _field_text(raw.get("reason"))
    elif isinstance(raw, str) and raw.strip().lower() in UNCERTAINTY_LEVELS:
        level = raw.strip().lower()
    return Uncertainty(level=level, reason=reason or default_reason)


def _recovered_answer(raw_text: str) -> dict[str, str]:
    collapsed = truncate(collapse_whitespace(raw_text), RECOVERED_TEXT_CHARS)
    answer = {"whatIsHappeningDevelopmentally": collapsed or FIELD_FALLBACK}
    answer.update(RECOVERED_FIELDS)
    return answer


def build_envelope(result: ParseResult) -> GuidanceEnvelope:
    """Apply shape, safety, citation and uncertainty rules to a parse result."""
    if isinstance(result, Structured):
        answer = {key: _field_text(result.answer.get(key)) or FIELD_FALLBACK for key in FIVE_PART_KEYS}
        citations = normalize_citations(result.citations)
        uncertainty = coerce_uncertainty(result.uncertainty)
    else:
        answer = _recovered_answer(result.raw_text)
        citations = []
        uncertainty = coerce_uncertainty(None, RECOVERED_UNCERTAINTY_REASON)

    answer, added = ensure_safety_notes(answer)
    citation_source = "model"
    if not citations:
        citations = list(BASELINE_CITATIONS)
        citation_source = "baseline"

    return GuidanceEnvelope(
        five_part_answer=answer,
        citations=tuple(citations),
        uncertainty=uncertainty,
        parse_mode=result.mode,
        citation_source=citation_source,
        safety_notes_added=added,
    )
