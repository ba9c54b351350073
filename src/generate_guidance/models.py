"""Data models for guidance requests and the structured answer envelope."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional, Union

Mode = Literal["ask", "checkin"]
UncertaintyLevel = Literal["low", "medium", "high"]
ParseMode = Literal["structured", "recovered"]

FIVE_PART_KEYS = (
    "whatIsHappeningDevelopmentally",
    "whatParentsMayNotice",
    "whatIsNormalVariation",
    "whatToDoAtHome",
    "whenToSeekClinicalScreening",
)


@dataclass
class GuidanceRequest:
    """A parent's question (ask) or check-in summary plus optional context."""
    mode: Mode
    text: str
    milestone_context: str = ""
    conversation_context: str = ""
    parent_context: str = ""
    child_age_months: Optional[int] = None
    focus_domain: str = ""


@dataclass(frozen=True)
class Citation:
    title: str
    url: str

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "url": self.url}


@dataclass(frozen=True)
class Uncertainty:
    level: UncertaintyLevel
    reason: str

    def to_dict(self) -> dict[str, str]:
        return {"level": self.level, "reason": self.reason}


@dataclass(frozen=True)
class Structured:
    """Model output parsed as JSON with a usable five-part block."""
    answer: dict[str, Any]
    citations: Any = None
    uncertainty: Any = None
    mode: ParseMode = "structured"


@dataclass(frozen=True)
class Recovered:
    """Model output that could not be parsed; only the raw text survives."""
    raw_text: str
    mode: ParseMode = "recovered"


ParseResult = Union[Structured, Recovered]


@dataclass(frozen=True)
class GuidanceEnvelope:
    five_part_answer: dict[str, str]
    citations: tuple[Citation, ...]
    uncertainty: Uncertainty
    parse_mode: ParseMode
    citation_source: Literal["model", "baseline"] = "model"
    safety_notes_added: bool = False

    def quality(self) -> dict[str, Any]:
        return {
            "parseMode": self.parse_mode,
            "citationSource": self.citation_source,
            "safetyNotesAdded": self.safety_notes_added,
        }


@dataclass(frozen=True)
class GuidanceResult:
    provider: str
    envelope: GuidanceEnvelope
    attempts: list[str] = field(default_factory=list)
