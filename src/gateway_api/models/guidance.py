"""Guidance request/response Pydantic models."""

from pydantic import BaseModel, ConfigDict, Field


class GuidancePayload(BaseModel):
    """Body of /v1/ask and /v1/checkin. Unknown fields are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    question: str | None = None
    summary: str | None = None
    milestone_context: str | None = Field(default=None, alias="milestoneContext")
    conversation_context: str | None = Field(default=None, alias="conversationContext")
    parent_context: str | None = Field(default=None, alias="parentContext")
    child_age_months: float | None = Field(default=None, alias="childAgeMonths", allow_inf_nan=False)
    focus_domain: str | None = Field(default=None, alias="focusDomain")


class FivePartAnswer(BaseModel):
    whatIsHappeningDevelopmentally: str
    whatParentsMayNotice: str
    whatIsNormalVariation: str
    whatToDoAtHome: str
    whenToSeekClinicalScreening: str


class CitationResponse(BaseModel):
    title: str
    url: str


class UncertaintyResponse(BaseModel):
    level: str
    reason: str


class QualityResponse(BaseModel):
    parseMode: str
    citationSource: str
    safetyNotesAdded: bool


class GuidanceResponse(BaseModel):
    uid: str
    provider: str
    response: FivePartAnswer
    citations: list[CitationResponse]
    uncertainty: UncertaintyResponse
    quality: QualityResponse
