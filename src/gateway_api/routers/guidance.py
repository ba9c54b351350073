"""Authenticated guidance endpoints: /v1/ask and /v1/checkin."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from common.errors import AuthFailure, InvalidRequest
from gateway_api.dependencies import get_services
from gateway_api.models.guidance import (
    CitationResponse,
    FivePartAnswer,
    GuidancePayload,
    GuidanceResponse,
    QualityResponse,
    UncertaintyResponse,
)
from gateway_api.services import GatewayServices
from generate_guidance.identity import bearer_token
from generate_guidance.models import GuidanceRequest, Mode

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["guidance"])


async def _authenticate(request: Request, services: GatewayServices) -> str:
    token = bearer_token(request.headers.get("authorization"))
    if token is None:
        raise AuthFailure("Missing bearer token")
    uid = await services.identity.verify(token)
    if uid is None:
        raise AuthFailure("Invalid Firebase auth token")
    return uid


async def _read_payload(request: Request) -> GuidancePayload:
    try:
        raw = await request.json()
    except ValueError as e:
        raise InvalidRequest("Invalid JSON body") from e
    if not isinstance(raw, dict):
        raise InvalidRequest("Invalid JSON body", "Expected a JSON object")
    try:
        return GuidancePayload.model_validate(raw)
    except ValidationError as e:
        raise InvalidRequest("Invalid request body", str(e)) from e


def _to_request(mode: Mode, payload: GuidancePayload) -> GuidanceRequest:
    text = payload.question if mode == "ask" else payload.summary
    age = payload.child_age_months
    return GuidanceRequest(
        mode=mode,
        text=text or "",
        milestone_context=payload.milestone_context or "",
        conversation_context=payload.conversation_context or "",
        parent_context=payload.parent_context or "",
        child_age_months=round(age) if age is not None and age >= 0 else None,
        focus_domain=payload.focus_domain or "",
    )


async def _handle(mode: Mode, request: Request, services: GatewayServices) -> GuidanceResponse:
    # Auth comes first so unauthenticated callers never get body validation feedback.
    uid = await _authenticate(request, services)
    payload = await _read_payload(request)

    result = await services.guidance.answer(_to_request(mode, payload))
    envelope = result.envelope
    return GuidanceResponse(
        uid=uid,
        provider=result.provider,
        response=FivePartAnswer(**envelope.five_part_answer),
        citations=[CitationResponse(**c.to_dict()) for c in envelope.citations],
        uncertainty=UncertaintyResponse(**envelope.uncertainty.to_dict()),
        quality=QualityResponse(**envelope.quality()),
    )


@router.post("/ask", response_model=GuidanceResponse)
async def ask(request: Request, services: Annotated[GatewayServices, Depends(get_services)]):
    """Answer a parent's free-form question."""
    return await _handle("ask", request, services)


@router.post("/checkin", response_model=GuidanceResponse)
async def checkin(request: Request, services: Annotated[GatewayServices, Depends(get_services)]):
    """Interpret a parent's check-in summary."""
    return await _handle("checkin", request, services)
