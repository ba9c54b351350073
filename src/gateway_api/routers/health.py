"""Health check endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from gateway_api.config import GatewayConfig
from gateway_api.dependencies import get_gateway_config
from gateway_api.models.health import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(config: Annotated[GatewayConfig, Depends(get_gateway_config)]):
    """Liveness probe; does not touch any upstream."""
    return HealthResponse(ok=True, service=config.service_name)
