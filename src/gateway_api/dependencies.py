"""FastAPI dependencies resolving the app-scoped config and services."""

from fastapi import Request

from gateway_api.config import GatewayConfig
from gateway_api.services import GatewayServices


def get_gateway_config(request: Request) -> GatewayConfig:
    return request.app.state.config


def get_services(request: Request) -> GatewayServices:
    return request.app.state.services
