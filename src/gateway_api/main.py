"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from common.errors import GatewayError
from common.http_client import build_http_client
from gateway_api.config import GatewayConfig, get_config
from gateway_api.routers import blogs, guidance, health
from gateway_api.services import GatewayServices, build_services

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "access-control-allow-origin": "*",
    "access-control-allow-headers": "authorization, content-type",
    "access-control-allow-methods": "GET, HEAD, POST, OPTIONS",
}


def create_app(config: GatewayConfig | None = None, services: GatewayServices | None = None) -> FastAPI:
    """Build the gateway app.

    Args:
        config: Gateway configuration. If None, uses get_config().
        services: Prebuilt services (tests). If None, they are built in the
                  lifespan around a fresh shared HTTP client.
    """
    config = config or get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if services is not None:
            app.state.services = services
            yield
            return

        client = build_http_client(config.http.timeout_seconds)
        app.state.services = build_services(config, client)
        logger.info("Gateway %s started", config.service_name)
        try:
            yield
        finally:
            await app.state.services.aclose()
            await client.aclose()
            logger.info("Gateway %s stopped", config.service_name)

    app = FastAPI(
        title="Pairents Gateway",
        description="Parent guidance and blog content edge gateway",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config
    if services is not None:
        app.state.services = services

    @app.middleware("http")
    async def cors(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=CORS_HEADERS)
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.details)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content={"error": "Not found"})
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Invalid request", "details": str(exc.errors())})

    app.include_router(health.router)
    app.include_router(guidance.router)
    app.include_router(blogs.router)
    return app


def main():
    """Run the API server."""
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    config = get_config()
    uvicorn.run(create_app(config), host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    main()
