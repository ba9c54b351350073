"""Public blog endpoints: catalog search, image proxy, article content."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import JSONResponse

from common.errors import GatewayError, InvalidRequest
from gateway_api.config import GatewayConfig
from gateway_api.dependencies import get_gateway_config, get_services
from gateway_api.models.blog import ArticleBodyResponse, BlogListResponse, BlogSummaryResponse
from gateway_api.services import GatewayServices
from search_blogs.search import search

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["blogs"])

MIN_LIMIT = 1
MAX_LIMIT = 300


def clamp_limit(raw: str | None, default: int) -> int:
    """Parse `?limit=`; anything unparseable falls back to the default."""
    try:
        value = int(raw) if raw not in (None, "") else default
    except ValueError:
        value = default
    return max(MIN_LIMIT, min(MAX_LIMIT, value))


def _require_link(link: str | None) -> str:
    if not link or not link.strip():
        raise InvalidRequest("Missing link parameter")
    return link.strip()


def _headers_only(response: Response) -> Response:
    """Same status and headers as `response`, without the body."""
    headers = dict(response.headers)
    return Response(status_code=response.status_code, headers=headers)


@router.get("/blogs", response_model=BlogListResponse, response_model_exclude_none=True)
async def list_blogs(
    services: Annotated[GatewayServices, Depends(get_services)],
    config: Annotated[GatewayConfig, Depends(get_gateway_config)],
    q: Annotated[str | None, Query(description="Search query")] = None,
    limit: Annotated[str | None, Query(description="Max results (1-300)")] = None,
):
    """Search the cached blog catalog.

    An upstream failure does not fail the request: the response carries an
    empty item list and an `error` message instead.
    """
    max_items = clamp_limit(limit, config.default_blog_limit)
    try:
        catalog = await services.catalog.get_catalog()
    except GatewayError as e:
        logger.warning("Blog catalog unavailable: %s", e.details or e.message)
        return BlogListResponse(items=[], total=0, matched=0, error=e.message)

    results = search(catalog, q)
    return BlogListResponse(
        items=[BlogSummaryResponse(**article.to_dict()) for article in results[:max_items]],
        total=len(catalog),
        matched=len(results),
    )


@router.api_route("/blog-image", methods=["GET", "HEAD"])
async def blog_image(
    request: Request,
    services: Annotated[GatewayServices, Depends(get_services)],
    link: Annotated[str | None, Query(description="Canonical article link")] = None,
):
    """Article cover image, or a placeholder SVG when none can be resolved."""
    image = await services.images.resolve_image(_require_link(link))
    response = Response(
        content=image.body,
        media_type=image.content_type,
        headers={"Cache-Control": image.cache_control, "X-Image-Source": image.source},
    )
    if request.method == "HEAD":
        return _headers_only(response)
    return response


@router.api_route("/blog-content", methods=["GET", "HEAD"])
async def blog_content(
    request: Request,
    services: Annotated[GatewayServices, Depends(get_services)],
    link: Annotated[str | None, Query(description="Canonical article link")] = None,
):
    """Extracted article body for one blog link."""
    article = await services.articles.extract_article(_require_link(link))
    body = ArticleBodyResponse(**article.to_dict())
    response = JSONResponse(content=body.model_dump(by_alias=True))
    if request.method == "HEAD":
        return _headers_only(response)
    return response
