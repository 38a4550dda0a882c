# ABOUTME: Catch-all route for static assets and unmatched paths.
# ABOUTME: Proxies page requests to the asset origin, injecting the affiliate tag into HTML.

import httpx
import structlog
from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, Response, StreamingResponse
from starlette.background import BackgroundTask

from trifecta_edge.services.affiliate import inject_affiliate_tag
from trifecta_edge.services.asset_origin import forwardable_headers
from trifecta_edge.web.dependencies import AppSettings, Origin
from trifecta_edge.web.routing import AnyMethodRoute

router = APIRouter(route_class=AnyMethodRoute)
log = structlog.get_logger()

# Documented methods; AnyMethodRoute accepts every method on this path.
PROXY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]

# Body is re-encoded after rewriting, so these origin headers no longer apply.
REWRITE_DROPPED_HEADERS = frozenset({"content-length", "content-encoding"})


def is_page_path(path: str) -> bool:
    """Paths served from the asset origin: HTML files and directory indexes."""
    return path.endswith(".html") or path.endswith("/")


def _append_headers(response: Response, headers: list[tuple[str, str]]) -> None:
    response.raw_headers.extend(
        (key.lower().encode("latin-1"), value.encode("latin-1")) for key, value in headers
    )


@router.api_route("/{path:path}", methods=PROXY_METHODS, include_in_schema=False)
async def passthrough(request: Request, settings: AppSettings, origin: Origin) -> Response:
    """Serve a page from the asset origin, or 404 for anything else."""
    if not is_page_path(request.url.path):
        return PlainTextResponse("Not Found", status_code=404)

    try:
        upstream = await origin.fetch(request)
    except httpx.HTTPError as e:
        log.warning(
            "asset_origin_failed",
            path=request.url.path,
            error=str(e),
            error_type=type(e).__name__,
        )
        return PlainTextResponse("Bad Gateway", status_code=502)

    content_type = upstream.headers.get("content-type", "")

    if (
        upstream.status_code == 200
        and "text/html" in content_type
        and request.method != "HEAD"
    ):
        try:
            await upstream.aread()
        finally:
            await upstream.aclose()

        site = settings.site_for_host(request.headers.get("host"))
        tag = settings.affiliate_tag_for(site)
        html = inject_affiliate_tag(upstream.text, tag)

        response = Response(content=html.encode(upstream.encoding or "utf-8"), status_code=200)
        _append_headers(
            response, forwardable_headers(upstream.headers, exclude=REWRITE_DROPPED_HEADERS)
        )
        log.debug("asset_rewritten", path=request.url.path, site=site)
        return response

    response = StreamingResponse(
        upstream.aiter_raw(),
        status_code=upstream.status_code,
        background=BackgroundTask(upstream.aclose),
    )
    _append_headers(response, forwardable_headers(upstream.headers))
    log.debug("asset_passthrough", path=request.url.path, status=upstream.status_code)
    return response
