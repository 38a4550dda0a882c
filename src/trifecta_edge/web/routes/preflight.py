# ABOUTME: CORS preflight handling for every path.
# ABOUTME: Answers OPTIONS requests with 204 and permissive CORS headers.

from fastapi import APIRouter
from fastapi.responses import Response

from trifecta_edge.web.responses import cors_headers

router = APIRouter()


@router.options("/{path:path}")
async def preflight(path: str) -> Response:
    """Answer a CORS preflight without touching any backend."""
    return Response(status_code=204, headers=cors_headers())
