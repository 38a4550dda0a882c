# ABOUTME: Response helpers shared by the edge routes.
# ABOUTME: CORS header set and JSON error bodies.

from fastapi.responses import JSONResponse

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,HEAD,POST,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def cors_headers() -> dict[str, str]:
    return dict(CORS_HEADERS)


def json_error(error: str, status_code: int) -> JSONResponse:
    """Machine-readable error body with CORS headers."""
    return JSONResponse({"error": error}, status_code=status_code, headers=cors_headers())
