# ABOUTME: Client for the static-asset origin behind the edge dispatcher.
# ABOUTME: Forwards inbound requests over httpx and returns streamed responses.

import httpx
import structlog
from starlette.requests import Request

logger = structlog.get_logger()

# Connection-scoped headers that must not be forwarded by a proxy.
HOP_BY_HOP_HEADERS = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
    }
)


def forwardable_headers(
    headers: httpx.Headers, exclude: frozenset[str] = frozenset()
) -> list[tuple[str, str]]:
    """Header pairs safe to relay, keeping repeated headers such as set-cookie."""
    skip = HOP_BY_HOP_HEADERS | exclude
    return [(key, value) for key, value in headers.multi_items() if key.lower() not in skip]


class AssetOrigin:
    """Fetches pre-built site files from the configured origin."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def fetch(self, request: Request) -> httpx.Response:
        """Forward a request to the origin, preserving method, headers and body.

        The returned response is streamed. The caller must read or close it.
        """
        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"

        headers = [
            (key, value)
            for key, value in request.headers.items()
            if key != "host" and key not in HOP_BY_HOP_HEADERS
        ]
        body = await request.body()

        upstream_request = self._client.build_request(
            request.method, target, headers=headers, content=body or None
        )
        response = await self._client.send(upstream_request, stream=True)
        logger.debug(
            "asset_fetched",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
        )
        return response

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
