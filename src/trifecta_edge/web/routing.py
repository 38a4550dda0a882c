# ABOUTME: Route class for handlers that must answer every HTTP method.
# ABOUTME: Used by the catch-all asset route and the newsletter 405 route.

from typing import Any

from fastapi.routing import APIRoute
from starlette.routing import Match
from starlette.types import Scope


class AnyMethodRoute(APIRoute):
    """APIRoute that matches its path for any method, including non-standard ones.

    The declared methods only feed the OpenAPI schema.
    """

    def matches(self, scope: Scope) -> tuple[Match, dict[str, Any]]:
        match, child_scope = super().matches(scope)
        if match == Match.PARTIAL:
            return Match.FULL, child_scope
        return match, child_scope
