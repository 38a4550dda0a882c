# ABOUTME: Newsletter/contact submission endpoint.
# ABOUTME: Validates the email, stores subscriber and analytics rows, answers with CORS headers.

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from trifecta_edge.services.subscription_service import InvalidEmailError, parse_submission
from trifecta_edge.web.dependencies import AppSettings, SubscriptionSvc
from trifecta_edge.web.responses import cors_headers, json_error
from trifecta_edge.web.routing import AnyMethodRoute

router = APIRouter(tags=["newsletter"])
log = structlog.get_logger()

# Legacy Netlify function path and canonical path.
LEGACY_PATH = "/.netlify/functions/newsletter"
CANONICAL_PATH = "/api/newsletter"

NON_POST_METHODS = ["GET", "HEAD", "PUT", "PATCH", "DELETE"]


@router.post(LEGACY_PATH)
@router.post(CANONICAL_PATH)
async def subscribe(
    request: Request,
    settings: AppSettings,
    service: SubscriptionSvc,
) -> JSONResponse:
    """Record a newsletter signup.

    Duplicate (email, site) pairs are accepted silently. Any parse or store
    failure is answered with 500 and the failure message.
    """
    try:
        payload = await request.json()
        submission = parse_submission(payload, settings.default_site)
        await service.subscribe(submission)
    except InvalidEmailError as e:
        log.info("subscribe_invalid_email", email=str(e))
        return json_error(InvalidEmailError.kind, status_code=400)
    except Exception as e:
        log.exception("subscribe_failed", path=request.url.path)
        return json_error(str(e), status_code=500)

    return JSONResponse({"ok": True}, status_code=200, headers=cors_headers())


async def method_not_allowed() -> PlainTextResponse:
    return PlainTextResponse("Method Not Allowed", status_code=405)


# Registered after the POST routes, so POST never reaches it.
for _path in (LEGACY_PATH, CANONICAL_PATH):
    router.add_api_route(
        _path,
        method_not_allowed,
        methods=NON_POST_METHODS,
        include_in_schema=False,
        route_class_override=AnyMethodRoute,
    )
