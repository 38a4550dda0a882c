# ABOUTME: Service for newsletter/contact submissions from the edge endpoint.
# ABOUTME: Parses the payload, validates the email, writes subscriber and analytics rows.

import re
from dataclasses import dataclass
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from trifecta_edge.db.models import new_id
from trifecta_edge.db.repository import AnalyticsRepository, SubscriberRepository

log = structlog.get_logger()

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
SUBSCRIBE_PATH = "/api/newsletter"
SUBSCRIBE_EVENT = "subscribe"


class InvalidPayloadError(ValueError):
    """Request body is not a JSON object."""


class InvalidEmailError(ValueError):
    """Submitted email fails the shape check."""

    kind = "invalid_email"


@dataclass
class Submission:
    """A normalized newsletter submission."""

    email: str
    site: str


def is_valid_email(email: str) -> bool:
    """Check the simple local@domain.tld shape with no whitespace."""
    return bool(email) and EMAIL_PATTERN.match(email) is not None


def parse_submission(payload: Any, default_site: str) -> Submission:
    """Normalize a decoded JSON body into a Submission.

    Raises:
        InvalidPayloadError: If the body is not a JSON object.
        InvalidEmailError: If the email fails validation.
    """
    if not isinstance(payload, dict):
        raise InvalidPayloadError("request body must be a JSON object")

    email = str(payload.get("email") or "").lower().strip()
    site = payload.get("site") or default_site

    if not is_valid_email(email):
        raise InvalidEmailError(email)

    return Submission(email=email, site=str(site))


class SubscriptionService:
    """Records newsletter submissions.

    The subscriber insert and the analytics insert are committed separately.
    A failure after the first commit leaves a subscriber without its
    analytics event.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.subscribers = SubscriberRepository(session)
        self.analytics = AnalyticsRepository(session)

    async def subscribe(self, submission: Submission) -> bool:
        """Persist a submission.

        Returns:
            True if a new subscriber row was created, False if the
            (email, site) pair was already present.
        """
        try:
            inserted = await self.subscribers.insert_or_ignore(
                submission.email, submission.site, subscriber_id=new_id()
            )
            await self.session.commit()

            await self.analytics.record(
                site=submission.site,
                path=SUBSCRIBE_PATH,
                event=SUBSCRIBE_EVENT,
                meta={"email": submission.email},
                event_id=new_id(),
            )
            await self.session.commit()
        except Exception:
            # A failed rollback must not mask the store error.
            try:
                await self.session.rollback()
            except Exception:
                log.exception("subscribe_rollback_failed", site=submission.site)
            raise

        log.info(
            "subscription_recorded",
            email=submission.email,
            site=submission.site,
            duplicate=not inserted,
        )
        return inserted
