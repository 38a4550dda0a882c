# ABOUTME: Repository classes for database access patterns.
# ABOUTME: Provides SubscriberRepository (insert-or-ignore) and AnalyticsRepository (append-only).

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from trifecta_edge.db.models import AnalyticsEvent, Subscriber, new_id


class SubscriberRepository:
    """Repository for Subscriber writes and counts."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert_or_ignore(self, email: str, site: str, subscriber_id: str | None = None) -> bool:
        """Insert a subscriber unless (email, site) already exists.

        Returns True if a row was inserted, False if it was a duplicate.
        """
        stmt = (
            insert(Subscriber)
            .values(id=subscriber_id or new_id(), email=email, site=site)
            .on_conflict_do_nothing(constraint="uq_subscribers_email_site")
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def count_by_site(self, site: str | None = None) -> int:
        """Count subscribers, optionally restricted to one site."""
        query = select(func.count(Subscriber.id))
        if site:
            query = query.where(Subscriber.site == site)
        result = await self.session.execute(query)
        return result.scalar_one()


class AnalyticsRepository:
    """Repository for append-only AnalyticsEvent records."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def record(
        self,
        site: str,
        path: str,
        event: str,
        meta: dict[str, Any] | None = None,
        event_id: str | None = None,
    ) -> AnalyticsEvent:
        """Append an analytics event."""
        analytics_event = AnalyticsEvent(
            id=event_id or new_id(),
            site=site,
            path=path,
            event=event,
            meta=meta,
        )
        self.session.add(analytics_event)
        await self.session.flush()
        return analytics_event

    async def count_events(self, event: str, site: str | None = None) -> int:
        """Count events of one kind, optionally restricted to one site."""
        query = select(func.count(AnalyticsEvent.id)).where(AnalyticsEvent.event == event)
        if site:
            query = query.where(AnalyticsEvent.site == site)
        result = await self.session.execute(query)
        return result.scalar_one()
