# ABOUTME: SQLAlchemy ORM models for subscriber and analytics persistence.
# ABOUTME: Defines the subscribers and analytics tables written by the newsletter endpoint.

from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from sqlalchemy import JSON, DateTime, Index, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def new_id() -> str:
    """Generate a fresh opaque row identifier."""
    return str(uuid4())


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class Subscriber(Base):
    """A newsletter subscriber for one site. Never mutated once written."""

    __tablename__ = "subscribers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    site: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    __table_args__ = (
        UniqueConstraint("email", "site", name="uq_subscribers_email_site"),
        Index("ix_subscribers_site", site),
    )

    def __repr__(self) -> str:
        return f"<Subscriber {self.email} ({self.site})>"


class AnalyticsEvent(Base):
    """An append-only telemetry record."""

    __tablename__ = "analytics"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    site: Mapped[str] = mapped_column(String(100), nullable=False)
    path: Mapped[str] = mapped_column(String(500), nullable=False)
    event: Mapped[str] = mapped_column(String(100), nullable=False)
    meta: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    __table_args__ = (Index("ix_analytics_site_event", site, event),)

    def __repr__(self) -> str:
        return f"<AnalyticsEvent {self.event} {self.site}{self.path}>"
