# ABOUTME: Database module initialization.
# ABOUTME: Exports models and session helpers for the subscriber/analytics store.

from trifecta_edge.db.models import AnalyticsEvent, Base, Subscriber
from trifecta_edge.db.session import get_session, init_db

__all__ = [
    "AnalyticsEvent",
    "Base",
    "Subscriber",
    "get_session",
    "init_db",
]
