# ABOUTME: FastAPI dependency injection for settings, database sessions and services.
# ABOUTME: Provides reusable dependencies for the edge route handlers.

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from trifecta_edge.config import Settings, get_settings
from trifecta_edge.db.session import get_db_session
from trifecta_edge.services.asset_origin import AssetOrigin
from trifecta_edge.services.subscription_service import SubscriptionService

# Type aliases for common dependencies
AppSettings = Annotated[Settings, Depends(get_settings)]
DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_subscription_service(session: DbSession) -> SubscriptionService:
    """Get subscription service bound to the request session."""
    return SubscriptionService(session)


SubscriptionSvc = Annotated[SubscriptionService, Depends(get_subscription_service)]


def get_asset_origin(request: Request) -> AssetOrigin:
    """Get the shared asset origin client from app state."""
    return request.app.state.asset_origin


Origin = Annotated[AssetOrigin, Depends(get_asset_origin)]
