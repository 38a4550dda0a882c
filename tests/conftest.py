# ABOUTME: Pytest fixtures and configuration for trifecta edge tests.
# ABOUTME: Provides test settings, a mocked subscription service, a mocked asset origin, and a client.

from collections.abc import Iterator
from unittest.mock import AsyncMock

import pytest
import respx
from fastapi.testclient import TestClient

from trifecta_edge.config import Settings, get_settings
from trifecta_edge.services.asset_origin import AssetOrigin
from trifecta_edge.services.subscription_service import SubscriptionService

ORIGIN_URL = "http://origin.test"


@pytest.fixture
def mock_settings() -> Settings:
    """Create settings for testing."""
    return Settings(
        default_site="swankyboyz",
        amazon_associate_tag="network-20",
        affiliate_tags={"swankyboyz": "swanky-20", "gadgetgrid": "gadget-21"},
        site_hosts={"swankyboyz.com": "swankyboyz", "gadgetgrid.com": "gadgetgrid"},
        assets_origin_url=ORIGIN_URL,
        db_create_tables=False,
        log_level="DEBUG",
    )


@pytest.fixture
def mock_subscription_service() -> AsyncMock:
    """Create a mock SubscriptionService."""
    service = AsyncMock(spec=SubscriptionService)
    service.subscribe.return_value = True
    return service


@pytest.fixture
def origin_mock() -> Iterator[respx.MockRouter]:
    """Intercept httpx calls to the asset origin."""
    with respx.mock(base_url=ORIGIN_URL, assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def client(
    mock_settings: Settings,
    mock_subscription_service: AsyncMock,
    origin_mock: respx.MockRouter,
) -> TestClient:
    """Create a test client with mocked dependencies."""
    from trifecta_edge.web.app import create_app
    from trifecta_edge.web.dependencies import get_asset_origin, get_subscription_service

    app = create_app()
    origin = AssetOrigin(ORIGIN_URL)

    app.dependency_overrides[get_settings] = lambda: mock_settings
    app.dependency_overrides[get_subscription_service] = lambda: mock_subscription_service
    app.dependency_overrides[get_asset_origin] = lambda: origin

    return TestClient(app, raise_server_exceptions=False)
