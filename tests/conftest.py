"""
Shared test fixtures and configurations for marketplace tests.
"""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from factories import NOW, MockResponse, build_snapshot
from mcp_marketplace.models import MarketSnapshot, SessionContext
from mcp_marketplace.monitoring import performance_monitor
from mcp_marketplace.store import MarketStore


class MockContext(MagicMock):
    """Mock for MCP Context"""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.lifespan_context = {}

    async def error(self, message: str) -> None:
        """Mock for error method"""
        pass

    async def info(self, message: str) -> None:
        """Mock for info method"""
        pass


@pytest.fixture(autouse=True)
def reset_performance_monitor() -> None:
    """Ensure request counters do not leak between tests."""

    performance_monitor.reset()
    yield
    performance_monitor.reset()


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def snapshot() -> MarketSnapshot:
    """Return the standard five-vendor snapshot"""
    return build_snapshot()


@pytest.fixture
def store(snapshot: MarketSnapshot) -> MarketStore:
    """Return an in-memory store holding the standard snapshot"""
    return MarketStore(snapshot)


@pytest.fixture
def mock_http_client() -> AsyncMock:
    """Return a mock AsyncClient"""
    client = AsyncMock()
    client.post = AsyncMock(return_value=MockResponse('{"ok": true}'))
    client.aclose = AsyncMock()
    return client


@pytest.fixture
def mock_context(store: MarketStore, mock_http_client: AsyncMock) -> MockContext:
    """Return a mock Context with the store and HTTP client in its lifespan context."""
    context = MockContext()
    context.lifespan_context = {"store": store, "http_client": mock_http_client}
    return context


@pytest.fixture
def admin_session() -> SessionContext:
    return SessionContext(user_id="admin-1", role="admin")


@pytest.fixture
def buyer_session() -> SessionContext:
    return SessionContext(user_id="buyer-1", role="buyer")


@pytest.fixture
def seller_session() -> SessionContext:
    """Seller owning vendor-x"""
    return SessionContext(user_id="owner-vendor-x", role="seller")
