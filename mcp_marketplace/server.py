"""
Server setup and lifespan management for the marketplace MCP server.
"""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx
from mcp.server.fastmcp import FastMCP

from .config import DB_PATH_ENV
from .http import new_http_client
from .monitoring import performance_monitor
from .store import MarketStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("mcp_marketplace.server")

# Global variables
http_client: httpx.AsyncClient | None = None


@asynccontextmanager
async def app_lifespan(_server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Manage application lifecycle: HTTP client for the contact relay and the store."""
    global http_client
    try:
        db_path = os.environ.get(DB_PATH_ENV)
        logger.info("Loading marketplace store from %s", db_path or "bundled seed data")
        store = MarketStore.load(db_path)

        http_client = new_http_client()

        yield {
            "http_client": http_client,
            "store": store,
            "monitor": performance_monitor,
        }
    finally:
        logger.info("Shutting down marketplace server")
        if http_client:
            await http_client.aclose()
            http_client = None

        logger.info(
            "Total requests processed: %d (%d failed)",
            performance_monitor.total_requests,
            performance_monitor.failed_requests,
        )


# Initialize FastMCP server
mcp = FastMCP("Materials Marketplace", lifespan=app_lifespan)

# Export the tool decorator for use in tools modules
tool = mcp.tool


async def close_http_client() -> None:
    """Cleanly close the HTTP client."""
    global http_client
    if http_client:
        logger.info("Closing HTTP client")
        await http_client.aclose()
        http_client = None
