"""Shared HTTP client helpers for MCP tools."""

from __future__ import annotations

import logging
from typing import Any, cast

import httpx
from mcp.server.fastmcp import Context

from .config import CONTACT_TIMEOUT
from .context_utils import get_lifespan_context

logger = logging.getLogger("mcp_marketplace.http")

DEFAULT_HEADERS = {
    "User-Agent": "mcp-marketplace/0.1",
    "Accept": "application/json",
}


def new_http_client(timeout: float = CONTACT_TIMEOUT) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=timeout,
        headers=DEFAULT_HEADERS,
        follow_redirects=True,
    )


def get_http_client(
    ctx: Context | Any, timeout: float = CONTACT_TIMEOUT
) -> tuple[httpx.AsyncClient, bool]:
    """Get or create an HTTP client from the MCP context.

    Args:
        ctx: The MCP context object
        timeout: HTTP timeout in seconds

    Returns:
        A tuple of (HTTP client, should_close) where should_close indicates
        whether the caller should close the client after use
    """
    lifespan_ctx = get_lifespan_context(ctx)
    if lifespan_ctx is not None:
        client = lifespan_ctx.get("http_client")
        if isinstance(client, httpx.AsyncClient) or _looks_like_async_client(client):
            return cast(httpx.AsyncClient, client), False

        client = new_http_client(timeout)
        lifespan_ctx["http_client"] = client
        logger.debug("Provisioned HTTP client in lifespan context")
        return client, False

    logger.debug("Creating ephemeral HTTP client outside lifespan context")
    return new_http_client(timeout), True


def _looks_like_async_client(client: object) -> bool:
    """Check if an object looks like an async HTTP client."""
    if client is None:
        return False
    return hasattr(client, "post") and hasattr(client, "aclose")
