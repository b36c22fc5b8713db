"""Lifespan context helpers for MCP tools."""

from __future__ import annotations

import logging
import os
from typing import Any

from mcp.server.fastmcp import Context

from .config import DB_PATH_ENV
from .exceptions import ErrorResult
from .store import MarketStore

logger = logging.getLogger("mcp_marketplace.context_utils")


def get_lifespan_context(ctx: Context | Any) -> dict[str, Any] | None:
    """Extract the lifespan context dictionary from an MCP context.

    Args:
        ctx: The MCP context object

    Returns:
        The lifespan context dictionary or None if not available
    """
    direct = getattr(ctx, "lifespan_context", None)
    if isinstance(direct, dict):
        return direct

    try:
        request_context = ctx.request_context
    except (AttributeError, ValueError):
        return None

    lifespan = getattr(request_context, "lifespan_context", None)
    return lifespan if isinstance(lifespan, dict) else None


def get_store(ctx: Context | Any) -> MarketStore:
    """Return the store from the lifespan context, provisioning one if absent."""
    lifespan_ctx = get_lifespan_context(ctx)
    if lifespan_ctx is not None:
        store = lifespan_ctx.get("store")
        if isinstance(store, MarketStore):
            return store
        store = MarketStore.load(os.environ.get(DB_PATH_ENV))
        lifespan_ctx["store"] = store
        logger.debug("Provisioned store in lifespan context")
        return store

    logger.debug("Loading ephemeral store outside lifespan context")
    return MarketStore.load(os.environ.get(DB_PATH_ENV))


async def error_payload(
    ctx: Context | Any, error: Exception, context: str, recoverable: bool = False
) -> dict[str, Any]:
    """Report a failed tool call to the client and build its error response."""
    logger.warning("%s failed: %s", context, error)
    if hasattr(ctx, "error"):
        await ctx.error(f"{context} failed: {error}")
    return {"status": "error", "error": ErrorResult(error, context, recoverable).to_dict()}
