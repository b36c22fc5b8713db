"""
Health monitoring tool for the marketplace server.
"""

from __future__ import annotations

import logging

from mcp.server.fastmcp import Context

from ..context_utils import get_lifespan_context
from ..monitoring import performance_monitor
from ..server import tool

logger = logging.getLogger(__name__)


@tool()
async def health_check(ctx: Context) -> dict:
    """
    Get the current health status of the marketplace server.

    Returns:
        dict: Store, memory and response time checks with an overall status
    """
    try:
        lifespan_ctx = get_lifespan_context(ctx) or {}
        health_status = performance_monitor.get_health_status(lifespan_ctx.get("store"))
        return {
            "status": "success",
            "data": health_status,
            "message": "Health check completed successfully",
        }
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return {
            "status": "error",
            "data": {"status": "unhealthy", "error": str(e)},
            "message": f"Health check failed: {e}",
        }
