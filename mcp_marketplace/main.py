"""
Materials marketplace server for Model Context Protocol.
"""

from __future__ import annotations

import argparse
import asyncio
import importlib
import logging
import os
import signal
import threading
import time
from types import FrameType
from typing import Any

from .config import DB_PATH_ENV, DEFAULT_SERVER_PORT

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("mcp_marketplace")

# Global variables to track MCP instance
mcp_instance = None
server_module = None
# Flag to track if the server is shutting down
is_shutting_down = False


def signal_handler(sig: int, _frame: FrameType | None) -> None:
    """Handle process interruption signals like SIGINT (Ctrl+C)."""
    global is_shutting_down

    match sig:
        case signal.SIGINT:
            if is_shutting_down:
                logger.info("Forced server shutdown (double Ctrl+C)")
                os._exit(1)
            logger.info("Graceful shutdown initiated (Ctrl+C)")
        case signal.SIGTERM:
            logger.info("Termination signal received")
        case _:
            logger.info("Unhandled signal: %s", sig)

    is_shutting_down = True

    if server_module and hasattr(server_module, "close_http_client"):
        try:
            loop = asyncio.get_event_loop()
            if loop.is_running():
                asyncio.create_task(server_module.close_http_client())  # noqa: RUF006
            else:
                loop.run_until_complete(server_module.close_http_client())
        except RuntimeError:
            logger.info("No active event loop, cannot close HTTP client cleanly")

    def delayed_exit() -> None:
        time.sleep(0.5)
        logger.info("Terminating process")
        os._exit(0)

    threading.Thread(target=delayed_exit, daemon=True).start()


def initialize_mcp() -> Any:
    """Initialize MCP server and register components."""
    global server_module
    server_module = importlib.import_module(".server", package="mcp_marketplace")
    mcp = server_module.mcp

    # Import all MCP components to register them
    importlib.import_module(".tools", package="mcp_marketplace")
    importlib.import_module(".prompts", package="mcp_marketplace")

    return mcp


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Materials marketplace search server for Model Context Protocol",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--port",
        type=int,
        default=DEFAULT_SERVER_PORT,
        help=f"Port number for the MCP server (default: {DEFAULT_SERVER_PORT})",
    )
    parser.add_argument(
        "--db-path",
        default=os.environ.get(DB_PATH_ENV),
        help=f"JSON file holding the store (default: ${DB_PATH_ENV}, else in-memory seed data)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Run the MCP server."""
    global mcp_instance, is_shutting_down

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        args = parse_args(argv)

        # FastMCP reads port from MCP_PORT environment variable
        os.environ["MCP_PORT"] = str(args.port)
        if args.db_path:
            os.environ[DB_PATH_ENV] = args.db_path

        mcp_instance = initialize_mcp()

        logger.info("Starting marketplace MCP server on port %s", args.port)
        logger.info("Tools: marketplace_search, interpret_marketplace_query, list_marketplace_vendors")
        logger.info("Tools: register_vendor, update_vendor_profile")
        logger.info("Tools: create_vendor_product, update_vendor_product, delete_vendor_product")
        logger.info("Tools: add_vendor_review, sanction_vendor, lift_vendor_sanction")
        logger.info("Tools: submit_inquiry, health_check")
        logger.info("Prompts: material_search_assistant, vendor_comparison_assistant")

        mcp_instance.run()
    except KeyboardInterrupt:
        is_shutting_down = True
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Error starting server: %s", e, exc_info=True)
        raise


if __name__ == "__main__":
    main()
