"""Tests for server lifespan, prompts and the command-line entry point."""

import asyncio
import importlib
import os
import signal
import types
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

main_module = importlib.import_module("mcp_marketplace.main")
from mcp_marketplace.config import DB_PATH_ENV, DEFAULT_SERVER_PORT
from mcp_marketplace.prompts import material_search_assistant, vendor_comparison_assistant
from mcp_marketplace.server import app_lifespan, close_http_client
from mcp_marketplace.store import MarketStore


def test_parse_args_defaults(monkeypatch) -> None:
    monkeypatch.delenv(DB_PATH_ENV, raising=False)
    args = main_module.parse_args([])
    assert args.port == DEFAULT_SERVER_PORT
    assert args.db_path is None


def test_parse_args_overrides() -> None:
    args = main_module.parse_args(["--port", "8080", "--db-path", "/tmp/market.json"])
    assert args.port == 8080
    assert args.db_path == "/tmp/market.json"


def test_prompts_mention_search_tool() -> None:
    search_prompt = material_search_assistant("75kw 모터 인버터")
    comparison_prompt = vendor_comparison_assistant("샌드위치 패널", min_rating=4)

    assert "75kw 모터 인버터" in search_prompt
    assert "natural_language=True" in search_prompt
    assert 'view="vendor"' in comparison_prompt
    assert "min_rating=4" in comparison_prompt


@pytest.mark.asyncio
async def test_app_lifespan_initializes_and_cleans_up(monkeypatch) -> None:
    monkeypatch.delenv(DB_PATH_ENV, raising=False)
    client = AsyncMock()
    client.aclose = AsyncMock()

    with patch("mcp_marketplace.server.new_http_client", return_value=client):
        async with app_lifespan(MagicMock()) as resources:
            assert resources["http_client"] is client
            assert isinstance(resources["store"], MarketStore)
            assert resources["store"].path is None

    client.aclose.assert_awaited()


@pytest.mark.asyncio
async def test_app_lifespan_uses_configured_store(monkeypatch, tmp_path) -> None:
    path = tmp_path / "market.json"
    monkeypatch.setenv(DB_PATH_ENV, str(path))

    with patch("mcp_marketplace.server.new_http_client", return_value=AsyncMock()):
        async with app_lifespan(MagicMock()) as resources:
            assert resources["store"].path == path

    assert path.exists()


@pytest.mark.asyncio
async def test_close_http_client_handles_existing_client() -> None:
    from mcp_marketplace import server as server_module

    server_module.http_client = AsyncMock()
    await close_http_client()
    assert server_module.http_client is None


def test_initialize_mcp_registers_components() -> None:
    mcp = main_module.initialize_mcp()

    from mcp_marketplace.server import mcp as server_mcp

    assert mcp is server_mcp
    main_module.server_module = None


class LoopStub:
    def __init__(self) -> None:
        self.ran = False

    def is_running(self) -> bool:
        return False

    def run_until_complete(self, coro) -> None:
        asyncio.run(coro)
        self.ran = True


class ImmediateThread:
    def __init__(self, target, daemon=False) -> None:
        self._target = target
        self.daemon = daemon

    def start(self) -> None:
        self._target()


def test_signal_handler_closes_client_and_exits() -> None:
    close_called = False

    async def close_http_client() -> None:
        nonlocal close_called
        close_called = True

    main_module.server_module = types.SimpleNamespace(close_http_client=close_http_client)
    main_module.is_shutting_down = False

    with patch("mcp_marketplace.main.asyncio.get_event_loop", return_value=LoopStub()):
        with patch("mcp_marketplace.main.threading.Thread", ImmediateThread):
            with patch("mcp_marketplace.main.os._exit") as mock_exit:
                with patch("mcp_marketplace.main.time.sleep", return_value=None):
                    main_module.signal_handler(signal.SIGINT, None)

    assert close_called is True
    mock_exit.assert_called_once_with(0)
    main_module.server_module = None
    main_module.is_shutting_down = False


def test_signal_handler_forced_exit() -> None:
    main_module.server_module = None
    main_module.is_shutting_down = True

    with patch("mcp_marketplace.main.threading.Thread", ImmediateThread):
        with patch("mcp_marketplace.main.os._exit") as mock_exit:
            with patch("mcp_marketplace.main.time.sleep", return_value=None):
                main_module.signal_handler(signal.SIGINT, None)

    assert any(call.args and call.args[0] == 1 for call in mock_exit.call_args_list)
    main_module.is_shutting_down = False


def test_main_sets_environment_and_runs(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("MCP_PORT", "0")
    monkeypatch.setenv(DB_PATH_ENV, "unused")
    fake_mcp = MagicMock()
    db_path = str(tmp_path / "market.json")

    with patch("mcp_marketplace.main.signal.signal"):
        with patch("mcp_marketplace.main.initialize_mcp", return_value=fake_mcp):
            main_module.main(["--port", "4100", "--db-path", db_path])

    fake_mcp.run.assert_called_once()
    assert os.environ["MCP_PORT"] == "4100"
    assert os.environ[DB_PATH_ENV] == db_path
    main_module.mcp_instance = None


def test_main_handles_keyboard_interrupt(monkeypatch) -> None:
    monkeypatch.setenv("MCP_PORT", "0")
    fake_mcp = MagicMock()
    fake_mcp.run.side_effect = KeyboardInterrupt

    with patch("mcp_marketplace.main.signal.signal"):
        with patch("mcp_marketplace.main.initialize_mcp", return_value=fake_mcp):
            main_module.is_shutting_down = False
            main_module.main([])

    assert main_module.is_shutting_down is True
    main_module.is_shutting_down = False
    main_module.mcp_instance = None


def test_main_propagates_unexpected_errors(monkeypatch) -> None:
    monkeypatch.setenv("MCP_PORT", "0")
    with patch("mcp_marketplace.main.signal.signal"):
        with patch("mcp_marketplace.main.initialize_mcp", side_effect=RuntimeError("boom")):
            with pytest.raises(RuntimeError):
                main_module.main([])
