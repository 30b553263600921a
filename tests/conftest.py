"""Pytest configuration and fixtures."""
from __future__ import annotations

import asyncio
import logging

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from applescript_mcp.core.log_sink import MCPLogSink
from applescript_mcp.errors import ScriptExecutionError
from applescript_mcp.mcp.categories import build_default_registry
from applescript_mcp.mcp.server import AppleScriptMCPServer, get_mcp_server, reset_mcp_server


def pytest_configure(config):
    """Ensure asyncio_mode is auto so async fixtures work when pyproject is not in cwd."""
    if hasattr(config.option, "asyncio_mode") and config.option.asyncio_mode is None:
        config.option.asyncio_mode = "auto"
    logging.getLogger("httpcore").setLevel(logging.CRITICAL)


class FakeExecutor:
    """Script executor that records scripts instead of running osascript."""

    def __init__(self, output: str = "ok", error: Exception | None = None, delay: float = 0.0) -> None:
        self.output = output
        self.error = error
        self.delay = delay
        self.scripts: list[str] = []

    @property
    def call_count(self) -> int:
        return len(self.scripts)

    async def run(self, script: str) -> str:
        self.scripts.append(script)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _reset_mcp_server():
    """Drop the singleton server between tests to prevent cross-test pollution."""
    yield
    reset_mcp_server()


@pytest.fixture
def log_sink() -> MCPLogSink:
    return MCPLogSink(logger_name="applescript_mcp.tests")


@pytest.fixture
def executor_factory() -> type[FakeExecutor]:
    return FakeExecutor


@pytest.fixture
def fake_executor() -> FakeExecutor:
    return FakeExecutor(output="ok")


@pytest.fixture
def failing_executor() -> FakeExecutor:
    return FakeExecutor(
        error=ScriptExecutionError("AppleScript execution failed: Not authorized to send Apple events")
    )


@pytest.fixture
def mcp_server(fake_executor: FakeExecutor, log_sink: MCPLogSink) -> AppleScriptMCPServer:
    return AppleScriptMCPServer(
        registry=build_default_registry(log_sink),
        executor=fake_executor,
        log_sink=log_sink,
    )


@pytest_asyncio.fixture
async def client(mcp_server: AppleScriptMCPServer):
    """Async HTTP client bound to the app, with the MCP server swapped for the test one."""
    from applescript_mcp.main import app

    app.dependency_overrides[get_mcp_server] = lambda: mcp_server
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
