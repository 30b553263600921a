"""Tests for the HTTP routes (applescript_mcp/api/routes)."""
from __future__ import annotations

import pytest
from httpx import AsyncClient

from applescript_mcp.main import app
from applescript_mcp.mcp.server import AppleScriptMCPServer, get_mcp_server


@pytest.mark.anyio
async def test_root(client: AsyncClient) -> None:
    resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.json()["mcp"] == "/api/v1/mcp"


@pytest.mark.anyio
async def test_health(client: AsyncClient, mcp_server: AppleScriptMCPServer) -> None:
    resp = await client.get("/api/v1/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["categories"] == 12
    assert data["tools"] == mcp_server.registry.script_count


@pytest.mark.anyio
async def test_list_tools(client: AsyncClient) -> None:
    resp = await client.get("/api/v1/mcp/tools")
    assert resp.status_code == 200
    tools = resp.json()["tools"]
    volume = next(t for t in tools if t["name"] == "system_volume")
    assert volume["inputSchema"]["properties"]["level"]["maximum"] == 100


@pytest.mark.anyio
async def test_get_tool(client: AsyncClient) -> None:
    resp = await client.get("/api/v1/mcp/tools/notes_create")
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "notes_create"
    assert data["inputSchema"]["required"] == ["title", "content"]


@pytest.mark.anyio
async def test_get_tool_not_found(client: AsyncClient) -> None:
    resp = await client.get("/api/v1/mcp/tools/bogus_tool")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Category not found: bogus"


@pytest.mark.anyio
async def test_call_tool(client: AsyncClient, fake_executor) -> None:
    fake_executor.output = "Finder"
    resp = await client.post(
        "/api/v1/mcp/tools/system_launch_app/call",
        json={"arguments": {"name": "Finder"}},
    )
    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "content": [{"type": "text", "text": "Finder"}],
        "isError": False,
    }
    assert fake_executor.call_count == 1
    assert 'tell application "Finder"' in fake_executor.scripts[0]


@pytest.mark.anyio
async def test_call_tool_not_found(client: AsyncClient, fake_executor) -> None:
    resp = await client.post("/api/v1/mcp/tools/system_reboot/call", json={"arguments": {}})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Script not found: reboot"
    assert fake_executor.call_count == 0


@pytest.mark.anyio
async def test_call_tool_invalid_arguments(client: AsyncClient, fake_executor) -> None:
    resp = await client.post(
        "/api/v1/mcp/tools/system_volume/call",
        json={"arguments": {"level": -5}},
    )
    assert resp.status_code == 400
    assert "Invalid arguments for system_volume" in resp.json()["detail"]
    assert fake_executor.call_count == 0


@pytest.mark.anyio
async def test_call_tool_execution_failure(
    failing_executor, log_sink, client: AsyncClient
) -> None:
    app.dependency_overrides[get_mcp_server] = lambda: AppleScriptMCPServer(
        executor=failing_executor, log_sink=log_sink,
    )
    resp = await client.post("/api/v1/mcp/tools/system_get_battery_status/call", json={})
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is False
    assert data["isError"] is True
    assert data["content"][0]["text"] == (
        "Error: AppleScript execution failed: Not authorized to send Apple events"
    )


@pytest.mark.anyio
async def test_info(client: AsyncClient) -> None:
    resp = await client.get("/api/v1/mcp/info")
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "applescript-server"
    assert data["capabilities"]["tools"] == {}
