"""
MCP HTTP Endpoints

HTTP-based MCP protocol endpoints for web clients.
For stdio-based clients (Cursor, Claude Desktop), use the standalone MCP server.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from applescript_mcp.contracts.mcp_types import MCPContentBlock, MCPServerInfo
from applescript_mcp.errors import ToolNotFoundError
from applescript_mcp.mcp.server import AppleScriptMCPServer, get_mcp_server
from applescript_mcp.models.base import CamelModel

router = APIRouter()
logger = logging.getLogger(__name__)


class MCPToolCallRequest(CamelModel):
    """Request to call an MCP tool."""
    name: str | None = None
    arguments: dict[str, object] = {}


class MCPToolCallResponse(CamelModel):
    """Response from MCP tool call."""
    success: bool
    content: list[MCPContentBlock]
    is_error: bool = False


class MCPToolListResponse(CamelModel):
    """Response containing the list of available MCP tools."""
    tools: list[dict[str, Any]]


# =============================================================================
# HTTP Endpoints for MCP
# =============================================================================

@router.get("/tools")
async def list_tools(
    server: AppleScriptMCPServer = Depends(get_mcp_server),
) -> MCPToolListResponse:
    """List all available MCP tools."""
    return MCPToolListResponse(tools=server.list_tools())


@router.get("/tools/{tool_name}")
async def get_tool(
    tool_name: str,
    server: AppleScriptMCPServer = Depends(get_mcp_server),
) -> dict[str, Any]:
    """Get details about a specific tool."""
    try:
        return dict(server.get_tool(tool_name))
    except ToolNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/tools/{tool_name}/call")
async def call_tool(
    tool_name: str,
    request: MCPToolCallRequest,
    server: AppleScriptMCPServer = Depends(get_mcp_server),
) -> MCPToolCallResponse:
    """Call an MCP tool. Returns 404 for unknown tools and 400 on validation failure."""
    if request.name and request.name != tool_name:
        logger.warning(f"Tool name mismatch: path={tool_name} body={request.name}")
    try:
        result = await server.call_tool(tool_name, request.arguments)
    except ToolNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    if result.bad_request:
        detail = result.content[0].get("text", "Invalid arguments") if result.content else "Invalid arguments"
        raise HTTPException(status_code=400, detail=detail)
    return MCPToolCallResponse(
        success=result.success,
        content=result.content,
        is_error=result.is_error,
    )


@router.get("/info")
async def server_info(
    server: AppleScriptMCPServer = Depends(get_mcp_server),
) -> MCPServerInfo:
    """Get MCP server information."""
    return server.get_server_info()
