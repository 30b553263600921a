"""MCP (Model Context Protocol) server for AppleScript automation."""
from __future__ import annotations

from applescript_mcp.mcp.server import AppleScriptMCPServer, ToolCallResult, get_mcp_server

__all__ = ["AppleScriptMCPServer", "ToolCallResult", "get_mcp_server"]
