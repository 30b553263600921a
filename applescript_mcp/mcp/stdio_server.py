#!/usr/bin/env python3
"""
AppleScript MCP Stdio Server

Standalone MCP server that communicates via stdio (newline-delimited
JSON-RPC 2.0).  This can be registered with Cursor or Claude Desktop.

Usage:
    python -m applescript_mcp.mcp.stdio_server
    applescript-mcp stdio
"""
from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import TYPE_CHECKING, TextIO

from applescript_mcp.contracts.json_types import JSONObject
from applescript_mcp.contracts.mcp_types import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    MCPCallResult,
    MCPErrorResponse,
    MCPInitializeResult,
    MCPNotification,
    MCPResponse,
    MCPSuccessResponse,
    MCPToolsListResult,
)
from applescript_mcp.errors import ToolNotFoundError

if TYPE_CHECKING:
    from applescript_mcp.mcp.server import AppleScriptMCPServer

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Log to stderr; stdout carries the MCP protocol."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _error(msg_id: str | int | None, code: int, message: str) -> MCPErrorResponse:
    return {
        "jsonrpc": "2.0",
        "id": msg_id,
        "error": {"code": code, "message": message},
    }


def _result(
    msg_id: str | int | None,
    result: MCPInitializeResult | MCPToolsListResult | MCPCallResult | JSONObject,
) -> MCPSuccessResponse:
    return {"jsonrpc": "2.0", "id": msg_id, "result": result}


class StdioMCPServer:
    """MCP server that communicates via stdin/stdout.

    Each input line is dispatched as its own task, so a slow ``tools/call``
    does not hold up the requests read after it. Responses are written in
    completion order.
    """

    def __init__(
        self,
        mcp: AppleScriptMCPServer | None = None,
        output: TextIO | None = None,
    ) -> None:
        if mcp is None:
            from applescript_mcp.mcp.server import get_mcp_server
            mcp = get_mcp_server()
        self.mcp = mcp
        self._output = output
        self._tasks: set[asyncio.Task[None]] = set()

    async def run(self) -> None:
        """Main loop - read from stdin, write to stdout."""
        logger.info("AppleScript MCP Server starting...")

        reader = asyncio.StreamReader()
        protocol = asyncio.StreamReaderProtocol(reader)
        await asyncio.get_event_loop().connect_read_pipe(
            lambda: protocol, sys.stdin
        )
        await self.serve(reader)

    async def serve(self, reader: asyncio.StreamReader) -> None:
        """Dispatch every line from ``reader``; return once all replies are sent."""
        try:
            while True:
                line = await reader.readline()
                if not line:
                    break
                task = asyncio.create_task(self._dispatch(line))
                self._tasks.add(task)
                task.add_done_callback(self._tasks.discard)
            if self._tasks:
                await asyncio.gather(*self._tasks)
        finally:
            self.mcp.log_sink.detach()
            logger.info("AppleScript MCP Server stopped")

    async def _dispatch(self, line: bytes) -> None:
        response = await self.handle_line(line)
        if response:
            self.send_response(response)

    async def handle_line(self, line: bytes | str) -> MCPResponse | None:
        """Decode one input line and dispatch it."""
        text = line.decode() if isinstance(line, bytes) else line
        if not text.strip():
            return None
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON: {e}")
            return _error(None, PARSE_ERROR, f"Parse error: {e}")

        message: JSONObject = raw if isinstance(raw, dict) else {}
        try:
            return await self.handle_message(message)
        except Exception as e:
            logger.exception(f"Error handling message: {e}")
            if "id" not in message:
                return None
            raw_id = message.get("id")
            msg_id = raw_id if isinstance(raw_id, (str, int)) else None
            return _error(msg_id, INTERNAL_ERROR, f"Internal error: {e}")

    def send_response(self, message: MCPResponse | MCPNotification) -> None:
        """Send a response via stdout."""
        out = self._output or sys.stdout
        out.write(json.dumps(message) + "\n")
        out.flush()

    async def handle_message(self, message: JSONObject) -> MCPResponse | None:
        """Handle an incoming MCP message."""
        method = str(message.get("method", ""))
        raw_id = message.get("id")
        msg_id = raw_id if isinstance(raw_id, (str, int)) else None
        is_notification = "id" not in message
        raw_params = message.get("params")
        params: JSONObject = raw_params if isinstance(raw_params, dict) else {}

        logger.debug(f"Received: {method}")

        if method == "initialize":
            self.mcp.log_sink.attach(self.send_response)
            info = self.mcp.get_server_info()
            return _result(msg_id, {
                "protocolVersion": info["protocolVersion"],
                "serverInfo": {"name": info["name"], "version": info["version"]},
                "capabilities": info["capabilities"],
            })

        elif method == "notifications/initialized":
            # Client is ready, no response needed
            logger.info("Client initialized")
            return None

        elif is_notification:
            logger.debug(f"Ignoring notification: {method}")
            return None

        elif method == "ping":
            return _result(msg_id, {})

        elif method == "tools/list":
            return _result(msg_id, {"tools": self.mcp.list_tools()})

        elif method == "tools/call":
            tool_name = str(params.get("name", ""))
            raw_args = params.get("arguments")
            arguments: JSONObject = raw_args if isinstance(raw_args, dict) else {}
            try:
                result = await self.mcp.call_tool(tool_name, arguments)
            except ToolNotFoundError as e:
                return _error(msg_id, METHOD_NOT_FOUND, str(e))
            return _result(msg_id, {
                "content": result.content,
                "isError": result.is_error,
            })

        elif method == "logging/setLevel":
            level = str(params.get("level", ""))
            try:
                self.mcp.log_sink.set_level(level)
            except ValueError:
                return _error(msg_id, INVALID_PARAMS, f"Invalid log level: {level}")
            return _result(msg_id, {})

        else:
            logger.warning(f"Unknown method: {method}")
            return _error(msg_id, METHOD_NOT_FOUND, f"Method not found: {method}")


async def main() -> None:
    from applescript_mcp.config import settings
    configure_logging(settings.effective_log_level)
    server = StdioMCPServer()
    await server.run()


if __name__ == "__main__":
    asyncio.run(main())
