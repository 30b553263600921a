"""AppleScript MCP Server — macOS automation via Model Context Protocol.

Resolves tool names against the script registry, renders the AppleScript
for the call, runs it through ``osascript`` and wraps the output in a
``ToolCallResult``.
"""
from __future__ import annotations

from dataclasses import dataclass

from pydantic import ValidationError

from applescript_mcp.contracts.json_types import JSONValue
from applescript_mcp.contracts.mcp_types import (
    MCPCapabilities,
    MCPContentBlock,
    MCPServerInfo,
    MCPToolDef,
)
from applescript_mcp.core.executor import OsascriptExecutor, ScriptExecutor
from applescript_mcp.core.hierarchy import has_hierarchical_markers, parse_hierarchical_data
from applescript_mcp.core.log_sink import MCPLogSink
from applescript_mcp.errors import CategoryNotFoundError, ScriptNotFoundError
from applescript_mcp.mcp.registry import ResolvedScript, ScriptRegistry

# (category, script) whose output is converted to a folder tree.
HIERARCHICAL_SOURCE: tuple[str, str] = ("omnifocus", "listItems")


@dataclass
class ToolCallResult:
    """Result of an MCP tool call."""
    success: bool
    content: list[MCPContentBlock]
    is_error: bool = False
    bad_request: bool = False

    @classmethod
    def text_result(cls, text: str) -> ToolCallResult:
        return cls(success=True, content=[{"type": "text", "text": text}])

    @classmethod
    def error_result(cls, message: str, bad_request: bool = False) -> ToolCallResult:
        return cls(
            success=False,
            content=[{"type": "text", "text": f"Error: {message}"}],
            is_error=True,
            bad_request=bad_request,
        )

    @property
    def text(self) -> str:
        return "\n".join(block["text"] for block in self.content)


def format_validation_error(error: ValidationError) -> str:
    """Flatten pydantic errors into ``field: message; field: message``."""
    parts = []
    for detail in error.errors():
        loc = ".".join(str(p) for p in detail.get("loc", ())) or "arguments"
        parts.append(f"{loc}: {detail.get('msg', 'invalid value')}")
    return "; ".join(parts)


class AppleScriptMCPServer:
    """MCP Server for AppleScript automation.

    Exposes the registered script catalog via the MCP protocol, executes
    calls through the script executor and returns results to MCP clients.
    ``call_tool`` raises ``ToolNotFoundError`` for unknown tool names; every
    other failure is returned as an error result.
    """

    def __init__(
        self,
        registry: ScriptRegistry | None = None,
        executor: ScriptExecutor | None = None,
        log_sink: MCPLogSink | None = None,
    ) -> None:
        from applescript_mcp.config import get_settings
        settings = get_settings()
        self.name = settings.server_name
        self.version = settings.app_version
        self.protocol_version = settings.protocol_version
        self.log_sink = log_sink or MCPLogSink()
        if registry is None:
            from applescript_mcp.mcp.categories import build_default_registry
            registry = build_default_registry(self.log_sink)
        self.registry = registry
        self.executor: ScriptExecutor = executor or OsascriptExecutor(
            osascript_path=settings.osascript_path,
            log_sink=self.log_sink,
            preview_chars=settings.script_preview_chars,
        )

    # =========================================================================
    # MCP Protocol Methods
    # =========================================================================

    def get_server_info(self) -> MCPServerInfo:
        """Return MCP server information."""
        capabilities: MCPCapabilities = {"tools": {}, "logging": {}}
        return MCPServerInfo(
            name=self.name,
            version=self.version,
            protocolVersion=self.protocol_version,
            capabilities=capabilities,
        )

    def list_tools(self) -> list[MCPToolDef]:
        """List all available MCP tools."""
        return list(self.registry.list_tools())

    def get_tool(self, name: str) -> MCPToolDef:
        """Definition of one tool; raises ``ToolNotFoundError``."""
        return self.registry.resolve(name).tool_def()

    async def call_tool(
        self,
        name: str,
        arguments: dict[str, JSONValue] | None,
    ) -> ToolCallResult:
        """
        Execute an MCP tool call.

        Resolution failures propagate as ``ToolNotFoundError``.  Invalid
        arguments, script rendering errors and execution failures come back
        as error results.
        """
        self.log_sink.log(
            "info",
            "Tool execution requested",
            {"tool": name, "hasArguments": bool(arguments)},
        )

        resolved = self._resolve(name)

        self.log_sink.log(
            "debug",
            "Generating script content",
            {
                "categoryName": resolved.category.name,
                "scriptName": resolved.script.name,
                "isFunction": resolved.script.is_dynamic,
            },
        )
        try:
            script = resolved.script.render(arguments)
        except ValidationError as e:
            message = f"Invalid arguments for {name}: {format_validation_error(e)}"
            self.log_sink.log("warning", "Tool argument validation failed", {"tool": name, "errorMessage": message})
            return ToolCallResult.error_result(message, bad_request=True)
        except Exception as e:
            self.log_sink.log("error", "Error during tool execution", {"tool": name, "errorMessage": str(e)})
            return ToolCallResult.error_result(str(e) or type(e).__name__)

        try:
            raw_result = await self.executor.run(script)
        except Exception as e:
            self.log_sink.log("error", "Error during tool execution", {"tool": name, "errorMessage": str(e)})
            return ToolCallResult.error_result(str(e) or type(e).__name__)

        result = self._post_process(resolved, raw_result)

        self.log_sink.log(
            "info",
            "Tool execution completed successfully",
            {"tool": name, "resultLength": len(result)},
        )
        return ToolCallResult.text_result(result)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _resolve(self, name: str) -> ResolvedScript:
        try:
            return self.registry.resolve(name)
        except CategoryNotFoundError as e:
            self.log_sink.log("warning", "Category not found", {"categoryName": e.category_name})
            raise
        except ScriptNotFoundError as e:
            self.log_sink.log(
                "warning",
                "Script not found",
                {"categoryName": e.category_name, "scriptName": e.script_name},
            )
            raise

    def _post_process(self, resolved: ResolvedScript, raw_result: str) -> str:
        source = (resolved.category.name, resolved.script.name)
        if source == HIERARCHICAL_SOURCE and has_hierarchical_markers(raw_result):
            return parse_hierarchical_data(raw_result, self.log_sink)
        return raw_result


# Singleton instance
_server: AppleScriptMCPServer | None = None


def get_mcp_server() -> AppleScriptMCPServer:
    """Get the singleton MCP server instance."""
    global _server
    if _server is None:
        _server = AppleScriptMCPServer()
    return _server


def reset_mcp_server() -> None:
    """Drop the singleton so the next ``get_mcp_server`` builds a fresh one."""
    global _server
    _server = None
