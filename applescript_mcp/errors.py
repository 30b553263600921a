"""Exception types for tool resolution and script execution."""
from __future__ import annotations

import enum


class AppleScriptMCPError(Exception):
    """Base exception for AppleScript MCP errors."""


class ToolNotFoundError(AppleScriptMCPError):
    """Raised when a tool name does not resolve to a registered script.

    This is a protocol-level fault: transports report it as "method not
    found" rather than wrapping it in a tool result envelope.
    """

    def __init__(self, tool_name: str, message: str) -> None:
        super().__init__(message)
        self.tool_name = tool_name


class CategoryNotFoundError(ToolNotFoundError):
    """The category part of the tool name matches no registered category."""

    def __init__(self, tool_name: str, category_name: str) -> None:
        super().__init__(tool_name, f"Category not found: {category_name}")
        self.category_name = category_name


class ScriptNotFoundError(ToolNotFoundError):
    """The category exists but holds no script with the requested name."""

    def __init__(self, tool_name: str, category_name: str, script_name: str) -> None:
        super().__init__(tool_name, f"Script not found: {script_name}")
        self.category_name = category_name
        self.script_name = script_name


class ScriptExecutionError(AppleScriptMCPError):
    """The external interpreter failed; the message is its raw failure text."""


class ExitCode(enum.IntEnum):
    """Exit codes of the ``applescript-mcp`` console script.

    0 — success
    1 — the tool ran and returned an error result
    2 — tool name did not resolve
    3 — user error (unparseable ``--args``)
    """

    SUCCESS = 0
    TOOL_ERROR = 1
    TOOL_NOT_FOUND = 2
    USER_ERROR = 3
