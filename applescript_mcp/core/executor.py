"""
Script execution via the ``osascript`` interpreter.

The executor is the only component that leaves the process: it hands one
script to ``osascript -e`` and returns the captured standard output.  A
single attempt is made per call; there is no retry and no timeout.
"""
from __future__ import annotations

import asyncio
import time
from typing import Protocol

from applescript_mcp.errors import ScriptExecutionError
from applescript_mcp.core.log_sink import MCPLogSink


class ScriptExecutor(Protocol):
    """Runs a script in an external interpreter."""

    async def run(self, script: str) -> str:
        """Return trimmed stdout, or raise ``ScriptExecutionError``."""
        ...


def script_preview(script: str, limit: int = 100) -> str:
    """Shorten a script for log output."""
    if len(script) > limit:
        return script[:limit] + "..."
    return script


class OsascriptExecutor:
    """Executes AppleScript source with ``osascript``.

    The script is passed as a single argv element, so no shell quoting is
    involved.
    """

    def __init__(
        self,
        osascript_path: str = "osascript",
        log_sink: MCPLogSink | None = None,
        preview_chars: int = 100,
    ) -> None:
        self.osascript_path = osascript_path
        self.log_sink = log_sink or MCPLogSink()
        self.preview_chars = preview_chars

    async def run(self, script: str) -> str:
        preview = script_preview(script, self.preview_chars)
        self.log_sink.log("debug", "Executing AppleScript", {"scriptPreview": preview})

        start = time.monotonic()
        try:
            proc = await asyncio.create_subprocess_exec(
                self.osascript_path,
                "-e",
                script,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await proc.communicate()
        except OSError as e:
            self.log_sink.log(
                "error",
                "AppleScript execution failed",
                {"error": str(e), "scriptPreview": preview},
            )
            raise ScriptExecutionError(f"AppleScript execution failed: {e}") from e

        output = stdout.decode("utf-8", errors="replace")
        if proc.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            if not detail:
                detail = f"osascript exited with status {proc.returncode}"
            self.log_sink.log(
                "error",
                "AppleScript execution failed",
                {"error": detail, "scriptPreview": preview},
            )
            raise ScriptExecutionError(f"AppleScript execution failed: {detail}")

        elapsed_ms = int((time.monotonic() - start) * 1000)
        self.log_sink.log(
            "debug",
            "AppleScript executed successfully",
            {"executionTimeMs": elapsed_ms, "outputLength": len(output)},
        )
        return output.strip()
