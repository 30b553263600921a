"""Tests for the osascript executor (applescript_mcp/core/executor.py).

The subprocess boundary is patched; nothing here launches osascript.
"""
from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from applescript_mcp.core.executor import OsascriptExecutor, script_preview
from applescript_mcp.core.log_sink import MCPLogSink
from applescript_mcp.errors import ScriptExecutionError


def _process(stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0) -> MagicMock:
    proc = MagicMock()
    proc.returncode = returncode
    proc.communicate = AsyncMock(return_value=(stdout, stderr))
    return proc


@pytest.fixture
def sink() -> MagicMock:
    return MagicMock(spec=MCPLogSink)


class TestScriptPreview:

    def test_short_script_unchanged(self) -> None:
        assert script_preview("return 1") == "return 1"

    def test_long_script_truncated(self) -> None:
        preview = script_preview("x" * 150)
        assert preview == "x" * 100 + "..."

    def test_custom_limit(self) -> None:
        assert script_preview("abcdef", limit=3) == "abc..."


class TestOsascriptExecutor:

    @pytest.mark.anyio
    async def test_success_returns_trimmed_stdout(self, sink: MagicMock) -> None:
        proc = _process(stdout=b"  Safari\n")
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            out = await OsascriptExecutor(log_sink=sink).run('return "Safari"')
        assert out == "Safari"

    @pytest.mark.anyio
    async def test_script_passed_as_single_argument(self, sink: MagicMock) -> None:
        script = 'display dialog "it\'s $HOME; rm -rf /"'
        spawn = AsyncMock(return_value=_process(stdout=b"ok"))
        with patch("asyncio.create_subprocess_exec", spawn):
            await OsascriptExecutor(osascript_path="/usr/bin/osascript", log_sink=sink).run(script)
        args, kwargs = spawn.call_args
        assert args == ("/usr/bin/osascript", "-e", script)
        assert kwargs["stdout"] == asyncio.subprocess.PIPE
        assert kwargs["stderr"] == asyncio.subprocess.PIPE

    @pytest.mark.anyio
    async def test_nonzero_exit_raises_with_stderr(self, sink: MagicMock) -> None:
        proc = _process(stderr=b"execution error: Not authorized (-1743)\n", returncode=1)
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            with pytest.raises(ScriptExecutionError) as exc:
                await OsascriptExecutor(log_sink=sink).run("return 1")
        assert str(exc.value) == "AppleScript execution failed: execution error: Not authorized (-1743)"

    @pytest.mark.anyio
    async def test_nonzero_exit_without_stderr(self, sink: MagicMock) -> None:
        proc = _process(returncode=2)
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            with pytest.raises(ScriptExecutionError) as exc:
                await OsascriptExecutor(log_sink=sink).run("return 1")
        assert "status 2" in str(exc.value)

    @pytest.mark.anyio
    async def test_missing_interpreter(self, sink: MagicMock) -> None:
        spawn = AsyncMock(side_effect=FileNotFoundError("No such file or directory: 'osascript'"))
        with patch("asyncio.create_subprocess_exec", spawn):
            with pytest.raises(ScriptExecutionError) as exc:
                await OsascriptExecutor(log_sink=sink).run("return 1")
        assert str(exc.value).startswith("AppleScript execution failed: ")
        assert isinstance(exc.value.__cause__, FileNotFoundError)

    @pytest.mark.anyio
    async def test_single_attempt(self, sink: MagicMock) -> None:
        spawn = AsyncMock(return_value=_process(stderr=b"boom", returncode=1))
        with patch("asyncio.create_subprocess_exec", spawn):
            with pytest.raises(ScriptExecutionError):
                await OsascriptExecutor(log_sink=sink).run("return 1")
        assert spawn.await_count == 1

    @pytest.mark.anyio
    async def test_logs_preview_and_timing(self, sink: MagicMock) -> None:
        proc = _process(stdout=b"done")
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            await OsascriptExecutor(log_sink=sink, preview_chars=5).run("return 12345")
        first, last = sink.log.call_args_list[0].args, sink.log.call_args_list[-1].args
        assert first[:2] == ("debug", "Executing AppleScript")
        assert first[2] == {"scriptPreview": "retur..."}
        assert last[:2] == ("debug", "AppleScript executed successfully")
        assert last[2]["outputLength"] == 4
        assert "executionTimeMs" in last[2]

    @pytest.mark.anyio
    async def test_failure_logged_at_error(self, sink: MagicMock) -> None:
        proc = _process(stderr=b"bad", returncode=1)
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            with pytest.raises(ScriptExecutionError):
                await OsascriptExecutor(log_sink=sink).run("return 1")
        level, message, data = sink.log.call_args_list[-1].args
        assert (level, message) == ("error", "AppleScript execution failed")
        assert data["error"] == "bad"
