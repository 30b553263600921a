"""
Tests for application config (Settings).

Ensures settings load from the environment and defaults are sane.
"""
from __future__ import annotations

import pytest

from applescript_mcp.config import MCP_PROTOCOL_VERSION, Settings, get_settings


def test_settings_defaults() -> None:
    s = Settings()
    assert s.server_name == "applescript-server"
    assert s.protocol_version == MCP_PROTOCOL_VERSION == "2024-11-05"
    assert s.osascript_path == "osascript"
    assert s.app_version


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APPLESCRIPT_MCP_OSASCRIPT_PATH", "/usr/bin/osascript")
    monkeypatch.setenv("APPLESCRIPT_MCP_PORT", "9999")
    s = Settings()
    assert s.osascript_path == "/usr/bin/osascript"
    assert s.port == 9999


def test_log_level_normalised(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APPLESCRIPT_MCP_LOG_LEVEL", "warning")
    assert Settings().log_level == "WARNING"


def test_debug_forces_debug_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APPLESCRIPT_MCP_DEBUG", "true")
    monkeypatch.setenv("APPLESCRIPT_MCP_LOG_LEVEL", "ERROR")
    assert Settings().effective_log_level == "DEBUG"


def test_get_settings_cached() -> None:
    assert get_settings() is get_settings()
