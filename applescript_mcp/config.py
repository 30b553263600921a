"""
AppleScript MCP Configuration

Environment-based configuration for the AppleScript MCP server.
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _app_version_from_package() -> str:
    """Read version from pyproject.toml — the single source of truth."""
    try:
        from importlib.metadata import version
        return version("applescript-mcp")
    except Exception:
        pass
    # Fallback: parse pyproject.toml directly (dev / non-installed mode)
    try:
        from pathlib import Path
        import re
        pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
        match = re.search(r'^version\s*=\s*"([^"]+)"', pyproject.read_text(), re.MULTILINE)
        if match:
            return match.group(1)
    except Exception:
        pass
    return "0.0.0-unknown"


# MCP protocol revision advertised in ``initialize`` responses.
MCP_PROTOCOL_VERSION: str = "2024-11-05"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service Info (app_version: single source is pyproject.toml when installed; else fallback)
    app_name: str = "AppleScript MCP"
    app_version: str = _app_version_from_package()
    server_name: str = "applescript-server"
    protocol_version: str = MCP_PROTOCOL_VERSION
    debug: bool = False
    log_level: str = "INFO"

    # Script execution
    osascript_path: str = "osascript"
    script_preview_chars: int = 100  # length of the script excerpt written to logs

    # HTTP transport
    host: str = "127.0.0.1"
    port: int = 10010

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def effective_log_level(self) -> str:
        """DEBUG when debug mode is on, otherwise the configured level."""
        return "DEBUG" if self.debug else self.log_level

    model_config = SettingsConfigDict(
        env_prefix="APPLESCRIPT_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience access
settings = get_settings()
