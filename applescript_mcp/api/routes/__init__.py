"""API route modules."""
from __future__ import annotations

from applescript_mcp.api.routes import health, mcp

__all__ = ["health", "mcp"]
