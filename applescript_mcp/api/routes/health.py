"""Health check endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from applescript_mcp.config import settings
from applescript_mcp.mcp.server import AppleScriptMCPServer, get_mcp_server

router = APIRouter()


@router.get("/health")
async def health_check(
    server: AppleScriptMCPServer = Depends(get_mcp_server),
) -> dict[str, str | int]:
    """Basic health check."""
    return {
        "status": "ok",
        "service": settings.app_name,
        "version": settings.app_version,
        "categories": len(server.registry.categories),
        "tools": server.registry.script_count,
    }
