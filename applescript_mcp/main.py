"""
AppleScript MCP API

FastAPI application exposing the AppleScript tool catalog over HTTP.
"""
from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from applescript_mcp.api.routes import health
from applescript_mcp.api.routes import mcp as mcp_routes
from applescript_mcp.config import settings
from applescript_mcp.mcp.server import get_mcp_server

# Configure logging
logging.basicConfig(
    level=settings.effective_log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler."""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    server = get_mcp_server()
    logger.info(
        f"Registered {len(server.registry.categories)} categories, "
        f"{server.registry.script_count} tools"
    )

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="macOS automation via AppleScript, exposed as MCP tools.",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    openapi_url="/openapi.json" if settings.debug else None,
)

# Include routers
app.include_router(health.router, prefix="/api/v1", tags=["health"])
app.include_router(mcp_routes.router, prefix="/api/v1/mcp", tags=["mcp"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with service info."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "mcp": "/api/v1/mcp",
    }
