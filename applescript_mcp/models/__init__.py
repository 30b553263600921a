"""Pydantic base models."""
from __future__ import annotations

from applescript_mcp.models.base import CamelModel, to_camel

__all__ = ["CamelModel", "to_camel"]
