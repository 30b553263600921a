"""
AppleScript tool catalog.

Each module defines one ``ScriptCategory``.  ``ALL_CATEGORIES`` is the
registration order used by the default registry; ``tools/list`` reports the
tools in this order.
"""
from __future__ import annotations

from applescript_mcp.core.log_sink import MCPLogSink
from applescript_mcp.mcp.categories.calendar import CALENDAR_CATEGORY
from applescript_mcp.mcp.categories.clipboard import CLIPBOARD_CATEGORY
from applescript_mcp.mcp.categories.finder import FINDER_CATEGORY
from applescript_mcp.mcp.categories.iterm import ITERM_CATEGORY
from applescript_mcp.mcp.categories.mail import MAIL_CATEGORY
from applescript_mcp.mcp.categories.messages import MESSAGES_CATEGORY
from applescript_mcp.mcp.categories.notes import NOTES_CATEGORY
from applescript_mcp.mcp.categories.notifications import NOTIFICATIONS_CATEGORY
from applescript_mcp.mcp.categories.omnifocus import OMNIFOCUS_CATEGORY
from applescript_mcp.mcp.categories.pages import PAGES_CATEGORY
from applescript_mcp.mcp.categories.shortcuts import SHORTCUTS_CATEGORY
from applescript_mcp.mcp.categories.system import SYSTEM_CATEGORY
from applescript_mcp.mcp.registry import RegistryBuilder, ScriptCategory, ScriptRegistry

ALL_CATEGORIES: tuple[ScriptCategory, ...] = (
    SYSTEM_CATEGORY,
    CALENDAR_CATEGORY,
    FINDER_CATEGORY,
    CLIPBOARD_CATEGORY,
    NOTIFICATIONS_CATEGORY,
    ITERM_CATEGORY,
    MAIL_CATEGORY,
    PAGES_CATEGORY,
    SHORTCUTS_CATEGORY,
    MESSAGES_CATEGORY,
    NOTES_CATEGORY,
    OMNIFOCUS_CATEGORY,
)


def build_default_registry(log_sink: MCPLogSink | None = None) -> ScriptRegistry:
    """Register every built-in category and freeze the result."""
    return RegistryBuilder(log_sink).add_categories(ALL_CATEGORIES).build()


__all__ = [
    "ALL_CATEGORIES",
    "build_default_registry",
    "CALENDAR_CATEGORY",
    "CLIPBOARD_CATEGORY",
    "FINDER_CATEGORY",
    "ITERM_CATEGORY",
    "MAIL_CATEGORY",
    "MESSAGES_CATEGORY",
    "NOTES_CATEGORY",
    "NOTIFICATIONS_CATEGORY",
    "OMNIFOCUS_CATEGORY",
    "PAGES_CATEGORY",
    "SHORTCUTS_CATEGORY",
    "SYSTEM_CATEGORY",
]
