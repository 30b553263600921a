"""Shortcuts operations.

``run_shortcut`` goes through "Shortcuts Events" so the Shortcuts app stays
in the background.  ``list_shortcuts`` returns a JSON document built on the
AppleScript side.
"""
from __future__ import annotations

from pydantic import Field

from applescript_mcp.core.applescript import escape_string
from applescript_mcp.mcp.registry import ScriptCategory, ScriptDefinition
from applescript_mcp.models.base import CamelModel


class RunShortcutArgs(CamelModel):
    name: str = Field(..., description="Name of the shortcut to run")
    input: str | None = Field(None, description="Optional input to provide to the shortcut")


class ListShortcutsArgs(CamelModel):
    limit: int | None = Field(
        None, ge=1, description="Optional limit on the number of shortcuts to return"
    )


def run_shortcut(args: RunShortcutArgs) -> str:
    name = escape_string(args.name)
    if args.input:
        command = f'run shortcut "{name}" with input "{escape_string(args.input)}"'
    else:
        command = f'run shortcut "{name}"'
    return f"""
try
  tell application "Shortcuts Events"
    {command}
  end tell
  return "Shortcut '{name}' executed successfully"
on error errMsg
  return "Failed to run shortcut: " & errMsg
end try
"""


_LIST_SHORTCUTS_JSON = r"""
  set jsonOutput to "{"
  set jsonOutput to jsonOutput & "\"status\": \"success\","
  set jsonOutput to jsonOutput & "\"shortcuts\": ["

  repeat with i from 1 to count of shortcutNames
    set currentName to item i of shortcutNames
    set jsonOutput to jsonOutput & "{\"name\": \"" & currentName & "\"}"
    if i < count of shortcutNames then
      set jsonOutput to jsonOutput & ", "
    end if
  end repeat

  set jsonOutput to jsonOutput & "]}"
  return jsonOutput
on error errMsg
  return "{\"status\": \"error\", \"message\": \"" & errMsg & "\"}"
end try
"""


def list_shortcuts(args: ListShortcutsArgs) -> str:
    limit_block = ""
    if args.limit:
        limit_block = f"""
    if (count of shortcutNames) > {args.limit} then
      set shortcutNames to items 1 through {args.limit} of shortcutNames
    end if"""
    return f"""
try
  tell application "Shortcuts"
    set shortcutNames to name of every shortcut{limit_block}
  end tell
""" + _LIST_SHORTCUTS_JSON


SHORTCUTS_CATEGORY = ScriptCategory(
    name="shortcuts",
    description="Shortcuts operations",
    scripts=(
        ScriptDefinition(
            "run_shortcut",
            "Run a shortcut with optional input. Uses Shortcuts Events to run in "
            "background without opening the app.",
            run_shortcut,
            RunShortcutArgs,
        ),
        ScriptDefinition(
            "list_shortcuts",
            "List all available shortcuts with optional limit",
            list_shortcuts,
            ListShortcutsArgs,
        ),
    ),
)
