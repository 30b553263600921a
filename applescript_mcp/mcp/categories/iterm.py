"""iTerm terminal operations."""
from __future__ import annotations

from pydantic import Field

from applescript_mcp.core.applescript import escape_string
from applescript_mcp.mcp.registry import ScriptCategory, ScriptDefinition
from applescript_mcp.models.base import CamelModel


class RunCommandArgs(CamelModel):
    command: str = Field(..., description="Command to run in iTerm")
    new_window: bool = Field(False, description="Whether to open in a new window (default: false)")


PASTE_CLIPBOARD = """
tell application "System Events" to keystroke "c" using {command down}
delay 0.1
tell application "iTerm"
  set w to current window
  tell w's current session to write text (the clipboard)
  activate
end tell
"""


def run_command(args: RunCommandArgs) -> str:
    if args.new_window:
        target = """  set newWindow to (create window with default profile)
  tell current session of newWindow"""
    else:
        target = """  set w to current window
  tell w's current session"""
    return f"""
tell application "iTerm"
{target}
    write text "{escape_string(args.command)}"
    activate
  end tell
end tell
"""


ITERM_CATEGORY = ScriptCategory(
    name="iterm",
    description="iTerm terminal operations",
    scripts=(
        ScriptDefinition("paste_clipboard", "Paste clipboard content into iTerm", PASTE_CLIPBOARD),
        ScriptDefinition("run", "Run a command in iTerm", run_command, RunCommandArgs),
    ),
)
