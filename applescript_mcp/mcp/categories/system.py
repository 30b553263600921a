"""System control and information scripts."""
from __future__ import annotations

import math

from pydantic import Field

from applescript_mcp.core.applescript import escape_string, quote
from applescript_mcp.mcp.registry import ScriptCategory, ScriptDefinition
from applescript_mcp.models.base import CamelModel

# AppleScript output volume runs 0-7.
MAX_OUTPUT_VOLUME = 7


class VolumeArgs(CamelModel):
    level: float = Field(..., ge=0, le=100, description="Volume level (0-100)")


class AppNameArgs(CamelModel):
    name: str = Field(..., description="Application name")


class QuitAppArgs(CamelModel):
    name: str = Field(..., description="Application name")
    force: bool = Field(False, description="Force quit if true")


def volume_step(level: float) -> int:
    """Map a 0-100 percentage onto the 0-7 output volume scale (half rounds up)."""
    return int(math.floor(level / 100 * MAX_OUTPUT_VOLUME + 0.5))


def set_volume(args: VolumeArgs) -> str:
    return f"set volume {volume_step(args.level)}"


def launch_app(args: AppNameArgs) -> str:
    name = escape_string(args.name)
    return f"""
try
  tell application "{name}"
    activate
  end tell
  return "Application {name} launched successfully"
on error errMsg
  return "Failed to launch application: " & errMsg
end try
"""


def quit_app(args: QuitAppArgs) -> str:
    name = escape_string(args.name)
    quit_command = "quit saving no" if args.force else "quit"
    return f"""
try
  tell application "{name}"
    {quit_command}
  end tell
  return "Application {name} quit successfully"
on error errMsg
  return "Failed to quit application: " & errMsg
end try
"""


GET_FRONTMOST_APP = (
    'tell application "System Events" to get name of first process whose frontmost is true'
)

TOGGLE_DARK_MODE = """
tell application "System Events"
  tell appearance preferences
    set dark mode to not dark mode
    return "Dark mode is now " & (dark mode as text)
  end tell
end tell
"""

GET_BATTERY_STATUS = f"""
try
  set powerSource to do shell script {quote("pmset -g batt")}
  return powerSource
on error errMsg
  return "Failed to get battery status: " & errMsg
end try
"""


SYSTEM_CATEGORY = ScriptCategory(
    name="system",
    description="System control and information",
    scripts=(
        ScriptDefinition("volume", "Set system volume", set_volume, VolumeArgs),
        ScriptDefinition(
            "get_frontmost_app",
            "Get the name of the frontmost application",
            GET_FRONTMOST_APP,
        ),
        ScriptDefinition("launch_app", "Launch an application", launch_app, AppNameArgs),
        ScriptDefinition("quit_app", "Quit an application", quit_app, QuitAppArgs),
        ScriptDefinition("toggle_dark_mode", "Toggle system dark mode", TOGGLE_DARK_MODE),
        ScriptDefinition(
            "get_battery_status",
            "Get battery level and charging status",
            GET_BATTERY_STATUS,
        ),
    ),
)
