"""Notification management."""
from __future__ import annotations

from pydantic import Field

from applescript_mcp.core.applescript import escape_string
from applescript_mcp.mcp.registry import ScriptCategory, ScriptDefinition
from applescript_mcp.models.base import CamelModel


class SendNotificationArgs(CamelModel):
    title: str = Field(..., description="Notification title")
    message: str = Field(..., description="Notification message")
    sound: bool = Field(True, description="Play sound with notification")


# Requires the Do Not Disturb keyboard shortcut to be set up in System Settings.
TOGGLE_DO_NOT_DISTURB = """
try
  tell application "System Events"
    keystroke "z" using {control down, option down, command down}
  end tell
  return "Toggled Do Not Disturb mode"
on error errMsg
  return "Failed to toggle Do Not Disturb: " & errMsg
end try
"""


def send_notification(args: SendNotificationArgs) -> str:
    sound = ' sound name "default"' if args.sound else ""
    return (
        f'display notification "{escape_string(args.message)}" '
        f'with title "{escape_string(args.title)}"{sound}'
    )


NOTIFICATIONS_CATEGORY = ScriptCategory(
    name="notifications",
    description="Notification management",
    scripts=(
        ScriptDefinition(
            "toggle_do_not_disturb",
            "Toggle Do Not Disturb mode using keyboard shortcut",
            TOGGLE_DO_NOT_DISTURB,
        ),
        ScriptDefinition(
            "send_notification",
            "Send a system notification",
            send_notification,
            SendNotificationArgs,
        ),
    ),
)
