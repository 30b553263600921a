"""Clipboard management operations."""
from __future__ import annotations

from typing import Literal

from pydantic import Field

from applescript_mcp.core.applescript import escape_string
from applescript_mcp.mcp.registry import ScriptCategory, ScriptDefinition
from applescript_mcp.models.base import CamelModel


class GetClipboardArgs(CamelModel):
    type: Literal["text", "file_paths"] = Field(
        "text", description="Type of clipboard content to get"
    )


class SetClipboardArgs(CamelModel):
    content: str = Field(..., description="Content to copy to clipboard")


GET_CLIPBOARD_TEXT = """
tell application "System Events"
  try
    return (the clipboard as text)
  on error errMsg
    return "Failed to get clipboard: " & errMsg
  end try
end tell
"""

GET_CLIPBOARD_FILE_PATHS = """
tell application "System Events"
  try
    set theClipboard to the clipboard
    if theClipboard starts with "file://" then
      set AppleScript's text item delimiters to linefeed
      set filePaths to {}
      repeat with aPath in paragraphs of (the clipboard as string)
        if aPath starts with "file://" then
          set end of filePaths to (POSIX path of (aPath as alias))
        end if
      end repeat
      return filePaths as string
    else
      return "No file paths in clipboard"
    end if
  on error errMsg
    return "Failed to get clipboard: " & errMsg
  end try
end tell
"""


def get_clipboard(args: GetClipboardArgs) -> str:
    if args.type == "file_paths":
        return GET_CLIPBOARD_FILE_PATHS
    return GET_CLIPBOARD_TEXT


def set_clipboard(args: SetClipboardArgs) -> str:
    return f"""
try
  set the clipboard to "{escape_string(args.content)}"
  return "Clipboard content set successfully"
on error errMsg
  return "Failed to set clipboard: " & errMsg
end try
"""


CLEAR_CLIPBOARD = """
try
  set the clipboard to ""
  return "Clipboard cleared successfully"
on error errMsg
  return "Failed to clear clipboard: " & errMsg
end try
"""


CLIPBOARD_CATEGORY = ScriptCategory(
    name="clipboard",
    description="Clipboard management operations",
    scripts=(
        ScriptDefinition("get_clipboard", "Get current clipboard content", get_clipboard, GetClipboardArgs),
        ScriptDefinition("set_clipboard", "Set clipboard content", set_clipboard, SetClipboardArgs),
        ScriptDefinition("clear_clipboard", "Clear clipboard content", CLEAR_CLIPBOARD),
    ),
)
