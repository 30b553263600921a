"""Finder and file operations."""
from __future__ import annotations

from pydantic import Field

from applescript_mcp.core.applescript import escape_string
from applescript_mcp.mcp.registry import ScriptCategory, ScriptDefinition
from applescript_mcp.models.base import CamelModel


class SearchFilesArgs(CamelModel):
    query: str = Field(..., description="Search term")
    location: str = Field("~", description="Search location (default: home folder)")


class QuickLookArgs(CamelModel):
    path: str = Field(..., description="File path to preview")


GET_SELECTED_FILES = """
tell application "Finder"
  try
    set selectedItems to selection
    if selectedItems is {} then
      return "No items selected"
    end if

    set itemPaths to ""
    repeat with theItem in selectedItems
      set itemPaths to itemPaths & (POSIX path of (theItem as alias)) & linefeed
    end repeat

    return itemPaths
  on error errMsg
    return "Failed to get selected files: " & errMsg
  end try
end tell
"""


def search_files(args: SearchFilesArgs) -> str:
    location = escape_string(args.location or "~")
    query = escape_string(args.query)
    # "~" is expanded on the AppleScript side, where the user's home is known.
    return f"""
set searchPath to "{location}"
if searchPath is "~" then
  set searchPath to POSIX path of (path to home folder)
else if searchPath starts with "~/" then
  set searchPath to (POSIX path of (path to home folder)) & (text 3 thru -1 of searchPath)
end if
tell application "Finder"
  try
    set theFolder to POSIX file searchPath as alias
    set theFiles to every file of folder theFolder whose name contains "{query}"
    set resultList to ""
    repeat with aFile in theFiles
      set resultList to resultList & (POSIX path of (aFile as alias)) & return
    end repeat
    if resultList is "" then
      return "No files found matching '{query}'"
    end if
    return resultList
  on error errMsg
    return "Failed to search files: " & errMsg
  end try
end tell
"""


def quick_look_file(args: QuickLookArgs) -> str:
    path = escape_string(args.path)
    return f"""
try
  set filePath to POSIX file "{path}"
  tell application "Finder"
    activate
    select filePath
    tell application "System Events"
      delay 0.5
      key code 49
    end tell
  end tell
  return "Quick Look preview opened for {path}"
on error errMsg
  return "Failed to open Quick Look: " & errMsg
end try
"""


FINDER_CATEGORY = ScriptCategory(
    name="finder",
    description="Finder and file operations",
    scripts=(
        ScriptDefinition(
            "get_selected_files",
            "Get currently selected files in Finder",
            GET_SELECTED_FILES,
        ),
        ScriptDefinition("search_files", "Search for files by name", search_files, SearchFilesArgs),
        ScriptDefinition(
            "quick_look_file",
            "Preview a file using Quick Look",
            quick_look_file,
            QuickLookArgs,
        ),
    ),
)
