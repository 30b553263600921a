"""
OmniFocus task management.

``createTask`` builds its script from the arguments that are actually set:
blank or missing notes, due dates, projects and tags produce no statements at
all, and ``projectName == "Inbox"`` leaves the task where it was created.

``listItems`` walks folders, projects and tasks and prints one record per
line between ``HIERARCHICAL_START`` / ``HIERARCHICAL_END``; the dispatcher
turns that listing into nested JSON (see ``core.hierarchy``).
"""
from __future__ import annotations

from pydantic import Field

from applescript_mcp.core.applescript import boolean, is_blank, quote
from applescript_mcp.core.hierarchy import HIERARCHICAL_END, HIERARCHICAL_START
from applescript_mcp.mcp.registry import ScriptCategory, ScriptDefinition
from applescript_mcp.models.base import CamelModel

INBOX_PROJECT = "Inbox"


class CreateTaskArgs(CamelModel):
    task_name: str = Field(..., description="Task name")
    task_notes: str | None = Field("", description="Notes for the task")
    due_date: str | None = Field(None, description="Due date (optional)")
    flagged: bool = Field(False, description="Flagged status")
    project_name: str | None = Field(INBOX_PROJECT, description="Name of the project")
    tag_names: list[str | None] | None = Field(
        default_factory=list, description="List of tag names"
    )


class ListItemsArgs(CamelModel):
    include_completed: bool = Field(
        False, description="Include completed tasks in the listing"
    )


def create_task(args: CreateTaskArgs) -> str:
    lines = [
        'tell application "OmniFocus"',
        "  tell default document",
        f"    set theTask to make new inbox task with properties "
        f"{{name:{quote(args.task_name)}, flagged:{boolean(args.flagged)}}}",
    ]

    if not is_blank(args.task_notes):
        lines.append(f"    set the note of theTask to {quote(args.task_notes)}")

    if not is_blank(args.due_date):
        lines += [
            "    try",
            f"      set due date of theTask to date {quote(args.due_date)}",
            "    on error",
            "      -- unparseable date: leave the task undated",
            "    end try",
        ]

    project = args.project_name
    if not is_blank(project) and project != INBOX_PROJECT:
        lines += [
            "    try",
            f"      set theProject to first project whose name is {quote(project)}",
            "      move theTask to theProject",
            "    on error",
            "      -- unknown project: the task stays in the inbox",
            "    end try",
        ]

    for tag in args.tag_names or []:
        if is_blank(tag):
            continue
        lines += [
            "    try",
            f"      set theTag to first tag whose name is {quote(tag)}",
            "      add theTag to tags of theTask",
            "    on error",
            "      -- unknown tag: skipped",
            "    end try",
        ]

    lines += [
        "    return id of theTask",
        "  end tell",
        "end tell",
    ]
    return "\n".join(lines)


# Record layout: kind|name|id|type|b0|b1|b2|depth|dueDate
LIST_ITEMS_HANDLERS = """
on cleanField(theText)
  if theText is missing value then return ""
  set AppleScript's text item delimiters to {"|", return, linefeed}
  set theParts to text items of (theText as text)
  set AppleScript's text item delimiters to " "
  set cleaned to theParts as text
  set AppleScript's text item delimiters to ""
  return cleaned
end cleanField

on dueText(theDate)
  if theDate is missing value then return ""
  set y to year of theDate as integer
  set m to text -2 thru -1 of ("0" & ((month of theDate) as integer))
  set d to text -2 thru -1 of ("0" & (day of theDate))
  return (y as text) & "-" & m & "-" & d
end dueText

on taskLines(theTask, depth, includeCompleted)
  using terms from application "OmniFocus"
    set outLines to {}
    if includeCompleted or not (completed of theTask) then
      set end of outLines to "TASK|" & my cleanField(name of theTask) & "|" & (id of theTask) & "|task|" & (completed of theTask) & "|" & (flagged of theTask) & "|" & (dropped of theTask) & "|" & depth & "|" & my dueText(due date of theTask)
      repeat with child in (every task of theTask)
        set outLines to outLines & my taskLines(child, depth + 1, includeCompleted)
      end repeat
    end if
    return outLines
  end using terms from
end taskLines

on projectLines(theProject, depth, includeCompleted)
  using terms from application "OmniFocus"
    set isDone to ((status of theProject) is done status)
    set isDropped to ((status of theProject) is dropped status)
    set outLines to {"PROJECT|" & my cleanField(name of theProject) & "|" & (id of theProject) & "|project|" & isDone & "|false|" & isDropped & "|" & depth & "|"}
    repeat with t in (every task of theProject)
      set outLines to outLines & my taskLines(t, depth + 1, includeCompleted)
    end repeat
    return outLines
  end using terms from
end projectLines

on folderLines(theFolder, depth, includeCompleted)
  using terms from application "OmniFocus"
    set outLines to {"FOLDER|" & my cleanField(name of theFolder) & "|" & (id of theFolder) & "|folder|" & (hidden of theFolder) & "|false|false|" & depth & "|"}
    repeat with p in (every project of theFolder)
      set outLines to outLines & my projectLines(p, depth + 1, includeCompleted)
    end repeat
    repeat with subFolder in (every folder of theFolder)
      set outLines to outLines & my folderLines(subFolder, depth + 1, includeCompleted)
    end repeat
    return outLines
  end using terms from
end folderLines
"""


def list_items(args: ListItemsArgs) -> str:
    return f"""
on run
  set includeCompleted to {boolean(args.include_completed)}
  set outputLines to {{"{HIERARCHICAL_START}"}}
  tell application "OmniFocus"
    tell default document
      repeat with f in (every folder)
        set outputLines to outputLines & my folderLines(f, 0, includeCompleted)
      end repeat
      repeat with p in (every project)
        set outputLines to outputLines & my projectLines(p, 0, includeCompleted)
      end repeat
      set end of outputLines to "INBOX|Inbox||inbox|false|false|false|0|"
      repeat with t in (every inbox task)
        set outputLines to outputLines & my taskLines(t, 1, includeCompleted)
      end repeat
    end tell
  end tell
  set end of outputLines to "{HIERARCHICAL_END}"
  set AppleScript's text item delimiters to linefeed
  set outputText to outputLines as text
  set AppleScript's text item delimiters to ""
  return outputText
end run
""" + LIST_ITEMS_HANDLERS


OMNIFOCUS_CATEGORY = ScriptCategory(
    name="omnifocus",
    description="OmniFocus task management operations",
    scripts=(
        ScriptDefinition("createTask", "Create a new task in OmniFocus", create_task, CreateTaskArgs),
        ScriptDefinition(
            "listItems",
            "List OmniFocus folders, projects and tasks as a nested tree",
            list_items,
            ListItemsArgs,
        ),
    ),
)
