"""
Apple Notes operations.

Notes stores bodies as HTML.  ``create`` accepts markdown-like text and turns
the enabled constructs into HTML before handing it over; ``createRawHtml``
passes HTML through untouched.  ``get`` and ``search`` build their JSON
results on the AppleScript side.
"""
from __future__ import annotations

import re

from pydantic import Field

from applescript_mcp.core.applescript import escape_string
from applescript_mcp.mcp.registry import ScriptCategory, ScriptDefinition
from applescript_mcp.models.base import CamelModel


class NoteFormat(CamelModel):
    """Which markdown-like constructs to convert to HTML."""

    headings: bool = Field(False, description="Enable heading formatting (# Heading)")
    bold: bool = Field(False, description="Enable bold formatting (**text**)")
    italic: bool = Field(False, description="Enable italic formatting (*text*)")
    underline: bool = Field(False, description="Enable underline formatting (~text~)")
    links: bool = Field(False, description="Enable link formatting ([text](url))")
    lists: bool = Field(False, description="Enable list formatting (- item or 1. item)")


class CreateNoteArgs(CamelModel):
    title: str = Field(..., description="Title of the note")
    content: str = Field(
        ..., description="Content of the note, can include markdown-like syntax for formatting"
    )
    format: NoteFormat = Field(
        default_factory=NoteFormat, description="Formatting options for the note content"
    )


class CreateRawHtmlArgs(CamelModel):
    title: str = Field(..., description="Title of the note")
    html: str = Field(..., description="Raw HTML content for the note")


class ListNotesArgs(CamelModel):
    folder: str | None = Field(None, description="Optional folder name to list notes from")


class GetNoteArgs(CamelModel):
    title: str = Field(..., description="Title of the note to retrieve")
    folder: str | None = Field(None, description="Optional folder name to search in")


class SearchNotesArgs(CamelModel):
    query: str = Field(..., description="Text to search for in notes (title and body)")
    folder: str | None = Field(None, description="Optional folder name to search in")
    limit: int = Field(5, ge=1, description="Maximum number of results to return (default: 5)")
    include_body: bool = Field(
        True, description="Whether to include note body in results (default: true)"
    )


# ---------------------------------------------------------------------------
# Markdown-ish → HTML
# ---------------------------------------------------------------------------

_HEADING_RULES = (
    (re.compile(r"^# (.+)$", re.MULTILINE), r"<h1>\1</h1>"),
    (re.compile(r"^## (.+)$", re.MULTILINE), r"<h2>\1</h2>"),
    (re.compile(r"^### (.+)$", re.MULTILINE), r"<h3>\1</h3>"),
)
_BOLD_RULES = (
    (re.compile(r"\*\*(.+?)\*\*"), r"<b>\1</b>"),
    (re.compile(r"__(.+?)__"), r"<b>\1</b>"),
)
_ITALIC_RULES = (
    (re.compile(r"\*(.+?)\*"), r"<i>\1</i>"),
    (re.compile(r"_(.+?)_"), r"<i>\1</i>"),
)
_UNDERLINE_RULES = ((re.compile(r"~(.+?)~"), r"<u>\1</u>"),)
_LINK_RULES = ((re.compile(r"\[(.+?)\]\((.+?)\)"), r'<a href="\2">\1</a>'),)

_UNORDERED_ITEM = re.compile(r"^[*-] (.+)$", re.MULTILINE)
_ORDERED_ITEM = re.compile(r"^\d+\. (.+)$", re.MULTILINE)
_NEWLINE_RUNS = re.compile(r"\n+")


def _apply(rules, text: str) -> str:
    for pattern, replacement in rules:
        text = pattern.sub(replacement, text)
    return text


def _collect_list(text: str, pattern: re.Pattern[str], tag: str) -> str:
    """Move every line matching ``pattern`` into one trailing HTML list."""
    matches = list(pattern.finditer(text))
    if not matches:
        return text
    items = "".join(f"<li>{m.group(1)}</li>" for m in matches)
    for m in matches:
        text = text.replace(m.group(0), "", 1)
    return _NEWLINE_RUNS.sub("\n", text) + f"<{tag}>{items}</{tag}>"


def generate_note_html(content: str, fmt: NoteFormat | None = None) -> str:
    """Convert note text to the HTML body Notes expects.

    Conversions run in a fixed order (headings, bold, italic, underline,
    links, lists); blank-line separated paragraphs that do not already start
    with a tag are wrapped in ``<p>``.
    """
    fmt = fmt or NoteFormat()
    html = content or ""

    if fmt.headings:
        html = _apply(_HEADING_RULES, html)
    if fmt.bold:
        html = _apply(_BOLD_RULES, html)
    if fmt.italic:
        html = _apply(_ITALIC_RULES, html)
    if fmt.underline:
        html = _apply(_UNDERLINE_RULES, html)
    if fmt.links:
        html = _apply(_LINK_RULES, html)
    if fmt.lists:
        html = _collect_list(html, _UNORDERED_ITEM, "ul")
        html = _collect_list(html, _ORDERED_ITEM, "ol")

    paragraphs = []
    for para in html.split("\n\n"):
        if para.strip() and not para.strip().startswith("<"):
            paragraphs.append(f"<p>{para}</p>")
        else:
            paragraphs.append(para)
    return "\n".join(paragraphs)


# ---------------------------------------------------------------------------
# Scripts
# ---------------------------------------------------------------------------


def _new_note_script(title: str, body_html: str) -> str:
    return f"""
tell application "Notes"
  make new note with properties {{body:"{escape_string(body_html)}", name:"{escape_string(title)}"}}
end tell
"""


def create_note(args: CreateNoteArgs) -> str:
    return _new_note_script(args.title or "New Note", generate_note_html(args.content, args.format))


def create_raw_html(args: CreateRawHtmlArgs) -> str:
    return _new_note_script(args.title or "New Note", args.html)


def _within_notes(folder: str | None, body: str) -> str:
    """Wrap ``body`` in a Notes tell block.

    ``body`` refers to the note collection as ``{notes}``; with a folder the
    collection is that folder's notes and a missing folder is reported.
    """
    if not folder:
        scoped = body.replace("{notes}", "notes")
        return f"""
tell application "Notes"
{scoped}
end tell
"""
    name = escape_string(folder)
    scoped = body.replace("{notes}", "notes of targetFolder")
    return f"""
tell application "Notes"
  set folderList to folders whose name is "{name}"
  if length of folderList > 0 then
    set targetFolder to item 1 of folderList
{scoped}
  else
    return "Folder not found: {name}"
  end if
end tell
"""


def list_notes(args: ListNotesArgs) -> str:
    return _within_notes(
        args.folder,
        """  set noteNames to name of {notes}
  return noteNames as string""",
    )


_NOTE_JSON_HEAD = r"""    set noteJson to "{\"title\": \""
    set noteJson to noteJson & noteTitle & "\""
"""
_NOTE_JSON_BODY = r"""    set noteJson to noteJson & ", \"body\": \"" & noteBody & "\""
"""
_NOTE_JSON_TAIL = r"""    set noteJson to noteJson & ", \"creationDate\": \"" & noteCreationDate & "\""
    set noteJson to noteJson & ", \"modificationDate\": \"" & noteModDate & "\"}"
"""


def get_note(args: GetNoteArgs) -> str:
    title = escape_string(args.title)
    body = (
        f"""  set matchingNotes to {{notes}} whose name is "{title}"
  if length of matchingNotes > 0 then
    set n to item 1 of matchingNotes
    set noteTitle to name of n
    set noteBody to body of n
    set noteCreationDate to creation date of n
    set noteModDate to modification date of n
"""
        + _NOTE_JSON_HEAD
        + _NOTE_JSON_BODY
        + _NOTE_JSON_TAIL
        + f"""    return noteJson
  else
    return "Note not found: {title}"
  end if"""
    )
    return _within_notes(args.folder, body)


def search_notes(args: SearchNotesArgs) -> str:
    query = escape_string(args.query)
    read_body = "    set noteBody to body of n\n" if args.include_body else ""
    json_body = _NOTE_JSON_BODY if args.include_body else ""
    body = (
        f"""  set matchingNotes to {{}}
  repeat with n in {{notes}}
    if name of n contains "{query}" or body of n contains "{query}" then
      set end of matchingNotes to contents of n
    end if
  end repeat

  set resultCount to length of matchingNotes
  if resultCount > {args.limit} then set resultCount to {args.limit}

  set jsonResult to "["
  repeat with i from 1 to resultCount
    set n to item i of matchingNotes
    set noteTitle to name of n
    set noteCreationDate to creation date of n
    set noteModDate to modification date of n
"""
        + read_body
        + _NOTE_JSON_HEAD
        + json_body
        + _NOTE_JSON_TAIL
        + """    set jsonResult to jsonResult & noteJson
    if i < resultCount then set jsonResult to jsonResult & ", "
  end repeat
  set jsonResult to jsonResult & "]"

  return jsonResult"""
    )
    return _within_notes(args.folder, body)


NOTES_CATEGORY = ScriptCategory(
    name="notes",
    description="Apple Notes operations",
    scripts=(
        ScriptDefinition("create", "Create a new note with optional formatting", create_note, CreateNoteArgs),
        ScriptDefinition(
            "createRawHtml",
            "Create a new note with direct HTML content",
            create_raw_html,
            CreateRawHtmlArgs,
        ),
        ScriptDefinition("list", "List all notes or notes in a specific folder", list_notes, ListNotesArgs),
        ScriptDefinition("get", "Get a specific note by title", get_note, GetNoteArgs),
        ScriptDefinition("search", "Search for notes containing specific text", search_notes, SearchNotesArgs),
    ),
)
