"""Pages document operations."""
from __future__ import annotations

from pydantic import Field

from applescript_mcp.core.applescript import escape_string
from applescript_mcp.mcp.registry import ScriptCategory, ScriptDefinition
from applescript_mcp.models.base import CamelModel


class CreateDocumentArgs(CamelModel):
    content: str = Field(
        ..., description="The plain text content to add to the document (no formatting)"
    )


def create_document(args: CreateDocumentArgs) -> str:
    return f"""
try
  tell application "Pages"
    set newDoc to make new document
    set the body text of newDoc to "{escape_string(args.content)}"
    activate
    return "Document created successfully with plain text content"
  end tell
on error errMsg
  return "Failed to create document: " & errMsg
end try
"""


PAGES_CATEGORY = ScriptCategory(
    name="pages",
    description="Pages document operations",
    scripts=(
        ScriptDefinition(
            "create_document",
            "Create a new Pages document with plain text content (no formatting)",
            create_document,
            CreateDocumentArgs,
        ),
    ),
)
