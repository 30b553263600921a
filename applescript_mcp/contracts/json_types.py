"""Canonical type aliases for JSON data.

Use ``JSONValue`` / ``JSONObject`` only when the shape is genuinely unknown
(e.g. raw tool arguments before validation).  For known structures use the
named TypedDicts in ``applescript_mcp.contracts.mcp_types``.

Do **not** use these aliases in Pydantic ``BaseModel`` fields: the recursive
forward references cannot be resolved at schema generation time.  Use
``dict[str, object]`` there instead.
"""

from __future__ import annotations

JSONValue = str | int | float | bool | None | list["JSONValue"] | dict[str, "JSONValue"]
"""Recursive JSON value; a precise alternative to ``Any``."""

JSONObject = dict[str, JSONValue]
"""A JSON object with string keys."""
