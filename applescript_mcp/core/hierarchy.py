"""
Depth-tagged flat text → nested tree.

OmniFocus listings come back from AppleScript as one record per line::

    HIERARCHICAL_START
    FOLDER|Work|f1|folder|false|false|false|0|
    PROJECT|Launch|p1|project|false|false|false|1|
    TASK|Draft plan|t1|task|false|true|false|2|2024-01-15
    HIERARCHICAL_END

Fields are ``kind|name|id|type|b0|b1|b2|depth|dueDate``.  The meaning of the
three boolean slots depends on the kind:

    FOLDER   b0=hidden
    PROJECT  b0=completed, b2=dropped
    TASK     b0=completed, b1=flagged, b2=dropped (+ dueDate)
    INBOX    no flags, depth always 0

Records are in pre-order, so a node's parent is the nearest preceding node
with a strictly smaller depth.  ``build_forest`` rebuilds the tree with one
ancestor stack.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Iterable

from applescript_mcp.contracts.json_types import JSONObject
from applescript_mcp.core.log_sink import MCPLogSink

HIERARCHICAL_START = "HIERARCHICAL_START"
HIERARCHICAL_END = "HIERARCHICAL_END"

MIN_FIELDS = 7
_LEADING_INT = re.compile(r"\s*[-+]?\d+")

FOLDER = "FOLDER"
PROJECT = "PROJECT"
TASK = "TASK"
INBOX = "INBOX"


@dataclass
class HierarchicalItem:
    """One node of the reconstructed tree."""

    name: str
    id: str
    type: str
    depth: int
    completed: bool | None = None
    flagged: bool | None = None
    dropped: bool | None = None
    hidden: bool | None = None
    due_date: str | None = None
    children: list[HierarchicalItem] = field(default_factory=list)

    def to_dict(self) -> JSONObject:
        """Serialize with only the flags meaningful for this item's kind."""
        out: JSONObject = {
            "name": self.name,
            "id": self.id,
            "type": self.type,
            "depth": self.depth,
        }
        if self.completed is not None:
            out["completed"] = self.completed
        if self.flagged is not None:
            out["flagged"] = self.flagged
        if self.dropped is not None:
            out["dropped"] = self.dropped
        if self.hidden is not None:
            out["hidden"] = self.hidden
        if self.due_date:
            out["dueDate"] = self.due_date
        out["children"] = [child.to_dict() for child in self.children]
        return out


def _parse_depth(raw: str) -> int:
    """Leading integer of ``raw`` (``"2x"`` -> 2, ``"1.0"`` -> 1); 0 when there is none."""
    match = _LEADING_INT.match(raw)
    return int(match.group()) if match else 0


def parse_line(line: str) -> HierarchicalItem | None:
    """Parse one record; ``None`` when it has fewer than seven fields."""
    parts = line.split("|")
    if len(parts) < MIN_FIELDS:
        return None

    kind, name, item_id, item_type, *rest = parts
    rest += [""] * (5 - len(rest))
    item = HierarchicalItem(name=name, id=item_id or "", type=item_type, depth=0)

    if kind == FOLDER:
        item.hidden = rest[0] == "true"
        item.depth = _parse_depth(rest[3])
    elif kind == PROJECT:
        item.completed = rest[0] == "true"
        item.dropped = rest[2] == "true"
        item.depth = _parse_depth(rest[3])
    elif kind == TASK:
        item.completed = rest[0] == "true"
        item.flagged = rest[1] == "true"
        item.dropped = rest[2] == "true"
        item.depth = _parse_depth(rest[3])
        item.due_date = rest[4] or None
    elif kind == INBOX:
        item.depth = 0

    return item


def build_forest(items: Iterable[HierarchicalItem]) -> list[HierarchicalItem]:
    """Attach each item to the nearest preceding item of smaller depth."""
    roots: list[HierarchicalItem] = []
    stack: list[HierarchicalItem] = []

    for item in items:
        while stack and stack[-1].depth >= item.depth:
            stack.pop()

        if stack:
            stack[-1].children.append(item)
        else:
            roots.append(item)

        stack.append(item)

    return roots


def record_lines(raw: str) -> list[str]:
    """Non-blank lines of ``raw`` with the sentinel lines removed."""
    return [
        line
        for line in raw.splitlines()
        if line.strip()
        and HIERARCHICAL_START not in line
        and HIERARCHICAL_END not in line
    ]


def has_hierarchical_markers(raw: str) -> bool:
    return HIERARCHICAL_START in raw


def parse_hierarchical_data(raw: str, log_sink: MCPLogSink | None = None) -> str:
    """Convert the flat listing to ``{"folders": [...]}`` JSON text.

    On any unexpected failure the input is returned unchanged.
    """
    try:
        parsed = (parse_line(line) for line in record_lines(raw))
        forest = build_forest(item for item in parsed if item is not None)
        return json.dumps({"folders": [node.to_dict() for node in forest]}, indent=2)
    except Exception as e:
        if log_sink is not None:
            log_sink.log("error", "Failed to parse hierarchical data", {"error": str(e)})
        return raw
