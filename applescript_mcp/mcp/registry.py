"""Script registry — categories of AppleScript-backed tools.

Registration is a two-phase lifecycle:

1. ``RegistryBuilder`` accumulates ``ScriptCategory`` objects at startup.
2. ``RegistryBuilder.build()`` freezes them into a ``ScriptRegistry``, which
   only supports enumeration (``list_tools``) and lookup (``resolve``).

Tool names are ``<category>_<script>``.  Lookup splits on the first
underscore only, so script names may contain underscores
(``clipboard_get_clipboard``) but category names may not.  Duplicate names
are accepted; the first registered match wins.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Mapping

from pydantic import BaseModel

from applescript_mcp.contracts.json_types import JSONValue
from applescript_mcp.contracts.mcp_types import MCPInputSchema, MCPToolDef
from applescript_mcp.core.log_sink import MCPLogSink
from applescript_mcp.errors import CategoryNotFoundError, ScriptNotFoundError

ScriptProducer = Callable[..., str]


def _simplify_schema(node: Any, defs: Mapping[str, Any]) -> Any:
    """Inline ``$ref``s, collapse single-member ``allOf`` and ``X | None``
    unions, drop titles and ``null`` defaults."""
    if isinstance(node, list):
        return [_simplify_schema(n, defs) for n in node]
    if not isinstance(node, dict):
        return node

    if "$ref" in node:
        target = defs[node["$ref"].rsplit("/", 1)[-1]]
        merged = {**target, **{k: v for k, v in node.items() if k != "$ref"}}
        return _simplify_schema(merged, defs)

    if "allOf" in node and len(node["allOf"]) == 1:
        merged = {**node["allOf"][0], **{k: v for k, v in node.items() if k != "allOf"}}
        return _simplify_schema(merged, defs)

    if "anyOf" in node:
        options = [o for o in node["anyOf"] if o.get("type") != "null"]
        if len(options) == 1:
            merged = {**options[0], **{k: v for k, v in node.items() if k != "anyOf"}}
            return _simplify_schema(merged, defs)

    out: dict[str, Any] = {}
    for key, value in node.items():
        if key in ("title", "$defs"):
            continue
        if key == "default":
            if value is not None:
                out[key] = value
        elif key == "enum":
            out[key] = value
        elif key == "properties":
            out[key] = {name: _simplify_schema(prop, defs) for name, prop in value.items()}
        else:
            out[key] = _simplify_schema(value, defs)
    return out


def model_input_schema(model: type[BaseModel]) -> MCPInputSchema:
    """Advertised JSON schema for an argument model (camelCase names)."""
    raw = model.model_json_schema(by_alias=True)
    simplified = _simplify_schema(raw, raw.get("$defs", {}))
    schema: MCPInputSchema = {
        "type": "object",
        "properties": simplified.get("properties", {}),
    }
    if simplified.get("required"):
        schema["required"] = list(simplified["required"])
    return schema


@dataclass(frozen=True)
class ScriptDefinition:
    """One invocable tool.

    ``script`` is either fixed AppleScript source or a producer.  A producer
    with an ``input_model`` receives the validated model instance; without one
    it is called with no arguments.
    """

    name: str
    description: str
    script: str | ScriptProducer
    input_model: type[BaseModel] | None = None

    @property
    def is_dynamic(self) -> bool:
        return not isinstance(self.script, str)

    def input_schema(self) -> MCPInputSchema:
        if self.input_model is None:
            return {"type": "object", "properties": {}}
        return model_input_schema(self.input_model)

    def parse_arguments(self, arguments: Mapping[str, JSONValue] | None) -> BaseModel | None:
        """Validate raw arguments; raises ``pydantic.ValidationError``."""
        if self.input_model is None:
            return None
        return self.input_model.model_validate(dict(arguments or {}))

    def render(self, arguments: Mapping[str, JSONValue] | None = None) -> str:
        """Compute the AppleScript source for one invocation."""
        if isinstance(self.script, str):
            return self.script
        params = self.parse_arguments(arguments)
        if params is None:
            return self.script()
        return self.script(params)


@dataclass(frozen=True)
class ScriptCategory:
    """A named group of scripts; the unit of registration."""

    name: str
    description: str
    scripts: tuple[ScriptDefinition, ...]

    def find(self, script_name: str) -> ScriptDefinition | None:
        return next((s for s in self.scripts if s.name == script_name), None)


def make_tool_name(category_name: str, script_name: str) -> str:
    return f"{category_name}_{script_name}"


def split_tool_name(tool_name: str) -> tuple[str, str]:
    """Split on the first underscore: ``("clipboard", "get_clipboard")``."""
    category_name, _, script_name = tool_name.partition("_")
    return category_name, script_name


@dataclass(frozen=True)
class ResolvedScript:
    """A script together with the category it was found in."""

    category: ScriptCategory
    script: ScriptDefinition

    @property
    def tool_name(self) -> str:
        return make_tool_name(self.category.name, self.script.name)

    def tool_def(self) -> MCPToolDef:
        return {
            "name": self.tool_name,
            "description": f"[{self.category.description}] {self.script.description}",
            "inputSchema": self.script.input_schema(),
        }


class ScriptRegistry:
    """Frozen, read-only view of the registered categories."""

    def __init__(self, categories: Iterable[ScriptCategory]) -> None:
        self._categories: tuple[ScriptCategory, ...] = tuple(categories)

    @property
    def categories(self) -> tuple[ScriptCategory, ...]:
        return self._categories

    @property
    def script_count(self) -> int:
        return sum(len(c.scripts) for c in self._categories)

    def list_tools(self) -> Iterator[MCPToolDef]:
        """Yield one tool definition per script, in registration order."""
        for category in self._categories:
            for script in category.scripts:
                yield ResolvedScript(category, script).tool_def()

    def find_category(self, category_name: str) -> ScriptCategory | None:
        return next((c for c in self._categories if c.name == category_name), None)

    def resolve(self, tool_name: str) -> ResolvedScript:
        """Look up a tool by composite name.

        Raises ``CategoryNotFoundError`` or ``ScriptNotFoundError``.
        """
        category_name, script_name = split_tool_name(tool_name)

        category = self.find_category(category_name)
        if category is None:
            raise CategoryNotFoundError(tool_name, category_name)

        script = category.find(script_name)
        if script is None:
            raise ScriptNotFoundError(tool_name, category_name, script_name)

        return ResolvedScript(category, script)


class RegistryBuilder:
    """Collects categories during startup, then freezes them."""

    def __init__(self, log_sink: MCPLogSink | None = None) -> None:
        self._categories: list[ScriptCategory] = []
        self._log_sink = log_sink or MCPLogSink()

    def add_category(self, category: ScriptCategory) -> RegistryBuilder:
        if "_" in category.name:
            raise ValueError(
                f"Category name '{category.name}' must not contain an underscore"
            )
        self._categories.append(category)
        self._log_sink.log(
            "debug",
            f"Added category: {category.name} ({len(category.scripts)} scripts)",
            {"categoryName": category.name, "scriptCount": len(category.scripts)},
        )
        return self

    def add_categories(self, categories: Iterable[ScriptCategory]) -> RegistryBuilder:
        for category in categories:
            self.add_category(category)
        return self

    def build(self) -> ScriptRegistry:
        return ScriptRegistry(self._categories)
