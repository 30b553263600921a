"""Typed structures for the MCP protocol layer.

Defines the entities used across script registration, the MCP server and
both transports.

  Tool definitions    → ``MCPPropertyDef``, ``MCPInputSchema``, ``MCPToolDef``
  Content             → ``MCPContentBlock``
  Server capabilities → ``MCPCapabilities``, ``MCPServerInfo``
  JSON-RPC messages   → ``MCPSuccessResponse``, ``MCPErrorDetail``,
                        ``MCPErrorResponse``, ``MCPResponse``,
                        ``MCPNotification``
  Method results      → ``MCPInitializeResult``, ``MCPToolsListResult``,
                        ``MCPCallResult``

HTTP route handlers use the Pydantic models in
``applescript_mcp.api.routes.mcp`` rather than these TypedDicts.
"""
from __future__ import annotations

from typing import Union

from typing_extensions import Required, TypedDict

from applescript_mcp.contracts.json_types import JSONObject, JSONValue


# ── Tool schema shapes ────────────────────────────────────────────────────────


class MCPPropertyDef(TypedDict, total=False):
    """JSON Schema definition for a single tool property."""

    type: str  # "string", "number", "integer", "boolean", "array", "object"
    description: str
    enum: list[str | int | float]
    minimum: float
    maximum: float
    default: JSONValue
    items: dict[str, JSONValue]
    properties: dict[str, "MCPPropertyDef"]
    required: list[str]


class MCPInputSchema(TypedDict, total=False):
    """JSON Schema describing a tool's accepted arguments."""

    type: Required[str]
    properties: Required[dict[str, MCPPropertyDef]]
    required: list[str]


class MCPToolDef(TypedDict):
    """Definition of a single tool advertised by ``tools/list``."""

    name: str
    description: str
    inputSchema: MCPInputSchema  # noqa: N815


class MCPContentBlock(TypedDict):
    """A content block in a tool result (always text here)."""

    type: str
    text: str


# ── Server capability shapes ──────────────────────────────────────────────────


class MCPCapabilities(TypedDict, total=False):
    """Server capabilities advertised during the ``initialize`` handshake."""

    tools: dict[str, JSONValue]
    logging: dict[str, JSONValue]


class MCPServerInfo(TypedDict):
    """Server info returned by ``get_server_info()``."""

    name: str
    version: str
    protocolVersion: str  # noqa: N815
    capabilities: MCPCapabilities


# ── JSON-RPC 2.0 message shapes ───────────────────────────────────────────────


class MCPSuccessResponse(TypedDict):
    """A JSON-RPC 2.0 success response."""

    jsonrpc: str
    id: str | int | None
    result: MCPInitializeResult | MCPToolsListResult | MCPCallResult | JSONObject


class MCPErrorDetail(TypedDict, total=False):
    """The ``error`` object inside a JSON-RPC 2.0 error response."""

    code: Required[int]
    message: Required[str]
    data: JSONValue


class MCPErrorResponse(TypedDict):
    """A JSON-RPC 2.0 error response."""

    jsonrpc: str
    id: str | int | None
    error: MCPErrorDetail


MCPResponse = Union[MCPSuccessResponse, MCPErrorResponse]
"""Union of all JSON-RPC 2.0 response shapes."""


class MCPNotification(TypedDict):
    """A server-to-client JSON-RPC notification (no ``id``)."""

    jsonrpc: str
    method: str
    params: JSONObject


# ── Method-specific results ───────────────────────────────────────────────────


class MCPInitializeResult(TypedDict):
    """Result body for the ``initialize`` JSON-RPC method."""

    protocolVersion: str  # noqa: N815
    serverInfo: dict[str, str]  # noqa: N815  {name, version}
    capabilities: MCPCapabilities


class MCPToolsListResult(TypedDict):
    """Result body for the ``tools/list`` JSON-RPC method."""

    tools: list[MCPToolDef]


class MCPCallResult(TypedDict, total=False):
    """Result body for the ``tools/call`` JSON-RPC method."""

    content: Required[list[MCPContentBlock]]
    isError: bool  # noqa: N815


# JSON-RPC error codes used by the transports.
PARSE_ERROR = -32700
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
