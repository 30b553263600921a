"""AppleScript MCP CLI — Typer application root.

Entry point for the ``applescript-mcp`` console script:

    applescript-mcp stdio                      # MCP over stdin/stdout
    applescript-mcp serve --port 10010         # HTTP API via uvicorn
    applescript-mcp tools [--json]             # print the tool catalog
    applescript-mcp call system_volume --args '{"level": 50}'
"""
from __future__ import annotations

import asyncio
import json
from typing import Optional

import typer

from applescript_mcp.config import settings
from applescript_mcp.errors import ExitCode, ToolNotFoundError
from applescript_mcp.mcp.server import get_mcp_server

cli = typer.Typer(
    name="applescript-mcp",
    help="AppleScript MCP — macOS automation tools over the Model Context Protocol.",
    no_args_is_help=True,
)


@cli.command("stdio", help="Run the MCP server over stdin/stdout.")
def stdio_cmd() -> None:
    from applescript_mcp.mcp.stdio_server import main as stdio_main
    asyncio.run(stdio_main())


@cli.command("serve", help="Run the HTTP API with uvicorn.")
def serve_cmd(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from settings)."),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port (default from settings)."),
) -> None:
    import uvicorn

    uvicorn.run(
        "applescript_mcp.main:app",
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.effective_log_level.lower(),
    )


@cli.command("tools", help="List the available tools.")
def tools_cmd(
    as_json: bool = typer.Option(False, "--json", help="Print the raw tool definitions as JSON."),
) -> None:
    tools = get_mcp_server().list_tools()
    if as_json:
        typer.echo(json.dumps(tools, indent=2))
        return
    for tool in tools:
        typer.echo(f"{tool['name']:<36} {tool['description']}")
    typer.echo(f"\n{len(tools)} tools")


@cli.command("call", help="Invoke one tool and print its result text.")
def call_cmd(
    tool_name: str = typer.Argument(..., help="Tool name, e.g. system_volume."),
    args: str = typer.Option("{}", "--args", "-a", help="Tool arguments as a JSON object."),
) -> None:
    try:
        arguments = json.loads(args)
    except json.JSONDecodeError as e:
        typer.echo(f"Invalid --args JSON: {e}", err=True)
        raise typer.Exit(code=ExitCode.USER_ERROR)
    if not isinstance(arguments, dict):
        typer.echo("--args must be a JSON object", err=True)
        raise typer.Exit(code=ExitCode.USER_ERROR)

    server = get_mcp_server()
    try:
        result = asyncio.run(server.call_tool(tool_name, arguments))
    except ToolNotFoundError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=ExitCode.TOOL_NOT_FOUND)

    typer.echo(result.text)
    if result.is_error:
        raise typer.Exit(code=ExitCode.TOOL_ERROR)


if __name__ == "__main__":
    cli()
