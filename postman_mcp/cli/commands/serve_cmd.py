"""
Server commands: stdio MCP server, HTTP server and tool catalogue.
"""

import asyncio
import json
import sys
from typing import Optional

import click

from ...core.config import get_settings
from ...core.logging import setup_logging
from ...core.tools import PostmanToolHandler


@click.command(name="serve", help="Run the MCP server over stdio.")
@click.pass_context
def serve_command(ctx: click.Context) -> None:
    from ...mcp_stdio_server import MCPStdioServer

    settings = get_settings()
    log_level = "DEBUG" if ctx.obj.get("verbose") else settings.LOG_LEVEL
    setup_logging(log_level, settings.DEBUG, settings.JSON_LOGS, stream=sys.stderr)

    if not settings.has_api_key():
        click.echo(
            click.style("Warning: POSTMAN_API_KEY is not set; tool calls will fail.", fg="yellow"),
            err=True
        )

    asyncio.run(MCPStdioServer(settings=settings).run())


@click.command(name="serve-http", help="Run the HTTP transport with uvicorn.")
@click.option("--host", type=str, default=None, help="Bind address (default from settings).")
@click.option("--port", type=int, default=None, help="Bind port (default from settings).")
def serve_http_command(host: Optional[str], port: Optional[int]) -> None:
    from ...main import run

    run(host=host, port=port)


@click.command(name="tools", help="Print the tool catalogue as JSON.")
def tools_command() -> None:
    handler = PostmanToolHandler()
    click.echo(json.dumps(
        [
            {"name": t.name, "description": t.description, "inputSchema": t.input_schema()}
            for t in handler.list_tools()
        ],
        indent=2
    ))
