"""
Main CLI entry point.

This module provides the click command group and entry point for the
``postman-mcp`` command.
"""

import click

from .. import __version__
from .commands.inspect_cmd import generate_command, search_command, show_command, structure_command
from .commands.serve_cmd import serve_command, serve_http_command, tools_command


@click.group(
    name="postman-mcp",
    help="Postman collection tools for MCP clients."
)
@click.version_option(version=__version__, prog_name="postman-mcp")
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output."
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """postman-mcp main command group."""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose


cli.add_command(serve_command)
cli.add_command(serve_http_command)
cli.add_command(tools_command)
cli.add_command(search_command)
cli.add_command(structure_command)
cli.add_command(show_command)
cli.add_command(generate_command)


if __name__ == "__main__":
    cli()
