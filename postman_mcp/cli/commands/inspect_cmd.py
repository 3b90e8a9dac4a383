"""
Offline inspection commands.

These commands run the same traversals and code generator as the MCP
tools against an exported collection file, without calling the Postman
API. The file may hold the bare collection or the API envelope
(``{"collection": {...}}``).
"""

import json
import sys
from pathlib import Path
from typing import Any

import click
import yaml

from ...core.codegen import AGENT_FRAMEWORKS, LANGUAGES, generate_action_code
from ...core.exceptions import MalformedCollectionError
from ...core.operations import dump
from ...core.traversal import build_structure, find_request, search_by_name
from ...models.collection import Folder, RequestItem, parse_collection
from ...models.views import RequestDocumentation

collection_file = click.argument(
    "collection_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path)
)

output_format = click.option(
    "--format", "-f", "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="Output format."
)


def load_collection_file(path: Path) -> Folder:
    """
    Load and parse a collection file, exiting with status 1 on bad input.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            document = json.load(f)
        return parse_collection(document)
    except json.JSONDecodeError as e:
        click.echo(click.style(f"Invalid JSON in {path}: {e}", fg="red"), err=True)
    except UnicodeDecodeError as e:
        click.echo(click.style(f"{path} is not UTF-8 text: {e}", fg="red"), err=True)
    except MalformedCollectionError as e:
        click.echo(click.style(f"{path}: {e.message}", fg="red"), err=True)
    sys.exit(1)


def require_request(root: Folder, request_id: str) -> RequestItem:
    request = find_request(root, request_id)
    if request is None:
        click.echo(click.style(f"Request not found: {request_id}", fg="red"), err=True)
        sys.exit(1)
    return request


def emit(value: Any, output_format: str) -> None:
    if output_format.lower() == "yaml":
        click.echo(yaml.safe_dump(value, sort_keys=False, allow_unicode=True), nl=False)
    else:
        click.echo(json.dumps(value, indent=2))


@click.command(name="search", help="Search a collection file for folders or requests by name.")
@collection_file
@click.argument("query")
@click.option(
    "--type", "-t", "type_filter",
    type=click.Choice(["all", "folder", "request"]),
    default="all",
    help="Type of items to search for."
)
@output_format
@click.pass_context
def search_command(
    ctx: click.Context,
    collection_file: Path,
    query: str,
    type_filter: str,
    output_format: str
) -> None:
    root = load_collection_file(collection_file)
    results = search_by_name(root, query, type_filter)
    if ctx.obj.get("verbose"):
        click.echo(f"{len(results)} match(es) for '{query}' in {root.name}", err=True)
    emit([dump(r) for r in results], output_format)


@click.command(name="structure", help="Print the folder/request outline of a collection file.")
@collection_file
@output_format
def structure_command(collection_file: Path, output_format: str) -> None:
    root = load_collection_file(collection_file)
    emit(
        {"collection": {"id": root.id, "name": root.name}, "structure": dump(build_structure(root))},
        output_format
    )


@click.command(name="show", help="Show the full definition of one request.")
@collection_file
@click.argument("request_id")
@output_format
def show_command(collection_file: Path, request_id: str, output_format: str) -> None:
    root = load_collection_file(collection_file)
    request = require_request(root, request_id)
    emit(dump(RequestDocumentation.from_item(request)), output_format)


@click.command(name="generate", help="Generate action code for one request.")
@collection_file
@click.argument("request_id")
@click.option(
    "--language", "-l",
    type=click.Choice(list(LANGUAGES)),
    required=True,
    help="Programming language to use."
)
@click.option(
    "--framework",
    type=click.Choice(list(AGENT_FRAMEWORKS)),
    default=None,
    help="AI agent framework to use."
)
def generate_command(collection_file: Path, request_id: str, language: str, framework: str) -> None:
    root = load_collection_file(collection_file)
    request = require_request(root, request_id)
    click.echo(generate_action_code(request.name, request, language, framework), nl=False)
