"""
Postman MCP server

Exposes Postman collections to MCP clients: list collections, search them
by name, outline their folder structure, show a request in full and
generate a JavaScript/TypeScript action from a request.

Transports:
- stdio JSON-RPC (``postman-mcp serve``)
- HTTP via FastAPI (``postman-mcp serve-http``)
"""

__version__ = "0.1.0"
__author__ = "Postman MCP Team"

from .models import Folder, RequestItem, parse_collection

__all__ = [
    "Folder",
    "RequestItem",
    "parse_collection",
    "__version__",
    "__author__"
]
