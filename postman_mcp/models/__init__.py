"""
Models package for the Postman MCP server.
"""

from .collection import (
    CollectionNode,
    Folder,
    KeyValue,
    RequestBody,
    RequestItem,
    RequestUrl,
    parse_collection,
)
from .views import (
    CollectionStructure,
    FolderSummary,
    RequestDocumentation,
    RequestSummary,
    SearchResult,
)
from .workspace import CollectionSummary, Workspace, WorkspaceCollectionRef, WorkspaceListing

__all__ = [
    "CollectionNode",
    "Folder",
    "KeyValue",
    "RequestBody",
    "RequestItem",
    "RequestUrl",
    "parse_collection",
    "CollectionStructure",
    "FolderSummary",
    "RequestDocumentation",
    "RequestSummary",
    "SearchResult",
    "CollectionSummary",
    "Workspace",
    "WorkspaceCollectionRef",
    "WorkspaceListing",
]
