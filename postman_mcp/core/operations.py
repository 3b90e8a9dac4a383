"""
The five collection operations exposed as MCP tools.

Each operation fetches fresh data through the ``PostmanClient``, parses it
into a collection tree, runs the traversal or code generator over it and
returns a JSON-ready payload. Nothing is cached between calls.

Errors: ``InvalidParamsError`` for unknown request ids, ``PostmanAPIError``
and ``MalformedCollectionError`` for bad upstream data. Argument presence
is checked by the tool layer before any of these run.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from .codegen import generate_action_code
from .exceptions import InvalidParamsError
from .postman_client import PostmanClient
from .traversal import TypeFilter, build_structure, count_nodes, find_request, search_by_name
from .workspace_resolver import WorkspaceResolver, workspace_id_from_collection_id
from ..models.collection import Folder, RequestItem, parse_collection
from ..models.views import RequestDocumentation
from ..models.workspace import CollectionSummary, Workspace

logger = logging.getLogger(__name__)


def dump(model: BaseModel) -> Dict[str, Any]:
    """Serialize a model the way clients see it: aliases on, absent fields dropped."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def _workspace_or_none(workspace: Optional[Workspace]) -> Optional[Dict[str, Any]]:
    return workspace.model_dump() if workspace else None


class CollectionOperations:
    """Composes the Postman client, workspace resolver, traversals and code generator."""

    def __init__(self, client: PostmanClient, resolver: Optional[WorkspaceResolver] = None):
        self.client = client
        self.resolver = resolver or WorkspaceResolver(client)

    async def _load_collection(self, collection_id: str) -> Folder:
        document = await self.client.fetch_collection(collection_id)
        root = parse_collection(document)
        folders, requests = count_nodes(root)
        logger.debug(
            "Collection loaded",
            extra={"collection_id": collection_id, "folder_count": folders, "request_count": requests}
        )
        return root

    async def _resolve_for_collection(self, collection_id: str) -> Optional[Workspace]:
        return await self.resolver.resolve(workspace_id_from_collection_id(collection_id))

    def _require_request(self, root: Folder, request_id: str) -> RequestItem:
        request = find_request(root, request_id)
        if request is None:
            raise InvalidParamsError(f"Request not found: {request_id}", details={"request_id": request_id})
        return request

    @staticmethod
    def _collection_ref(collection_id: str, root: Folder) -> Dict[str, str]:
        return {"id": collection_id, "name": root.name}

    async def list_collections(self, workspace_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """List collections with their owning workspace, resolved concurrently."""
        summaries = await self.client.list_collections(workspace_id)

        async def describe(summary: CollectionSummary) -> Dict[str, Any]:
            workspace = await self.resolver.resolve(summary.workspace_id)
            return {
                "id": summary.uid,
                "name": summary.name,
                "updatedAt": summary.updated_at,
                "workspace": _workspace_or_none(workspace),
            }

        return list(await asyncio.gather(*(describe(s) for s in summaries)))

    async def search_collection(
        self,
        collection_id: str,
        query: str,
        type_filter: TypeFilter = "all"
    ) -> Dict[str, Any]:
        root = await self._load_collection(collection_id)
        workspace = await self._resolve_for_collection(collection_id)
        results = search_by_name(root, query, type_filter)

        return {
            "workspace": _workspace_or_none(workspace),
            "collection": self._collection_ref(collection_id, root),
            "results": [dump(r) for r in results],
        }

    async def get_collection_structure(self, collection_id: str) -> Dict[str, Any]:
        root = await self._load_collection(collection_id)
        workspace = await self._resolve_for_collection(collection_id)

        return {
            "workspace": _workspace_or_none(workspace),
            "collection": self._collection_ref(collection_id, root),
            "structure": dump(build_structure(root)),
        }

    async def get_request_details(self, collection_id: str, request_id: str) -> Dict[str, Any]:
        root = await self._load_collection(collection_id)
        request = self._require_request(root, request_id)
        workspace = await self._resolve_for_collection(collection_id)
        workspace = workspace or Workspace.unknown(workspace_id_from_collection_id(collection_id))

        return {
            "workspace": workspace.model_dump(),
            "collection": self._collection_ref(collection_id, root),
            "request": dump(RequestDocumentation.from_item(request)),
        }

    async def create_action(
        self,
        collection_id: str,
        request_id: str,
        language: str,
        agent_framework: Optional[str] = None
    ) -> Dict[str, Any]:
        root = await self._load_collection(collection_id)
        request = self._require_request(root, request_id)
        workspace = await self._resolve_for_collection(collection_id)
        workspace = workspace or Workspace.unknown(workspace_id_from_collection_id(collection_id))

        code = generate_action_code(request.name, request, language, agent_framework)

        return {
            "workspace": workspace.model_dump(),
            "collection": self._collection_ref(collection_id, root),
            "code": code,
        }
