"""
Workspace resolution for collections.

Workspace ownership is enrichment only, so resolution never raises: any
failure is logged here and reported as ``None``.
"""

import logging
from typing import Optional

from .postman_client import PostmanClient
from ..models.workspace import Workspace

logger = logging.getLogger(__name__)


def workspace_id_from_collection_id(collection_id: str) -> str:
    """Owner prefix of a composite collection uid (text before the first ``-``)."""
    return collection_id.split("-")[0]


class WorkspaceResolver:
    """Maps a collection id to the workspace that contains it."""

    def __init__(self, client: PostmanClient):
        self.client = client

    async def resolve(self, collection_id: str) -> Optional[Workspace]:
        """
        Find the first workspace holding ``collection_id``.

        A workspace matches when one of its collections has exactly this id,
        or a composite uid starting with it.

        Returns:
            The workspace, or ``None`` when nothing matches, the lookup fails
            or ``collection_id`` is empty
        """
        if not collection_id:
            logger.warning("Cannot resolve a workspace for an empty collection id")
            return None

        try:
            listings = await self.client.list_workspaces()
            for listing in listings:
                if listing.contains_collection(collection_id):
                    return listing.to_workspace()
        except Exception as e:
            logger.warning(
                f"Error fetching workspaces: {e}",
                extra={"collection_id": collection_id, "error_type": type(e).__name__}
            )
            return None

        logger.warning(f"No workspace found containing collection from workspace ID {collection_id}")
        return None
