"""
HTTP client for the Postman API.

This module wraps ``httpx.AsyncClient`` with the Postman base URL and
``X-Api-Key`` authentication, and turns every failure (HTTP status,
network, undecodable payload) into a ``PostmanAPIError``.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import Settings, get_settings
from .exceptions import ConfigurationError, PostmanAPIError
from ..models.workspace import CollectionSummary, WorkspaceListing

logger = logging.getLogger(__name__)


class PostmanClient:
    """
    Async client for the subset of the Postman API this server reads.

    The underlying ``httpx.AsyncClient`` is created lazily and reused until
    :meth:`aclose` is called. Tests may pass a custom ``transport``
    (e.g. ``httpx.MockTransport``).
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.postman.com",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the Postman client.

        Args:
            api_key: Postman API key, sent as ``X-Api-Key``
            base_url: Postman API base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport override

        Raises:
            ConfigurationError: If ``api_key`` is empty
        """
        if not api_key:
            raise ConfigurationError("POSTMAN_API_KEY environment variable is required")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._api_key = api_key
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "PostmanClient":
        settings = settings or get_settings()
        return cls(
            api_key=settings.POSTMAN_API_KEY or "",
            base_url=settings.POSTMAN_API_BASE_URL,
            timeout=settings.REQUEST_TIMEOUT_SECONDS,
        )

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"X-Api-Key": self._api_key},
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "PostmanClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def get_json(self, path: str) -> Dict[str, Any]:
        """
        GET ``path`` and return the decoded JSON object.

        Raises:
            PostmanAPIError: On transport failure, non-2xx status, or a
                payload that is not a JSON object
        """
        logger.info(f"Postman API request: GET {path}")

        try:
            response = await self._get_client().get(path)
        except httpx.HTTPError as e:
            logger.error(f"HTTP error for GET {path}: {e}")
            raise PostmanAPIError(f"Request to Postman API failed: {e}") from e

        logger.info(f"Postman API response: {response.status_code} {response.reason_phrase}")

        if response.status_code >= 400:
            error = PostmanAPIError.from_response(response)
            if error.is_unauthorized:
                logger.error("Unauthorized: check your Postman API key")
            else:
                logger.error(f"Postman API error for GET {path}: {error}")
            raise error

        try:
            payload = response.json()
        except ValueError as e:
            raise PostmanAPIError(
                f"Malformed JSON payload from {path}",
                status_code=response.status_code,
                reason=response.reason_phrase,
            ) from e

        if not isinstance(payload, dict):
            raise PostmanAPIError(
                f"Unexpected payload from {path}: expected a JSON object",
                status_code=response.status_code,
                reason=response.reason_phrase,
            )
        return payload

    async def fetch_collection(self, collection_id: str) -> Dict[str, Any]:
        """Fetch a collection document; returns the inner ``collection`` object."""
        payload = await self.get_json(f"/collections/{collection_id}")
        collection = payload.get("collection")
        if not isinstance(collection, dict):
            raise PostmanAPIError(f"Response for collection {collection_id} has no 'collection' object")
        return collection

    async def list_workspaces(self) -> List[WorkspaceListing]:
        """
        List all workspaces visible to the API key.

        Raises:
            PostmanAPIError: If the listing is missing or cannot be parsed
        """
        payload = await self.get_json("/workspaces")
        workspaces = payload.get("workspaces")
        if not workspaces:
            raise PostmanAPIError("No workspaces found in response")
        try:
            return [WorkspaceListing.model_validate(w) for w in workspaces]
        except (TypeError, ValueError) as e:
            raise PostmanAPIError(f"Malformed workspace listing: {e}") from e

    async def list_collections(self, workspace_id: Optional[str] = None) -> List[CollectionSummary]:
        """List collections, optionally restricted to one workspace."""
        path = f"/workspaces/{workspace_id}/collections" if workspace_id else "/collections"
        payload = await self.get_json(path)
        collections = payload.get("collections")
        if not isinstance(collections, list):
            raise PostmanAPIError(f"Response for {path} has no 'collections' list")
        try:
            return [CollectionSummary.model_validate(c) for c in collections]
        except (TypeError, ValueError) as e:
            raise PostmanAPIError(f"Malformed collection listing: {e}") from e
