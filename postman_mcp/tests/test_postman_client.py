"""
Tests for the Postman API client.
"""

import httpx
import pytest

from conftest import COLLECTION_UID
from postman_mcp.core.config import Settings
from postman_mcp.core.exceptions import ConfigurationError, PostmanAPIError
from postman_mcp.core.postman_client import PostmanClient


class TestPostmanClient:
    """Tests for PostmanClient."""

    def test_requires_api_key(self):
        with pytest.raises(ConfigurationError, match="POSTMAN_API_KEY environment variable is required"):
            PostmanClient(api_key="")

    def test_from_settings(self):
        settings = Settings(
            POSTMAN_API_KEY="PMAK-settings",
            POSTMAN_API_BASE_URL="https://postman.internal/",
            REQUEST_TIMEOUT_SECONDS=5
        )
        client = PostmanClient.from_settings(settings)

        assert client.base_url == "https://postman.internal"
        assert client.timeout == 5

    def test_from_settings_without_key(self):
        settings = Settings()
        settings.POSTMAN_API_KEY = None
        with pytest.raises(ConfigurationError):
            PostmanClient.from_settings(settings)

    @pytest.mark.asyncio
    async def test_sends_api_key_header(self, fake_api, default_routes):
        client, api = fake_api(default_routes)

        async with client:
            await client.fetch_collection(COLLECTION_UID)

        request = api.calls[0]
        assert request.method == "GET"
        assert request.headers["X-Api-Key"] == "PMAK-test"
        assert str(request.url) == f"https://api.postman.test/collections/{COLLECTION_UID}"

    @pytest.mark.asyncio
    async def test_fetch_collection_unwraps_envelope(self, fake_api, default_routes):
        client, _ = fake_api(default_routes)
        document = await client.fetch_collection(COLLECTION_UID)

        assert document["info"]["name"] == "Demo API"
        assert "item" in document

    @pytest.mark.asyncio
    async def test_fetch_collection_without_envelope(self, fake_api):
        client, _ = fake_api({"/collections/c1": (200, {"info": {"name": "x"}})})
        with pytest.raises(PostmanAPIError, match="no 'collection' object"):
            await client.fetch_collection("c1")

    @pytest.mark.asyncio
    async def test_unauthorized(self, fake_api, caplog):
        client, _ = fake_api({
            "/collections": (401, {"error": {"name": "AuthenticationError", "message": "Invalid API Key"}})
        })

        with pytest.raises(PostmanAPIError) as exc_info:
            await client.list_collections()

        error = exc_info.value
        assert error.is_unauthorized
        assert error.upstream_status == 401
        assert str(error) == "401 Unauthorized: Invalid API Key (check your Postman API key)"
        assert "Unauthorized: check your Postman API key" in caplog.text

    @pytest.mark.asyncio
    async def test_error_without_message(self, fake_api):
        client, _ = fake_api({"/collections/c1": (503, b"")})

        with pytest.raises(PostmanAPIError) as exc_info:
            await client.fetch_collection("c1")

        assert str(exc_info.value) == "503 Service Unavailable: Request failed with status code 503"

    @pytest.mark.asyncio
    async def test_string_error_payload(self, fake_api):
        client, _ = fake_api({"/collections/c1": (404, {"error": "instanceNotFoundError"})})
        with pytest.raises(PostmanAPIError, match="instanceNotFoundError"):
            await client.fetch_collection("c1")

    @pytest.mark.asyncio
    async def test_network_error(self, fake_api):
        client, _ = fake_api({"/collections/c1": (200, httpx.ConnectTimeout("timed out"))})

        with pytest.raises(PostmanAPIError) as exc_info:
            await client.fetch_collection("c1")

        assert exc_info.value.upstream_status is None
        assert "Request to Postman API failed" in str(exc_info.value)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [b"<html>", [1, 2, 3]])
    async def test_payload_must_be_json_object(self, fake_api, body):
        client, _ = fake_api({"/collections": (200, body)})
        with pytest.raises(PostmanAPIError):
            await client.list_collections()

    @pytest.mark.asyncio
    async def test_list_collections(self, fake_api, default_routes):
        client, api = fake_api(default_routes)

        summaries = await client.list_collections()

        assert api.paths == ["/collections"]
        assert len(summaries) == 1
        assert summaries[0].uid == COLLECTION_UID
        assert summaries[0].updated_at == "2024-01-02T03:04:05.000Z"
        assert summaries[0].workspace_id == "12345678"

    @pytest.mark.asyncio
    async def test_list_collections_for_workspace(self, fake_api):
        client, api = fake_api({"/workspaces/ws-demo/collections": (200, {"collections": []})})

        assert await client.list_collections("ws-demo") == []
        assert api.paths == ["/workspaces/ws-demo/collections"]

    @pytest.mark.asyncio
    async def test_list_workspaces_empty(self, fake_api):
        client, _ = fake_api({"/workspaces": (200, {"workspaces": []})})
        with pytest.raises(PostmanAPIError, match="No workspaces found in response"):
            await client.list_workspaces()

    @pytest.mark.asyncio
    async def test_aclose_is_idempotent(self, fake_api, default_routes):
        client, _ = fake_api(default_routes)
        await client.list_collections()
        await client.aclose()
        await client.aclose()
