"""
Shared fixtures: sample collections and a fake Postman API.
"""

import copy
import json
from typing import Any, Callable, Dict, List, Tuple

import httpx
import pytest

from postman_mcp.core.operations import CollectionOperations
from postman_mcp.core.postman_client import PostmanClient
from postman_mcp.core.tools import PostmanToolHandler


SAMPLE_COLLECTION: Dict[str, Any] = {
    "info": {
        "_postman_id": "c0ffee00-0000-4000-8000-000000000001",
        "name": "Demo API",
        "schema": "https://schema.getpostman.com/json/collection/v2.1.0/collection.json"
    },
    "item": [
        {
            "id": "f-auth",
            "name": "Auth",
            "item": [
                {
                    "id": "r-login",
                    "name": "Login",
                    "request": {
                        "method": "POST",
                        "url": {
                            "raw": "https://api.example.com/auth/login",
                            "host": ["api", "example", "com"],
                            "path": ["auth", "login"]
                        },
                        "description": "Exchange credentials for a token",
                        "header": [{"key": "Content-Type", "value": "application/json"}],
                        "body": {"mode": "raw", "raw": "{\"user\": \"demo\"}"}
                    },
                    "response": [{"name": "OK", "code": 200, "body": "{\"token\": \"t\"}"}]
                },
                {
                    "id": "f-tokens",
                    "name": "Tokens",
                    "item": [
                        {
                            "id": "r-refresh",
                            "name": "RefreshToken",
                            "request": {
                                "method": "POST",
                                "url": {
                                    "raw": "https://api.example.com/auth/refresh",
                                    "host": ["api", "example", "com"],
                                    "path": ["auth", "refresh"]
                                },
                                "body": {
                                    "mode": "urlencoded",
                                    "urlencoded": [{"key": "refresh_token", "value": ""}]
                                }
                            }
                        }
                    ]
                }
            ]
        },
        {
            "id": "r-ping",
            "name": "Ping",
            "request": {
                "method": "GET",
                "url": {
                    "raw": "https://api.example.com/ping",
                    "host": ["api", "example", "com"],
                    "path": ["ping"]
                }
            }
        },
        {
            "name": "Legacy Logout",
            "request": {"method": "GET", "url": "https://api.example.com/logout"}
        }
    ]
}

COLLECTION_UID = "12345678-c0ffee00-0000-4000-8000-000000000001"

WORKSPACES = {
    "workspaces": [
        {"id": "ws-other", "name": "Other", "type": "team", "collections": []},
        {
            "id": "ws-demo",
            "name": "Demo Workspace",
            "type": "team",
            "collections": [{"id": "c0ffee00", "uid": COLLECTION_UID}]
        }
    ]
}


@pytest.fixture
def sample_collection() -> Dict[str, Any]:
    return copy.deepcopy(SAMPLE_COLLECTION)


Route = Tuple[int, Any]


class FakePostmanAPI:
    """Routes ``GET <path>`` to canned responses and records every call."""

    def __init__(self, routes: Dict[str, Route]):
        self.routes = routes
        self.calls: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"error": {"name": "notFound", "message": "Not found"}})
        status, body = route
        if isinstance(body, Exception):
            raise body
        if isinstance(body, (dict, list)):
            return httpx.Response(status, json=body)
        return httpx.Response(status, content=body)

    @property
    def paths(self) -> List[str]:
        return [call.url.path for call in self.calls]


@pytest.fixture
def fake_api() -> Callable[[Dict[str, Route]], Tuple[PostmanClient, FakePostmanAPI]]:
    """Build a ``PostmanClient`` backed by a ``FakePostmanAPI``."""

    def build(routes: Dict[str, Route]) -> Tuple[PostmanClient, FakePostmanAPI]:
        api = FakePostmanAPI(routes)
        client = PostmanClient(
            api_key="PMAK-test",
            base_url="https://api.postman.test",
            transport=httpx.MockTransport(api)
        )
        return client, api

    return build


@pytest.fixture
def default_routes(sample_collection) -> Dict[str, Route]:
    return {
        f"/collections/{COLLECTION_UID}": (200, {"collection": sample_collection}),
        "/workspaces": (200, WORKSPACES),
        "/collections": (200, {
            "collections": [
                {
                    "id": "c0ffee00",
                    "uid": COLLECTION_UID,
                    "name": "Demo API",
                    "updatedAt": "2024-01-02T03:04:05.000Z"
                }
            ]
        }),
    }


@pytest.fixture
def tool_handler(fake_api, default_routes):
    """Tool handler wired to the fake API; exposes the fake as ``handler.api``."""
    client, api = fake_api(default_routes)
    handler = PostmanToolHandler(operations=CollectionOperations(client))
    handler.api = api
    return handler


def payload_of(result) -> Any:
    """Decode the JSON text of a successful tool result."""
    assert not result.is_error, result.content
    return json.loads(result.content[0]["text"])
