"""
Custom exceptions for the Postman MCP server.

This module defines the error taxonomy shared by the tool handlers, the
remote API client and both transports. Each exception carries the HTTP
status used by the HTTP transport and, where relevant, the JSON-RPC error
code used by the stdio transport.
"""

from typing import Any, Dict, Optional

import httpx


# JSON-RPC 2.0 error codes
PARSE_ERROR = -32700
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class PostmanMCPException(Exception):
    """
    Base exception class for the Postman MCP server.

    All custom exceptions inherit from this class so transports can map
    them to a consistent error envelope.
    """

    rpc_code: int = INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        error_type: str = "server_error",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.status_code = status_code
        self.details = details or {}


class InvalidParamsError(PostmanMCPException):
    """Raised when tool arguments are missing, malformed, or reference an unknown request."""

    rpc_code = INVALID_PARAMS

    def __init__(self, message: str, **kwargs):
        super().__init__(message, error_type="invalid_params", status_code=400, **kwargs)


class ToolNotFoundError(PostmanMCPException):
    """Raised when a tool name is not registered."""

    rpc_code = METHOD_NOT_FOUND

    def __init__(self, tool_name: str, **kwargs):
        super().__init__(
            f"Unknown tool: {tool_name}",
            error_type="tool_not_found",
            status_code=404,
            **kwargs
        )
        self.details["tool_name"] = tool_name


class MalformedCollectionError(PostmanMCPException):
    """Raised when a collection document has no list-valued ``item`` field."""

    def __init__(self, message: str = "Collection document has no 'item' list", **kwargs):
        super().__init__(message, error_type="malformed_collection", status_code=502, **kwargs)


class ConfigurationError(PostmanMCPException):
    """Exception raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            error_type="configuration_error",
            status_code=500,
            **kwargs
        )


class PostmanAPIError(PostmanMCPException):
    """
    Exception raised when a call to the Postman API fails.

    ``status_code`` is the upstream HTTP status, or ``None`` when the request
    never produced a response (DNS, connection, timeout).
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
        **kwargs
    ):
        super().__init__(
            message,
            error_type="postman_api_error",
            status_code=502,
            **kwargs
        )
        self.upstream_status = status_code
        self.reason = reason
        if status_code is not None:
            self.details["upstream_status"] = status_code

    def __str__(self) -> str:
        if self.upstream_status is None:
            return self.message
        prefix = f"{self.upstream_status} {self.reason}" if self.reason else str(self.upstream_status)
        return f"{prefix}: {self.message}"

    @property
    def is_unauthorized(self) -> bool:
        return self.upstream_status == 401

    @classmethod
    def from_response(cls, response: httpx.Response) -> "PostmanAPIError":
        """Build an error from a non-success Postman API response."""
        message = None
        try:
            payload = response.json()
        except ValueError:
            payload = None

        # Postman wraps errors as {"error": {"name": ..., "message": ...}}
        if isinstance(payload, dict):
            error = payload.get("error")
            if isinstance(error, dict):
                message = error.get("message") or error.get("name")
            elif isinstance(error, str):
                message = error

        if not message:
            message = f"Request failed with status code {response.status_code}"
        if response.status_code == 401:
            message = f"{message} (check your Postman API key)"

        return cls(message, status_code=response.status_code, reason=response.reason_phrase)
