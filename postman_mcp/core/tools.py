"""
Tool catalogue and dispatch for the Postman MCP server.

This module declares the five collection tools (names, descriptions and
input schemas), validates call arguments and runs the matching operation.

Failure handling differs by kind:

* bad arguments and unknown request ids raise ``InvalidParamsError``;
  transports turn it into a protocol-level error;
* unknown tool names raise ``ToolNotFoundError``;
* Postman API failures and malformed collections are caught here and
  returned as a ``ToolExecutionResult`` flagged ``is_error``.
"""

import datetime
import json
from typing import Any, Awaitable, Callable, Dict, List, Optional

from jsonschema import Draft7Validator
from pydantic import BaseModel

from .codegen import AGENT_FRAMEWORKS, LANGUAGES
from .exceptions import InvalidParamsError, MalformedCollectionError, PostmanAPIError, ToolNotFoundError
from .logging import LoggerMixin
from .operations import CollectionOperations
from .postman_client import PostmanClient


class ToolParameter(BaseModel):
    """Tool parameter definition."""
    name: str
    type: str
    description: str
    required: bool = True
    default: Any = None
    enum: Optional[List[str]] = None

    def json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": self.type, "description": self.description}
        if self.enum:
            schema["enum"] = list(self.enum)
        if self.default is not None:
            schema["default"] = self.default
        return schema


class PostmanTool(BaseModel):
    """Tool definition."""
    name: str
    description: str
    parameters: List[ToolParameter]
    error_prefix: str

    @property
    def required_parameters(self) -> List[str]:
        return [p.name for p in self.parameters if p.required]

    def input_schema(self) -> Dict[str, Any]:
        """JSON schema advertised in ``tools/list``."""
        schema: Dict[str, Any] = {
            "type": "object",
            "properties": {p.name: p.json_schema() for p in self.parameters},
        }
        if self.required_parameters:
            schema["required"] = self.required_parameters
        return schema


class ToolExecutionResult(BaseModel):
    """Result of tool execution."""
    content: List[Dict[str, Any]]
    is_error: bool = False
    execution_time_ms: int = 0

    @classmethod
    def text(cls, text: str, is_error: bool = False) -> "ToolExecutionResult":
        return cls(content=[{"type": "text", "text": text}], is_error=is_error)

    @classmethod
    def payload(cls, value: Any) -> "ToolExecutionResult":
        return cls.text(json.dumps(value, indent=2))

    def to_mcp(self) -> Dict[str, Any]:
        return {"content": self.content, "isError": self.is_error}


def _register_tools() -> Dict[str, PostmanTool]:
    collection_id = ToolParameter(
        name="collectionId",
        type="string",
        description="The Postman collection ID"
    )

    tools = [
        PostmanTool(
            name="list_collections",
            description="List all available Postman collections",
            parameters=[
                ToolParameter(
                    name="workspace",
                    type="string",
                    description="Optional: Workspace ID to filter collections",
                    required=False
                )
            ],
            error_prefix="Error listing collections"
        ),
        PostmanTool(
            name="search_collection",
            description="Search within a collection for folders or requests by name",
            parameters=[
                collection_id,
                ToolParameter(
                    name="query",
                    type="string",
                    description="Search query to match against folder/request names"
                ),
                ToolParameter(
                    name="type",
                    type="string",
                    description="Type of items to search for",
                    required=False,
                    default="all",
                    enum=["all", "folder", "request"]
                )
            ],
            error_prefix="Error searching collection"
        ),
        PostmanTool(
            name="get_collection_structure",
            description="Get the folder structure and request IDs for a collection",
            parameters=[collection_id],
            error_prefix="Error getting collection structure"
        ),
        PostmanTool(
            name="get_request_details",
            description="Get detailed information about a specific request",
            parameters=[
                collection_id,
                ToolParameter(name="requestId", type="string", description="The request ID")
            ],
            error_prefix="Error getting request details"
        ),
        PostmanTool(
            name="create_action",
            description="Generate an AI action from a Postman request",
            parameters=[
                collection_id,
                ToolParameter(
                    name="requestId",
                    type="string",
                    description="The ID of the request to generate an action for"
                ),
                ToolParameter(
                    name="language",
                    type="string",
                    description="Programming language to use",
                    enum=list(LANGUAGES)
                ),
                ToolParameter(
                    name="agentFramework",
                    type="string",
                    description="AI agent framework to use",
                    required=False,
                    enum=list(AGENT_FRAMEWORKS)
                )
            ],
            error_prefix="Error generating action"
        ),
    ]
    return {tool.name: tool for tool in tools}


class PostmanToolHandler(LoggerMixin):
    """
    Registry and dispatcher for the collection tools.

    The Postman client is only needed to execute tools, so it is created on
    first use; listing tools works without an API key.
    """

    def __init__(
        self,
        operations: Optional[CollectionOperations] = None,
        client_factory: Callable[[], PostmanClient] = PostmanClient.from_settings
    ):
        self._tools = _register_tools()
        self._operations = operations
        self._client_factory = client_factory

    @property
    def operations(self) -> CollectionOperations:
        if self._operations is None:
            self._operations = CollectionOperations(self._client_factory())
        return self._operations

    def list_tools(self) -> List[PostmanTool]:
        """Get all available tools, in declaration order."""
        return list(self._tools.values())

    def get_tool(self, name: str) -> PostmanTool:
        if name not in self._tools:
            raise ToolNotFoundError(name)
        return self._tools[name]

    def has_tool(self, name: str) -> bool:
        return name in self._tools

    def validate_arguments(self, tool: PostmanTool, arguments: Dict[str, Any]) -> None:
        """
        Check arguments before any remote call is made.

        Raises:
            InvalidParamsError: A required argument is missing or empty, or an
                argument does not match its declared type or enum
        """
        required = tool.required_parameters
        if any(not arguments.get(name) for name in required):
            noun = "parameter" if len(required) == 1 else "parameters"
            raise InvalidParamsError(
                f"Missing required {noun}: {', '.join(required)}",
                details={"tool_name": tool.name}
            )

        # optional arguments explicitly sent as null count as absent
        present = {k: v for k, v in arguments.items() if v is not None}
        errors = sorted(Draft7Validator(tool.input_schema()).iter_errors(present), key=lambda e: list(e.path))
        if errors:
            error = errors[0]
            field = ".".join(str(p) for p in error.path) or "arguments"
            raise InvalidParamsError(
                f"Invalid parameter '{field}': {error.message}",
                details={"tool_name": tool.name}
            )

    async def execute_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> ToolExecutionResult:
        """
        Execute a tool.

        Raises:
            ToolNotFoundError: If ``name`` is not a registered tool
            InvalidParamsError: For bad arguments or an unknown request id
        """
        start_time = datetime.datetime.now()
        tool = self.get_tool(name)
        arguments = arguments or {}
        self.validate_arguments(tool, arguments)

        self.logger.info(f"Executing tool: {name}", extra={"tool_name": name, "arguments": arguments})

        try:
            value = await self._dispatch(name, arguments)
            result = ToolExecutionResult.payload(value)
        except (PostmanAPIError, MalformedCollectionError) as e:
            self.logger.error(
                f"Tool '{name}' failed: {e}",
                extra={"tool_name": name, "error_type": e.error_type}
            )
            result = ToolExecutionResult.text(f"{tool.error_prefix}: {e}", is_error=True)

        end_time = datetime.datetime.now()
        result.execution_time_ms = int((end_time - start_time).total_seconds() * 1000)

        self.logger.info(
            f"Tool '{name}' finished",
            extra={
                "tool_name": name,
                "is_error": result.is_error,
                "execution_time_ms": result.execution_time_ms
            }
        )
        return result

    def _dispatch(self, name: str, arguments: Dict[str, Any]) -> Awaitable[Any]:
        ops = self.operations
        if name == "list_collections":
            return ops.list_collections(arguments.get("workspace"))
        if name == "search_collection":
            return ops.search_collection(
                arguments["collectionId"],
                arguments["query"],
                arguments.get("type") or "all"
            )
        if name == "get_collection_structure":
            return ops.get_collection_structure(arguments["collectionId"])
        if name == "get_request_details":
            return ops.get_request_details(arguments["collectionId"], arguments["requestId"])
        if name == "create_action":
            return ops.create_action(
                arguments["collectionId"],
                arguments["requestId"],
                arguments["language"],
                arguments.get("agentFramework")
            )
        raise ToolNotFoundError(name)

    async def aclose(self) -> None:
        if self._operations is not None:
            await self._operations.client.aclose()
