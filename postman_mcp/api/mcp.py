"""
MCP tool endpoints for the Postman MCP HTTP transport.

Exposes the same tool catalogue and dispatch as the stdio server.
``InvalidParamsError`` and ``ToolNotFoundError`` propagate to the app's
exception handler; Postman API failures come back as ``isError`` results.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from ..core.config import Settings, get_settings
from ..core.tools import PostmanToolHandler

router = APIRouter()
logger = logging.getLogger(__name__)


class MCPTool(BaseModel):
    """MCP tool definition."""
    name: str
    description: str
    inputSchema: Dict[str, Any]


class MCPToolsResponse(BaseModel):
    """Response for MCP tools listing."""
    tools: List[MCPTool]


class MCPToolExecutionRequest(BaseModel):
    """Request for MCP tool execution."""
    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


class MCPToolExecutionResponse(BaseModel):
    """Response for MCP tool execution."""
    content: List[Dict[str, Any]]
    isError: bool = False


class MCPCapabilitiesResponse(BaseModel):
    """MCP server capabilities response."""
    capabilities: Dict[str, Any]
    serverInfo: Dict[str, str]


def get_tool_handler(request: Request) -> PostmanToolHandler:
    """Tool handler stored on the app during startup."""
    return request.app.state.tool_handler


@router.get("/capabilities", response_model=MCPCapabilitiesResponse)
async def get_capabilities(settings: Settings = Depends(get_settings)):
    """Get MCP server capabilities."""
    return MCPCapabilitiesResponse(
        capabilities={"tools": {}},
        serverInfo={"name": settings.SERVER_NAME, "version": settings.VERSION}
    )


@router.get("/tools", response_model=MCPToolsResponse)
async def list_tools(
    request: Request,
    handler: PostmanToolHandler = Depends(get_tool_handler)
):
    """List available MCP tools."""
    logger.info(
        "MCP tools list requested",
        extra={"correlation_id": getattr(request.state, "correlation_id", None)}
    )

    return MCPToolsResponse(tools=[
        MCPTool(name=tool.name, description=tool.description, inputSchema=tool.input_schema())
        for tool in handler.list_tools()
    ])


@router.post("/tools/call", response_model=MCPToolExecutionResponse)
async def call_tool(
    request: Request,
    execution_request: MCPToolExecutionRequest,
    handler: PostmanToolHandler = Depends(get_tool_handler)
):
    """
    Execute an MCP tool.

    Calls the specified tool with the provided arguments and returns the
    result in MCP format.
    """
    correlation_id = getattr(request.state, "correlation_id", None)

    logger.info(
        "MCP tool execution requested",
        extra={"tool_name": execution_request.name, "correlation_id": correlation_id}
    )

    result = await handler.execute_tool(execution_request.name, execution_request.arguments)

    logger.info(
        "MCP tool execution completed",
        extra={
            "tool_name": execution_request.name,
            "execution_time_ms": result.execution_time_ms,
            "is_error": result.is_error,
            "correlation_id": correlation_id
        }
    )

    return MCPToolExecutionResponse(content=result.content, isError=result.is_error)
