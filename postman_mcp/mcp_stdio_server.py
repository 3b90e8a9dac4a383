"""
MCP Stdio Server

This module provides a stdio-based MCP server that communicates via
newline-delimited JSON-RPC 2.0 on standard input/output, compatible with
Claude Desktop, VS Code and other MCP clients.

Requests are handled one at a time, in arrival order.
"""

import asyncio
import json
import logging
import sys
from typing import IO, Any, Dict, Optional

from .core.config import Settings, get_settings
from .core.exceptions import (
    INTERNAL_ERROR,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    PostmanMCPException,
)
from .core.logging import setup_logging
from .core.tools import PostmanToolHandler

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"


class MCPStdioServer:
    """MCP server that communicates via stdio."""

    def __init__(
        self,
        tool_handler: Optional[PostmanToolHandler] = None,
        settings: Optional[Settings] = None,
        stdin: Optional[IO[str]] = None,
        stdout: Optional[IO[str]] = None
    ):
        self.settings = settings or get_settings()
        self.tool_handler = tool_handler or PostmanToolHandler()
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def _send_response(self, response: Dict[str, Any]) -> None:
        """Send a JSON-RPC response to stdout."""
        response_json = json.dumps(response, separators=(',', ':'))
        self.stdout.write(response_json + "\n")
        self.stdout.flush()
        logger.debug(f"Sent response: {response_json}")

    def _send_result(self, request_id: Any, result: Dict[str, Any]) -> None:
        self._send_response({"jsonrpc": "2.0", "id": request_id, "result": result})

    def _send_error(self, request_id: Optional[Any], code: int, message: str) -> None:
        """Send a JSON-RPC error response."""
        error_response = {
            "jsonrpc": "2.0",
            "id": request_id,
            "error": {
                "code": code,
                "message": message
            }
        }
        self._send_response(error_response)

    async def _handle_initialize(self, request_id: Any, params: Dict[str, Any]) -> None:
        """Handle the initialize request."""
        logger.info(
            "Handling initialize request",
            extra={"client_info": params.get("clientInfo")}
        )

        self._send_result(request_id, {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {
                "tools": {}
            },
            "serverInfo": {
                "name": self.settings.SERVER_NAME,
                "version": self.settings.VERSION
            }
        })

    async def _handle_tools_list(self, request_id: Any, params: Dict[str, Any]) -> None:
        """Handle the tools/list request."""
        logger.info("Handling tools/list request")

        tools = [
            {
                "name": tool.name,
                "description": tool.description,
                "inputSchema": tool.input_schema()
            }
            for tool in self.tool_handler.list_tools()
        ]

        self._send_result(request_id, {"tools": tools})

    async def _handle_tools_call(self, request_id: Any, params: Dict[str, Any]) -> None:
        """Handle the tools/call request."""
        tool_name = params.get("name")
        arguments = params.get("arguments") or {}

        logger.info(f"Handling tools/call request for tool: {tool_name}")

        try:
            result = await self.tool_handler.execute_tool(tool_name, arguments)
        except PostmanMCPException as e:
            logger.warning(f"Tool call rejected for {tool_name}: {e.message}")
            self._send_error(request_id, e.rpc_code, e.message)
            return

        self._send_result(request_id, result.to_mcp())

    async def _handle_request(self, request: Dict[str, Any]) -> None:
        """Handle a single JSON-RPC request or notification."""
        request_id = request.get("id")
        method = request.get("method")
        params = request.get("params") or {}

        logger.debug(f"Handling request: {method}")

        # notifications carry no id and get no reply
        if "id" not in request:
            logger.debug(f"Ignoring notification: {method}")
            return

        try:
            if method == "initialize":
                await self._handle_initialize(request_id, params)
            elif method == "ping":
                self._send_result(request_id, {})
            elif method == "tools/list":
                await self._handle_tools_list(request_id, params)
            elif method == "tools/call":
                await self._handle_tools_call(request_id, params)
            else:
                self._send_error(request_id, METHOD_NOT_FOUND, f"Method '{method}' not found")

        except Exception as e:
            logger.error(f"Error handling request {method}: {e}", exc_info=True)
            self._send_error(request_id, INTERNAL_ERROR, f"Internal error: {str(e)}")

    async def run(self) -> None:
        """Main server loop - read from stdin and process requests."""
        logger.info("Postman MCP server running on stdio")

        loop = asyncio.get_running_loop()
        try:
            while True:
                line = await loop.run_in_executor(None, self.stdin.readline)
                if not line:
                    break

                line = line.strip()
                if not line:
                    continue

                try:
                    request = json.loads(line)
                except json.JSONDecodeError as e:
                    logger.error(f"Invalid JSON received: {e}")
                    self._send_error(None, PARSE_ERROR, "Parse error")
                    continue

                if not isinstance(request, dict):
                    self._send_error(None, PARSE_ERROR, "Parse error")
                    continue

                await self._handle_request(request)

        except KeyboardInterrupt:
            logger.info("Server interrupted")
        finally:
            await self.tool_handler.aclose()
            logger.info("MCP stdio server stopping")


async def main() -> None:
    """Main entry point for the stdio server."""
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.DEBUG, settings.JSON_LOGS, stream=sys.stderr)
    server = MCPStdioServer(settings=settings)
    await server.run()


if __name__ == "__main__":
    asyncio.run(main())
