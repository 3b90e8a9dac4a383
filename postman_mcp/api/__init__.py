"""
API module for the Postman MCP HTTP transport.

This module contains the REST API endpoints organized by functional area:
- health: Health check endpoints
- mcp: MCP tool discovery and execution endpoints
"""

from . import health, mcp

__all__ = ["health", "mcp"]
