"""
Core module for the Postman MCP server.

This module contains the foundational components (configuration, logging
and exceptions). The collection logic lives in the submodules
``traversal``, ``codegen``, ``workspace_resolver``, ``postman_client``,
``operations`` and ``tools``.
"""

from .config import Settings, get_settings
from .exceptions import (
    PostmanMCPException,
    InvalidParamsError,
    ToolNotFoundError,
    MalformedCollectionError,
    ConfigurationError,
    PostmanAPIError,
)
from .logging import setup_logging, get_logger, LoggerMixin

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    # Exceptions
    "PostmanMCPException",
    "InvalidParamsError",
    "ToolNotFoundError",
    "MalformedCollectionError",
    "ConfigurationError",
    "PostmanAPIError",
    # Logging
    "setup_logging",
    "get_logger",
    "LoggerMixin",
]
