"""
Logging configuration for the Postman MCP server.

This module sets up logging with human-readable formatting by default and
JSON formatting (python-json-logger) on request. The stdio transport
passes ``sys.stderr`` so protocol frames on stdout stay clean.
"""

import logging
import logging.config
import sys
from typing import IO, Optional


def setup_logging(
    log_level: str = "INFO",
    debug: bool = False,
    json_logs: bool = False,
    stream: Optional[IO[str]] = None
) -> None:
    """
    Configure application logging.

    Args:
        log_level: The log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        debug: Whether to include file/line information
        json_logs: Emit one JSON object per record
        stream: Target stream, defaults to stdout
    """
    if json_logs:
        formatter = "json"
    elif debug:
        formatter = "detailed"
    else:
        formatter = "default"

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "detailed": {
                "format": (
                    "%(asctime)s - %(name)s - %(levelname)s - "
                    "[%(filename)s:%(lineno)d] - %(message)s"
                )
            },
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "format": (
                    "%(asctime)s %(name)s %(levelname)s %(filename)s "
                    "%(lineno)d %(message)s"
                )
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": stream or sys.stdout,
                "formatter": formatter,
                "level": log_level
            }
        },
        "loggers": {
            "": {  # Root logger
                "level": log_level,
                "handlers": ["console"],
                "propagate": False
            },
            "uvicorn": {
                "level": log_level,
                "handlers": ["console"],
                "propagate": False
            },
            "uvicorn.access": {
                "level": log_level,
                "handlers": ["console"],
                "propagate": False
            },
            "httpx": {
                "level": "WARNING",
                "handlers": ["console"],
                "propagate": False
            }
        }
    }

    logging.config.dictConfig(logging_config)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: The logger name (typically __name__)

    Returns:
        A configured logger instance
    """
    return logging.getLogger(name)


class LoggerMixin:
    """
    Mixin class that provides a logger instance to any class.

    Usage:
        class MyClass(LoggerMixin):
            def some_method(self):
                self.logger.info("Hello, world!")
    """

    @property
    def logger(self) -> logging.Logger:
        """Get a logger instance for this class."""
        return logging.getLogger(self.__class__.__module__ + "." + self.__class__.__name__)
