"""
Core configuration module for the Postman MCP server.

This module handles all configuration settings using Pydantic Settings
with support for environment variables and a local ``.env`` file.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be overridden via environment variables with the
    POSTMAN_MCP_ prefix (e.g., POSTMAN_MCP_DEBUG=true). The API key is also
    read from the plain POSTMAN_API_KEY variable.
    """

    # Application metadata
    VERSION: str = "0.1.0"
    SERVER_NAME: str = Field(default="ib-postman-tool-generator", description="Name reported to MCP clients")
    ENVIRONMENT: str = Field(default="development", description="Environment name (development, staging, production)")
    DEBUG: bool = Field(default=False, description="Enable debug mode")

    # HTTP transport
    HOST: str = Field(default="127.0.0.1", description="Host to bind the HTTP server to")
    PORT: int = Field(default=8000, description="Port to bind the HTTP server to")
    ALLOWED_HOSTS: List[str] = Field(default=["*"], description="Allowed host headers")
    CORS_ORIGINS: List[str] = Field(default=["*"], description="Allowed CORS origins")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    JSON_LOGS: bool = Field(default=False, description="Emit logs as JSON lines")

    # Postman API
    POSTMAN_API_KEY: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("POSTMAN_API_KEY", "POSTMAN_MCP_API_KEY"),
        description="Postman API key sent as X-Api-Key"
    )
    POSTMAN_API_BASE_URL: str = Field(default="https://api.postman.com", description="Postman API base URL")
    REQUEST_TIMEOUT_SECONDS: float = Field(default=30.0, description="Timeout for Postman API calls in seconds")

    model_config = {
        "env_prefix": "POSTMAN_MCP_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    def has_api_key(self) -> bool:
        return bool(self.POSTMAN_API_KEY)


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings with caching.

    The @lru_cache decorator ensures that this function returns the same
    Settings instance for the lifetime of the process.
    """
    return Settings()
