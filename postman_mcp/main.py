"""
Postman MCP server - FastAPI Application

HTTP transport for the collection tools: the same catalogue and dispatch
as the stdio server, served as JSON endpoints.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse

from .api import health, mcp
from .core.config import get_settings
from .core.exceptions import PostmanMCPException
from .core.logging import setup_logging
from .core.middleware import RequestContextMiddleware
from .core.tools import PostmanToolHandler


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager for startup and shutdown events.
    """
    settings = get_settings()
    logger = logging.getLogger(__name__)

    logger.info("Starting Postman MCP server", extra={
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "api_key_configured": settings.has_api_key()
    })

    yield

    logger.info("Shutting down Postman MCP server")
    await app.state.tool_handler.aclose()


def create_app(tool_handler: Optional[PostmanToolHandler] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.
    """
    settings = get_settings()

    setup_logging(settings.LOG_LEVEL, settings.DEBUG, settings.JSON_LOGS)

    app = FastAPI(
        title="Postman MCP Server",
        description="Explore Postman collections and generate actions from their requests",
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )
    app.state.tool_handler = tool_handler or PostmanToolHandler()

    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=settings.ALLOWED_HOSTS
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_middleware(RequestContextMiddleware)

    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(mcp.router, prefix="/v1/mcp", tags=["mcp"])

    @app.exception_handler(PostmanMCPException)
    async def mcp_exception_handler(request: Request, exc: PostmanMCPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "type": exc.error_type,
                    "message": exc.message,
                    "details": exc.details,
                    "correlation_id": getattr(request.state, "correlation_id", None)
                }
            }
        )

    return app


def run(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        create_app(),
        host=host or settings.HOST,
        port=port or settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    run()
