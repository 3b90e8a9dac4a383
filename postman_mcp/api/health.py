"""
Health check endpoints for the Postman MCP HTTP transport.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..core.config import Settings, get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    version: str
    environment: str
    api_key_configured: bool


@router.get("/", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)):
    """
    Basic health check endpoint.

    Returns the service status, version, environment and whether a Postman
    API key is configured (tools fail without one).
    """
    return HealthResponse(
        status="healthy",
        version=settings.VERSION,
        environment=settings.ENVIRONMENT,
        api_key_configured=settings.has_api_key()
    )


@router.get("/live", response_model=HealthResponse)
async def liveness_check(settings: Settings = Depends(get_settings)):
    """Liveness probe endpoint."""
    return HealthResponse(
        status="alive",
        version=settings.VERSION,
        environment=settings.ENVIRONMENT,
        api_key_configured=settings.has_api_key()
    )
