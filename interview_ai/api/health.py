"""
Health check endpoints.
"""
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from interview_ai import __version__
from interview_ai.core.config import get_settings
from interview_ai.core.database import mongodb_client

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    session_store: str
    mongodb: Optional[bool] = None
    version: str = __version__


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Report service status and, when MongoDB backs the session store,
    its connectivity.
    """
    settings = get_settings()

    if not settings.uses_mongodb:
        return HealthResponse(status="healthy", session_store=settings.session_store)

    mongodb_ok = await mongodb_client.health_check()
    return HealthResponse(
        status="healthy" if mongodb_ok else "degraded",
        session_store=settings.session_store,
        mongodb=mongodb_ok,
    )


@router.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": get_settings().app_name,
        "version": __version__,
        "docs": "/docs",
    }
