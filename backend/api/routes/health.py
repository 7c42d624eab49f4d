"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.config import get_settings
from shared.database import get_supabase_client

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    Returns 503 when the document store is not configured or not reachable.
    """
    try:
        get_supabase_client().table("users").select("id").limit(1).execute()
    except Exception as e:
        logger.warning(f"Readiness check failed: {e}")
        return JSONResponse(
            status_code=503,
            content=ReadinessResponse(status="unavailable", database="unreachable").model_dump(),
        )
    return ReadinessResponse(status="ready", database="connected")
