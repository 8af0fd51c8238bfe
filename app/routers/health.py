# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# Both endpoints still require a bearer token.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from app.auth import require_token
from app.config import Settings
from app.dependencies import get_app_settings, get_mongo_client
from lib.mongo_client import ping

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_token)])

VERSION = "1.0.0"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    message: str
    timestamp: str
    environment: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    database: str
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Annotated[Settings, Depends(get_app_settings)]):
    """
    Health check endpoint.

    Answers without touching the database.
    """
    return HealthResponse(
        status="healthy",
        message="MongoDB Proxy is running",
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.ENVIRONMENT,
        version=VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
def readiness_check(client: Annotated[MongoClient, Depends(get_mongo_client)]):
    """
    Readiness check endpoint.

    Pings the database. Reports "degraded" instead of failing so load
    balancers can read the reason.
    """
    try:
        ping(client)
        database = "healthy"
    except PyMongoError as e:
        logger.warning(f"Readiness ping failed: {e}")
        database = f"unhealthy: {str(e)[:50]}"

    return ReadinessResponse(
        status="ready" if database == "healthy" else "degraded",
        database=database,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
