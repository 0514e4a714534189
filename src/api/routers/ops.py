import os
import logging
from fastapi import APIRouter, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from api import state
from storage import db

router = APIRouter()
logger = logging.getLogger(__name__)

# Config
USE_DATABASE = os.getenv("USE_DATABASE", "false").lower() in {
    "1",
    "true",
    "yes",
}


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint for container orchestration."""
    health = {
        "status": "healthy",
        "profile": os.getenv("DEPLOYMENT_PROFILE", "unknown"),
        "storage": "postgres" if USE_DATABASE else "in-memory",
        "repository_ready": state.repository is not None,
    }

    if USE_DATABASE:
        try:
            db_health = await db.health_check()
            health["database"] = db_health
            if db_health["status"] != "healthy":
                health["status"] = "degraded"
        except Exception as e:
            health["status"] = "degraded"
            health["database"] = {"status": "error", "error": str(e)}

    return health


@router.get("/metrics")
async def metrics() -> Response:
    """
    Prometheus scrape endpoint.
    """
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
