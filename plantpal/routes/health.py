"""
Health check route for the PlantPal backend.

Public endpoint for load balancers, monitoring, and deployment verification.
It does not touch the Gemini API.
"""

from fastapi import APIRouter

from plantpal.schemas.health import HealthResponse
from plantpal.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    status_code=200,
)
async def health_check() -> HealthResponse:
    """Check if API is running."""
    logger.debug("Health check endpoint called")
    return HealthResponse()
