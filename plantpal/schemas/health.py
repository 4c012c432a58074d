"""
Health check endpoint schemas.

The health endpoint is PUBLIC and returns a simple status indicator.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    Response model for GET /health endpoint.

    Used by load balancers, monitoring systems, and deployment checks.
    """

    status: str = Field(
        default="healthy",
        description="Health status of the API (always 'healthy' if responding)",
        examples=["healthy"]
    )
    service: str = Field(default="plantpal-backend", examples=["plantpal-backend"])
