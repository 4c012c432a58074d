"""
Pydantic schemas for API request and response validation.

All FastAPI endpoints MUST use strict Pydantic models with explicit types.
"""

from .credentials import ApiKeyStatusResponse, ApiKeyUpdateRequest
from .health import HealthResponse
from .recommendations import (
    EnvironmentalSnapshot,
    HeightClearance,
    InfrastructureRecord,
    LocationData,
    PlantImage,
    PlantImagesRequest,
    PlantImagesResponse,
    PlantingAreaSize,
    PlantRecord,
    RecommendationOptionsResponse,
    RecommendationQueryRequest,
    RecommendationQueryResponse,
    RecommendationQueryResponseError,
    RecommendationQueryResponseOK,
    RecommendationQueryResponseQuotaExceeded,
    RecommendationResult,
    SunlightExposure,
    UserPreferences,
    WateringFrequency,
)

__all__ = [
    "ApiKeyStatusResponse",
    "ApiKeyUpdateRequest",
    "HealthResponse",
    "EnvironmentalSnapshot",
    "HeightClearance",
    "InfrastructureRecord",
    "LocationData",
    "PlantImage",
    "PlantImagesRequest",
    "PlantImagesResponse",
    "PlantingAreaSize",
    "PlantRecord",
    "RecommendationOptionsResponse",
    "RecommendationQueryRequest",
    "RecommendationQueryResponse",
    "RecommendationQueryResponseError",
    "RecommendationQueryResponseOK",
    "RecommendationQueryResponseQuotaExceeded",
    "RecommendationResult",
    "SunlightExposure",
    "UserPreferences",
    "WateringFrequency",
]
