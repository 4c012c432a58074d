"""
FastAPI routes for plant recommendation endpoints.

Endpoints:
- GET  /recommendations/options: Selectable values for the preferences form
- POST /recommendations/query: Recommendations for a location + preferences
- POST /recommendations/images: Illustrations for already-parsed plants
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from plantpal.dependencies import get_credential_provider
from plantpal.schemas.recommendations import (
    HeightClearance,
    PlantImagesRequest,
    PlantImagesResponse,
    PlantingAreaSize,
    RecommendationOptionsResponse,
    RecommendationQueryRequest,
    RecommendationQueryResponse,
    RecommendationQueryResponseOK,
    SunlightExposure,
    WateringFrequency,
)
from plantpal.services.credentials import UserFirstCredentialProvider
from plantpal.services.recommendation_service import (
    generate_plant_images,
    query_recommendations,
)
from plantpal.utils.constants import PLANNING_GOALS, PLANT_TYPE_SUGGESTIONS

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/recommendations",
    tags=["recommendations"]
)


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.get(
    "/options",
    response_model=RecommendationOptionsResponse,
    summary="List selectable preference values",
)
async def get_recommendation_options() -> RecommendationOptionsResponse:
    """Enum labels, planning goals and plant type suggestions for form builders."""
    return RecommendationOptionsResponse(
        sunlight_exposure=[option.value for option in SunlightExposure],
        watering_frequency=[option.value for option in WateringFrequency],
        planting_area_size=[option.value for option in PlantingAreaSize],
        height_clearance=[option.value for option in HeightClearance],
        planning_goals=PLANNING_GOALS,
        plant_type_suggestions=PLANT_TYPE_SUGGESTIONS,
    )


@router.post(
    "/query",
    response_model=RecommendationQueryResponse,
    status_code=200,
    summary="Query plant recommendations",
    description="""
    Returns plant and green infrastructure recommendations for a location.

    **Frontend Flow:**
    1. Client resolves coordinates and fetches current weather itself
    2. User fills in preferences
    3. POST /recommendations/query
    4. Receive one of three responses:
       - OK: Parsed plants, infrastructure ideas, conclusion, and the raw Markdown
       - QUOTA_EXCEEDED: All models are rate limited; offer PUT /credentials/api-key
       - ERROR: Missing API key or provider failure; show the reason

    **Images:**
    With include_images=true each plant gets an illustration before the response
    is sent (slow, one plant at a time). Otherwise call POST /recommendations/images
    afterwards.
    """
)
async def query_recommendations_endpoint(
    request: RecommendationQueryRequest,
    credential_provider: Annotated[UserFirstCredentialProvider, Depends(get_credential_provider)],
) -> RecommendationQueryResponse:
    """
    Recommendation query endpoint.

    - Parse/Validate: Handled by Pydantic RecommendationQueryRequest
    - Call LLM: Model fallback handled by the service layer
    - Map output: Service layer maps outcomes to response models
    """
    logger.info(
        f"POST /recommendations/query called (credential source={credential_provider.source()}, "
        f"include_images={request.include_images})"
    )

    response = await query_recommendations(
        request.location,
        request.environment,
        request.preferences,
        credential_provider=credential_provider,
    )

    if request.include_images and isinstance(response, RecommendationQueryResponseOK) and response.plants:
        await generate_plant_images(response.plants, credential_provider=credential_provider)

    logger.info(f"Returning response with status={response.status}")
    return response


@router.post(
    "/images",
    response_model=PlantImagesResponse,
    status_code=200,
    summary="Generate plant illustrations",
    description="""
    Generates one illustration per plant, sequentially, with image-model fallback.

    A plant whose image cannot be generated is returned with image.status="failed";
    it never fails the whole request.
    """
)
async def generate_plant_images_endpoint(
    request: PlantImagesRequest,
    credential_provider: Annotated[UserFirstCredentialProvider, Depends(get_credential_provider)],
) -> PlantImagesResponse:
    logger.info(f"POST /recommendations/images called for {len(request.plants)} plant(s)")

    response = await generate_plant_images(request.plants, credential_provider=credential_provider)

    logger.info(f"Returning {response.succeeded} image(s), {response.failed} failure(s)")
    return response
