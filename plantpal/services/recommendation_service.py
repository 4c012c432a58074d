"""
Recommendation Service - Gemini plant recommendations with model fallback

This service runs the recommendation pipeline end to end:

    build_recommendation_prompt -> invoke_with_fallback -> parse_recommendations
                                                        -> enrich_plant_images (optional)

Architecture:
- Pattern: Single-shot Markdown generation, parsed locally
- Models: ordered fallback list (settings.GEMINI_TEXT_MODELS)
- Images: Imagen models, one plant at a time (settings.GEMINI_IMAGE_MODELS)
- API: Google Gen AI Python SDK (google-genai)
- Temperature: 0.7

Outcomes are mapped to response models instead of raised, so routes can
return them directly:
- OK: parsed plants / infrastructure / conclusion (+ raw Markdown)
- QUOTA_EXCEEDED: every model was rate limited; the client should offer
  the "use your own API key" flow
- ERROR: missing key, fatal provider/network error, or all models failed
"""

import logging
from typing import List, Optional, Sequence, Union

from plantpal.agents.recommendation.prompts import build_recommendation_prompt
from plantpal.config import settings
from plantpal.schemas.recommendations import (
    EnvironmentalSnapshot,
    LocationData,
    PlantImage,
    PlantImagesResponse,
    PlantRecord,
    RecommendationQueryResponseError,
    RecommendationQueryResponseOK,
    RecommendationQueryResponseQuotaExceeded,
    UserPreferences,
)
from plantpal.services.backoff import BackoffStrategy, FixedDelayBackoff
from plantpal.services.credentials import CredentialProvider, build_gemini_client
from plantpal.services.errors import (
    ConfigurationError,
    ModelFallbackExhaustedError,
    QuotaExceededAllError,
    TransportError,
)
from plantpal.services.gemini_client import GeminiImageGenerator, GeminiTextGenerator
from plantpal.services.image_enricher import ImageGenerator, enrich_plant_images
from plantpal.services.recommendation_invoker import (
    TextGenerator,
    invoke_with_fallback_detailed,
)
from plantpal.services.response_parser import parse_recommendations

logger = logging.getLogger(__name__)

RecommendationOutcome = Union[
    RecommendationQueryResponseOK,
    RecommendationQueryResponseQuotaExceeded,
    RecommendationQueryResponseError,
]


async def query_recommendations(
    location: LocationData,
    environment: EnvironmentalSnapshot,
    preferences: UserPreferences,
    *,
    credential_provider: CredentialProvider,
    text_generator: Optional[TextGenerator] = None,
    model_ids: Optional[Sequence[str]] = None,
    backoff: Optional[BackoffStrategy] = None,
) -> RecommendationOutcome:
    """
    Get plant recommendations for a location.

    This function:
    1. Builds the prompt from location, conditions and preferences
    2. Calls the Gemini text models in fallback order
    3. Parses the Markdown answer into plant / infrastructure records
    4. Returns a typed response model

    Args:
        location: Coordinates and optional display name
        environment: Current conditions at the location
        preferences: User's gardening preferences
        credential_provider: Source of the Gemini API key
        text_generator: Override for the (model_id, prompt) -> text call
        model_ids: Override for settings.GEMINI_TEXT_MODELS
        backoff: Override for the fixed inter-model delay

    Returns:
        RecommendationQueryResponseOK, ...QuotaExceeded or ...Error
    """
    logger.info(
        f"query_recommendations called for lat={location.latitude:.4f}, lon={location.longitude:.4f}"
    )

    try:
        if text_generator is None:
            text_generator = GeminiTextGenerator(build_gemini_client(credential_provider))
    except ConfigurationError as e:
        logger.error(f"Recommendation service not configured: {e}")
        return RecommendationQueryResponseError(error="not_configured", reason=str(e))

    models = list(model_ids) if model_ids is not None else list(settings.GEMINI_TEXT_MODELS)
    if backoff is None:
        backoff = FixedDelayBackoff(settings.MODEL_FALLBACK_DELAY_SECONDS)

    prompt = build_recommendation_prompt(location, environment, preferences)

    try:
        invocation = await invoke_with_fallback_detailed(
            prompt,
            models,
            text_generator,
            backoff=backoff,
        )
    except QuotaExceededAllError as e:
        logger.warning(f"Quota exceeded for every model: {e}")
        return RecommendationQueryResponseQuotaExceeded(reason=str(e))
    except ModelFallbackExhaustedError as e:
        return RecommendationQueryResponseError(error="all_models_failed", reason=str(e))
    except TransportError as e:
        return RecommendationQueryResponseError(error="transport_error", reason=str(e))
    except ValueError as e:
        logger.error(f"Invalid model configuration: {e}")
        return RecommendationQueryResponseError(error="not_configured", reason=str(e))

    result = parse_recommendations(invocation.text)
    if not result.plants:
        logger.warning(f"No plants could be parsed from the {invocation.model_id} response")

    return RecommendationQueryResponseOK(
        plants=result.plants,
        infrastructure=result.infrastructure,
        conclusion=result.conclusion,
        model_id=invocation.model_id,
        raw_markdown=invocation.text,
    )


async def generate_plant_images(
    plants: List[PlantRecord],
    *,
    credential_provider: CredentialProvider,
    image_generator: Optional[ImageGenerator] = None,
    model_ids: Optional[Sequence[str]] = None,
    backoff: Optional[BackoffStrategy] = None,
) -> PlantImagesResponse:
    """
    Add an illustration to each plant (in place) and summarize the outcome.

    A missing API key marks every plant as failed instead of raising, so
    the textual recommendations stay usable.
    """
    logger.info(f"generate_plant_images called for {len(plants)} plant(s)")

    try:
        if image_generator is None:
            image_generator = GeminiImageGenerator(build_gemini_client(credential_provider))
    except ConfigurationError as e:
        logger.error(f"Image generation not configured: {e}")
        for plant in plants:
            plant.image = PlantImage(status="failed", error=str(e))
        return PlantImagesResponse(plants=plants, succeeded=0, failed=len(plants))

    models = list(model_ids) if model_ids is not None else list(settings.GEMINI_IMAGE_MODELS)
    if backoff is None:
        backoff = FixedDelayBackoff(settings.IMAGE_REQUEST_DELAY_SECONDS)

    def _log_progress(completed: int, total: int, plant: PlantRecord) -> None:
        logger.info(f"Image {completed}/{total} for '{plant.common_name}': {plant.image.status}")

    outcomes = await enrich_plant_images(
        plants,
        models,
        image_generator,
        backoff=backoff,
        on_progress=_log_progress,
    )

    succeeded = sum(1 for outcome in outcomes if outcome.succeeded)
    return PlantImagesResponse(plants=plants, succeeded=succeeded, failed=len(outcomes) - succeeded)
