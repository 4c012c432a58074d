"""
Service layer for the PlantPal backend.

Contains the recommendation pipeline:
- recommendation_invoker: ordered model fallback with failure classification
- response_parser: total Markdown -> record parser
- image_enricher: sequential per-plant illustrations
- recommendation_service: orchestration, mapping outcomes to response models

Services act as the glue between routes (HTTP layer) and the Gemini API.
"""

from .backoff import BackoffStrategy, ExponentialBackoff, FixedDelayBackoff, NoDelayBackoff
from .credentials import (
    EnvironmentCredentialProvider,
    LocalCredentialStore,
    UserFirstCredentialProvider,
    build_gemini_client,
    resolve_api_key,
)
from .error_classifier import ErrorClass, classify_generation_error
from .errors import (
    ConfigurationError,
    ImageGenerationFailure,
    ModelFallbackExhaustedError,
    QuotaExceededAllError,
    TransportError,
)
from .image_enricher import enrich_plant_images, normalize_image_payload
from .recommendation_invoker import invoke_with_fallback
from .recommendation_service import generate_plant_images, query_recommendations
from .response_parser import parse_recommendations

__all__ = [
    # Backoff
    "BackoffStrategy",
    "ExponentialBackoff",
    "FixedDelayBackoff",
    "NoDelayBackoff",
    # Credentials
    "EnvironmentCredentialProvider",
    "LocalCredentialStore",
    "UserFirstCredentialProvider",
    "build_gemini_client",
    "resolve_api_key",
    # Errors
    "ErrorClass",
    "classify_generation_error",
    "ConfigurationError",
    "ImageGenerationFailure",
    "ModelFallbackExhaustedError",
    "QuotaExceededAllError",
    "TransportError",
    # Pipeline
    "enrich_plant_images",
    "normalize_image_payload",
    "invoke_with_fallback",
    "parse_recommendations",
    "generate_plant_images",
    "query_recommendations",
]
