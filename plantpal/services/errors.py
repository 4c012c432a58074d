"""
Error taxonomy for the recommendation pipeline.

- ConfigurationError: no credential available at all (fatal)
- ModelUnavailableError / RateLimitedError: per-model, recoverable by fallback;
  raised by the Gemini adapters for 404 / 429 provider errors
- EmptyResponseError: a model answered with nothing usable (recoverable)
- TransportError: network/auth/unknown failure, aborts the fallback loop
- ModelFallbackExhaustedError: every model failed recoverably
- QuotaExceededAllError: every model failed because of rate limiting;
  callers route this to the "supply your own API key" flow
- ImageGenerationFailure: one plant's illustration failed; never escapes
  the image enricher

The response parser has no error type: it always degrades to partial or
empty output.
"""

from typing import Optional, Sequence


class PlantPalError(Exception):
    """Base class for pipeline errors."""


class ConfigurationError(PlantPalError):
    """No usable API key (neither user-supplied nor default)."""


class GenerationError(PlantPalError):
    """A single model call failed."""

    def __init__(self, message: str, model_id: Optional[str] = None):
        super().__init__(message)
        self.model_id = model_id


class ModelUnavailableError(GenerationError):
    """The model id is unknown, retired or not supported for this call."""


class RateLimitedError(GenerationError):
    """The model's quota is exhausted (HTTP 429 / RESOURCE_EXHAUSTED)."""


class EmptyResponseError(GenerationError):
    """The model returned no text or no image."""


class TransportError(PlantPalError):
    """Fatal failure; remaining models are not tried."""

    def __init__(self, message: str, model_id: Optional[str] = None):
        super().__init__(message)
        self.model_id = model_id


class ModelFallbackExhaustedError(PlantPalError):
    """Every model in the fallback list failed recoverably."""

    def __init__(self, attempts: Sequence, message: Optional[str] = None):
        self.attempts = list(attempts)
        if message is None:
            details = "; ".join(
                f"{attempt.model_id}: {attempt.message}" for attempt in self.attempts
            )
            message = f"All {len(self.attempts)} model(s) failed. {details}"
        super().__init__(message)


class QuotaExceededAllError(ModelFallbackExhaustedError):
    """Every model in the fallback list was rate limited."""

    def __init__(self, attempts: Sequence):
        attempts = list(attempts)
        models = ", ".join(attempt.model_id for attempt in attempts)
        super().__init__(
            attempts,
            message=(
                f"Quota exceeded for all models ({models}). "
                "Supply your own API key to continue."
            ),
        )


class ImageGenerationFailure(PlantPalError):
    """Every image model failed for one plant."""

    def __init__(self, plant_id: str, message: str):
        super().__init__(message)
        self.plant_id = plant_id
