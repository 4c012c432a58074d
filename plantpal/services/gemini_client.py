"""
Gemini adapters for the fallback loops.

The invoker and the image enricher only know two async callables:

    generate(model_id, prompt) -> str
    generate_image(model_id, prompt) -> image bytes payload

GeminiTextGenerator and GeminiImageGenerator implement them on top of the
Google Gen AI SDK (google-genai). Provider errors (google.genai.errors.APIError)
with a quota or not-found code are re-raised as RateLimitedError /
ModelUnavailableError (chained to the original); any other APIError
propagates unchanged and is classified from its `code`/`status`/message.
"""

import logging
from typing import Any, Optional

from google import genai
from google.genai import types
from google.genai.errors import APIError

from plantpal.services.errors import (
    EmptyResponseError,
    GenerationError,
    ModelUnavailableError,
    RateLimitedError,
)

logger = logging.getLogger(__name__)

# Some creativity in plant selection, bounded sampling
TEXT_TEMPERATURE = 0.7
TEXT_TOP_P = 0.95
TEXT_TOP_K = 40

IMAGE_ASPECT_RATIO = "1:1"
IMAGE_MIME_TYPE = "image/jpeg"


def _typed_api_error(exc: Exception, model_id: str) -> Optional[GenerationError]:
    """Map a provider APIError to a typed error, or None if it has no known meaning."""
    code = getattr(exc, "code", None)
    status = str(getattr(exc, "status", "") or "").upper()

    if code == 429 or status == "RESOURCE_EXHAUSTED":
        return RateLimitedError(f"{model_id} is rate limited: {exc}", model_id=model_id)
    if code == 404 or status == "NOT_FOUND":
        return ModelUnavailableError(f"{model_id} is not available: {exc}", model_id=model_id)
    return None


class GeminiTextGenerator:
    """Text generation via client.aio.models.generate_content."""

    def __init__(self, client: genai.Client):
        self.client = client

    async def __call__(self, model_id: str, prompt: str) -> str:
        config = types.GenerateContentConfig(
            temperature=TEXT_TEMPERATURE,
            top_p=TEXT_TOP_P,
            top_k=TEXT_TOP_K,
        )

        try:
            response = await self.client.aio.models.generate_content(
                model=model_id,
                contents=prompt,
                config=config,
            )
        except APIError as e:
            typed = _typed_api_error(e, model_id)
            if typed is None:
                raise
            raise typed from e

        # response.text can be None even when parts have text
        content = response.text
        if not content and response.candidates:
            candidate = response.candidates[0]
            if candidate.content and candidate.content.parts:
                for part in candidate.content.parts:
                    if getattr(part, "text", None):
                        content = part.text
                        break

        if not content:
            raise EmptyResponseError(
                f"Received an empty response from {model_id}",
                model_id=model_id,
            )
        return content


class GeminiImageGenerator:
    """Image generation via client.aio.models.generate_images (Imagen models)."""

    def __init__(self, client: genai.Client, mime_type: str = IMAGE_MIME_TYPE):
        self.client = client
        self.mime_type = mime_type

    async def __call__(self, model_id: str, prompt: str) -> Any:
        config = types.GenerateImagesConfig(
            number_of_images=1,
            aspect_ratio=IMAGE_ASPECT_RATIO,
            output_mime_type=self.mime_type,
        )

        try:
            response = await self.client.aio.models.generate_images(
                model=model_id,
                prompt=prompt,
                config=config,
            )
        except APIError as e:
            typed = _typed_api_error(e, model_id)
            if typed is None:
                raise
            raise typed from e

        for generated in response.generated_images or []:
            image = getattr(generated, "image", None)
            payload = getattr(image, "image_bytes", None) if image is not None else None
            if payload:
                return payload

        raise EmptyResponseError(f"{model_id} returned no images", model_id=model_id)
