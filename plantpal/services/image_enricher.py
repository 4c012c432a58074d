"""
Image Enricher - one illustration per plant, sequentially

For each plant, in order:
1. Mark its image state "pending"
2. Try each image model in order; the first one that returns a payload wins
   (any failure moves on to the next model)
3. Normalize the payload to base64 and store a data URI ("succeeded"),
   or record the last error ("failed")
4. Notify observers, then wait (backoff) before the next plant

Plants are never processed in parallel: all image models share the same
API key and its rate limit. A failed plant never stops the others.

There is no cancellation: a caller that stops listening simply ignores
further callbacks while the in-flight request completes.
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional, Sequence

from plantpal.agents.recommendation.prompts import build_plant_image_prompt
from plantpal.schemas.recommendations import PlantImage, PlantRecord
from plantpal.services.backoff import BackoffStrategy, FixedDelayBackoff
from plantpal.services.errors import ImageGenerationFailure

logger = logging.getLogger(__name__)

ImageGenerator = Callable[[str, str], Awaitable[Any]]
ProgressCallback = Callable[[int, int, PlantRecord], None]

DEFAULT_IMAGE_DELAY_SECONDS = 1.5
DEFAULT_MIME_TYPE = "image/jpeg"


@dataclass
class ImageOutcome:
    """Result of enriching one plant."""
    plant_id: str
    succeeded: bool
    model_id: Optional[str] = None
    data_uri: Optional[str] = None
    error: Optional[str] = None


ItemCallback = Callable[[ImageOutcome], None]


def normalize_image_payload(payload: Any) -> str:
    """
    Normalize an image payload to a base64 string.

    Accepts:
        - str: already base64 (a data URI prefix is removed)
        - bytes / bytearray / memoryview: raw image bytes
        - list / tuple of ints (0-255): array-like byte collection

    Raises:
        TypeError: Unsupported payload type
        ValueError: Empty payload, invalid base64 text or byte values out of range
    """
    if isinstance(payload, str):
        text = payload.strip()
        if text.startswith("data:") and "," in text:
            text = text.split(",", 1)[1]
        text = "".join(text.split())
        if not text:
            raise ValueError("Empty image payload")
        # Some encoders drop the trailing "=" padding
        text += "=" * (-len(text) % 4)
        try:
            base64.b64decode(text, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Image payload is not valid base64: {e}") from e
        return text

    if isinstance(payload, (bytes, bytearray, memoryview)):
        raw = bytes(payload)
    elif isinstance(payload, (list, tuple)):
        raw = bytes(payload)
    else:
        raise TypeError(f"Unsupported image payload type: {type(payload).__name__}")

    if not raw:
        raise ValueError("Empty image payload")
    return base64.b64encode(raw).decode("ascii")


def to_data_uri(base64_data: str, mime_type: str = DEFAULT_MIME_TYPE) -> str:
    return f"data:{mime_type};base64,{base64_data}"


async def _generate_for_plant(
    plant: PlantRecord,
    model_ids: Sequence[str],
    generate_image: ImageGenerator,
    mime_type: str,
) -> ImageOutcome:
    prompt = build_plant_image_prompt(plant.common_name, plant.scientific_name)
    last_error = "No image models configured"

    for model_id in model_ids:
        try:
            payload = await generate_image(model_id, prompt)
            encoded = normalize_image_payload(payload)
        except Exception as e:
            last_error = f"{model_id}: {e}"
            logger.warning(f"Image model {model_id} failed for '{plant.common_name}': {e}")
            continue

        return ImageOutcome(
            plant_id=plant.id,
            succeeded=True,
            model_id=model_id,
            data_uri=to_data_uri(encoded, mime_type),
        )

    failure = ImageGenerationFailure(plant.id, f"All image models failed. Last error: {last_error}")
    logger.error(f"No image for '{plant.common_name}': {failure}")
    return ImageOutcome(plant_id=plant.id, succeeded=False, error=str(failure))


def _notify_observers(
    on_item_complete: Optional[ItemCallback],
    on_progress: Optional[ProgressCallback],
    outcome: ImageOutcome,
    index: int,
    total: int,
    plant: PlantRecord,
) -> None:
    # A failing observer must not stop the remaining plants
    if on_item_complete is not None:
        try:
            on_item_complete(outcome)
        except Exception:
            logger.exception(f"on_item_complete observer failed for plant {plant.id}")
    if on_progress is not None:
        try:
            on_progress(index, total, plant)
        except Exception:
            logger.exception(f"on_progress observer failed for plant {plant.id}")


async def enrich_plant_images(
    plants: Sequence[PlantRecord],
    model_ids: Sequence[str],
    generate_image: ImageGenerator,
    *,
    backoff: Optional[BackoffStrategy] = None,
    on_progress: Optional[ProgressCallback] = None,
    on_item_complete: Optional[ItemCallback] = None,
    mime_type: str = DEFAULT_MIME_TYPE,
) -> List[ImageOutcome]:
    """
    Generate one illustration per plant, updating each plant's image in place.

    Args:
        plants: Parsed plant records (only their `image` field is modified)
        model_ids: Image model ids in preference order
        generate_image: Async callable (model_id, prompt) -> payload
        backoff: Wait strategy between plants (default: fixed 1.5s)
        on_progress: Called as (completed, total, plant) after each plant
        on_item_complete: Called with each plant's ImageOutcome
        mime_type: MIME type used for the data URI

    Returns:
        One ImageOutcome per plant, in input order. Never raises for
        per-plant failures.
    """
    if backoff is None:
        backoff = FixedDelayBackoff(DEFAULT_IMAGE_DELAY_SECONDS)

    total = len(plants)
    outcomes: List[ImageOutcome] = []
    logger.info(f"Generating images for {total} plant(s) with {len(model_ids)} model(s)")

    for index, plant in enumerate(plants, start=1):
        plant.image = PlantImage(status="pending")

        outcome = await _generate_for_plant(plant, model_ids, generate_image, mime_type)

        if outcome.succeeded:
            plant.image = PlantImage(status="succeeded", data_uri=outcome.data_uri, model_id=outcome.model_id)
        else:
            plant.image = PlantImage(status="failed", error=outcome.error)
        outcomes.append(outcome)

        _notify_observers(on_item_complete, on_progress, outcome, index, total, plant)

        if index < total:
            await backoff.wait(index)

    succeeded = sum(1 for outcome in outcomes if outcome.succeeded)
    logger.info(f"Image generation finished: {succeeded}/{total} succeeded")
    return outcomes
