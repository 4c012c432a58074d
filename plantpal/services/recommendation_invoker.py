"""
Recommendation Invoker - ordered model fallback for text generation

Calls an injected text-generation capability with each model id in
priority order until one answers:

- success: return the text immediately (no further attempts)
- MODEL_UNAVAILABLE / RATE_LIMITED: wait (backoff), then try the next model
- FATAL: stop and raise TransportError without trying remaining models

When the list is exhausted:
- every failure was RATE_LIMITED -> QuotaExceededAllError
- otherwise                       -> ModelFallbackExhaustedError

Attempts are strictly sequential. Concurrent attempts against the same
API key would defeat the rate-limit avoidance.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Sequence

from plantpal.services.backoff import BackoffStrategy, FixedDelayBackoff
from plantpal.services.error_classifier import (
    ErrorClass,
    ErrorClassifier,
    classify_generation_error,
)
from plantpal.services.errors import (
    ModelFallbackExhaustedError,
    QuotaExceededAllError,
    TransportError,
)

logger = logging.getLogger(__name__)

TextGenerator = Callable[[str, str], Awaitable[str]]

DEFAULT_FALLBACK_DELAY_SECONDS = 1.0


@dataclass
class ModelAttemptOutcome:
    """One failed attempt inside the fallback loop (diagnostics only)."""
    model_id: str
    error_class: ErrorClass
    message: str


@dataclass
class InvocationResult:
    """Text returned by the first model that answered."""
    model_id: str
    text: str
    failed_attempts: List[ModelAttemptOutcome]


async def invoke_with_fallback_detailed(
    prompt: str,
    model_ids: Sequence[str],
    generate: TextGenerator,
    *,
    classifier: ErrorClassifier = classify_generation_error,
    backoff: Optional[BackoffStrategy] = None,
) -> InvocationResult:
    """
    Run the fallback loop and report which model answered.

    Args:
        prompt: Full prompt text
        model_ids: Model ids in preference order (must not be empty)
        generate: Async callable (model_id, prompt) -> text
        classifier: Maps a raised exception to an ErrorClass
        backoff: Wait strategy between attempts (default: fixed 1s)

    Returns:
        InvocationResult with the answering model and its text

    Raises:
        ValueError: If model_ids is empty
        TransportError: On the first FATAL failure
        QuotaExceededAllError: If every model was rate limited
        ModelFallbackExhaustedError: If every model failed recoverably
    """
    if not model_ids:
        raise ValueError("model_ids must contain at least one model id")

    if backoff is None:
        backoff = FixedDelayBackoff(DEFAULT_FALLBACK_DELAY_SECONDS)

    failures: List[ModelAttemptOutcome] = []
    total = len(model_ids)

    for index, model_id in enumerate(model_ids, start=1):
        logger.info(f"Requesting recommendations from {model_id} ({index}/{total}), prompt length={len(prompt)}")
        try:
            text = await generate(model_id, prompt)
        except Exception as e:
            error_class = classifier(e)
            outcome = ModelAttemptOutcome(model_id=model_id, error_class=error_class, message=str(e))

            if not error_class.recoverable:
                logger.error(f"Fatal error from {model_id}, aborting fallback: {e}")
                raise TransportError(f"Gemini API error ({model_id}): {e}", model_id=model_id) from e

            failures.append(outcome)
            logger.warning(f"Model {model_id} failed ({error_class.value}): {e}")

            if index < total:
                await backoff.wait(len(failures))
            continue

        logger.info(f"Received response from {model_id} after {len(failures)} failed attempt(s)")
        return InvocationResult(model_id=model_id, text=text, failed_attempts=failures)

    if all(f.error_class is ErrorClass.RATE_LIMITED for f in failures):
        logger.error(f"All {total} model(s) are rate limited")
        raise QuotaExceededAllError(failures)

    logger.error(f"All {total} model(s) failed")
    raise ModelFallbackExhaustedError(failures)


async def invoke_with_fallback(
    prompt: str,
    model_ids: Sequence[str],
    generate: TextGenerator,
    *,
    classifier: ErrorClassifier = classify_generation_error,
    backoff: Optional[BackoffStrategy] = None,
) -> str:
    """Same as invoke_with_fallback_detailed, returning only the text."""
    result = await invoke_with_fallback_detailed(
        prompt,
        model_ids,
        generate,
        classifier=classifier,
        backoff=backoff,
    )
    return result.text
