"""
Failure classification for the model fallback loops.

Decides whether a failed model call should fall back to the next model
(MODEL_UNAVAILABLE, RATE_LIMITED) or abort the loop (FATAL).

Signals are checked from most to least reliable:
1. Our own typed errors (ModelUnavailableError, RateLimitedError, EmptyResponseError)
2. Structured provider fields: `code` (HTTP status) and `status`
   (google.genai.errors.APIError exposes both)
3. Keyword heuristics on the error message

ASSUMPTION (unverified): RATE_LIMITED is treated as recoverable because each
model id is believed to draw from its own quota pool. This is an observation
about the provider's billing, not a documented contract. If quotas turn out
to be shared, pass a classifier that maps rate limits to FATAL.
"""

from enum import Enum
from typing import Callable, Optional

from plantpal.services.errors import (
    EmptyResponseError,
    ModelUnavailableError,
    RateLimitedError,
)


class ErrorClass(str, Enum):
    MODEL_UNAVAILABLE = "model_unavailable"
    RATE_LIMITED = "rate_limited"
    FATAL = "fatal"

    @property
    def recoverable(self) -> bool:
        return self is not ErrorClass.FATAL


ErrorClassifier = Callable[[BaseException], ErrorClass]

MODEL_UNAVAILABLE_KEYWORDS = (
    "not found",
    "not supported",
    "does not exist",
    "invalid model",
)

RATE_LIMIT_KEYWORDS = (
    "429",
    "quota",
    "rate limit",
    "resource_exhausted",
    "exceeded",
)

_STATUS_CLASSES = {
    "RESOURCE_EXHAUSTED": ErrorClass.RATE_LIMITED,
    "NOT_FOUND": ErrorClass.MODEL_UNAVAILABLE,
}

_HTTP_CODE_CLASSES = {
    429: ErrorClass.RATE_LIMITED,
    404: ErrorClass.MODEL_UNAVAILABLE,
}


def _classify_structured(exc: BaseException) -> Optional[ErrorClass]:
    if isinstance(exc, RateLimitedError):
        return ErrorClass.RATE_LIMITED
    if isinstance(exc, (ModelUnavailableError, EmptyResponseError)):
        return ErrorClass.MODEL_UNAVAILABLE

    code = getattr(exc, "code", None)
    if isinstance(code, int) and code in _HTTP_CODE_CLASSES:
        return _HTTP_CODE_CLASSES[code]

    status = getattr(exc, "status", None)
    if isinstance(status, str) and status.upper() in _STATUS_CLASSES:
        return _STATUS_CLASSES[status.upper()]

    return None


def classify_message(message: str) -> ErrorClass:
    """Keyword heuristics on a free-text provider message."""
    text = (message or "").lower()
    if any(keyword in text for keyword in MODEL_UNAVAILABLE_KEYWORDS):
        return ErrorClass.MODEL_UNAVAILABLE
    if any(keyword in text for keyword in RATE_LIMIT_KEYWORDS):
        return ErrorClass.RATE_LIMITED
    return ErrorClass.FATAL


def classify_generation_error(exc: BaseException) -> ErrorClass:
    """
    Classify a failed generation call.

    Args:
        exc: Exception raised by the injected generate/generate_image callable

    Returns:
        ErrorClass: MODEL_UNAVAILABLE or RATE_LIMITED (try the next model) or FATAL
    """
    structured = _classify_structured(exc)
    if structured is not None:
        return structured
    return classify_message(str(exc))
