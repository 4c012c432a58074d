"""
Tests for generation failure classification.
"""

import pytest

from plantpal.services.error_classifier import (
    ErrorClass,
    classify_generation_error,
    classify_message,
)
from plantpal.services.errors import (
    EmptyResponseError,
    ModelUnavailableError,
    RateLimitedError,
)


class FakeAPIError(Exception):
    """Mimics google.genai.errors.APIError's structured fields."""

    def __init__(self, code, status, message="provider error"):
        super().__init__(message)
        self.code = code
        self.status = status


class TestStructuredSignals:
    """Typed errors and provider codes win over the message text."""

    def test_typed_errors(self):
        assert classify_generation_error(RateLimitedError("x")) is ErrorClass.RATE_LIMITED
        assert classify_generation_error(ModelUnavailableError("x")) is ErrorClass.MODEL_UNAVAILABLE
        assert classify_generation_error(EmptyResponseError("x")) is ErrorClass.MODEL_UNAVAILABLE

    def test_http_code(self):
        assert classify_generation_error(FakeAPIError(429, None)) is ErrorClass.RATE_LIMITED
        assert classify_generation_error(FakeAPIError(404, None)) is ErrorClass.MODEL_UNAVAILABLE

    def test_status_string(self):
        assert classify_generation_error(FakeAPIError(None, "RESOURCE_EXHAUSTED")) is ErrorClass.RATE_LIMITED
        assert classify_generation_error(FakeAPIError(None, "not_found")) is ErrorClass.MODEL_UNAVAILABLE

    def test_code_beats_misleading_message(self):
        exc = FakeAPIError(429, None, message="model not found")

        assert classify_generation_error(exc) is ErrorClass.RATE_LIMITED

    def test_unknown_code_falls_back_to_message(self):
        exc = FakeAPIError(500, "INTERNAL", message="You exceeded your current quota")

        assert classify_generation_error(exc) is ErrorClass.RATE_LIMITED

    def test_permission_denied_is_fatal(self):
        exc = FakeAPIError(403, "PERMISSION_DENIED", message="API key not valid")

        assert classify_generation_error(exc) is ErrorClass.FATAL


class TestKeywordHeuristics:
    """Message-only classification."""

    @pytest.mark.parametrize("message", [
        "models/gemini-9 is not found for API version v1beta",
        "Model is not supported for generateContent",
        "The model does not exist",
        "Invalid model name",
    ])
    def test_unavailable_messages(self, message):
        assert classify_message(message) is ErrorClass.MODEL_UNAVAILABLE

    @pytest.mark.parametrize("message", [
        "429 Too Many Requests",
        "Quota exceeded for metric generate_content_requests",
        "Rate limit reached",
        "RESOURCE_EXHAUSTED",
    ])
    def test_rate_limit_messages(self, message):
        assert classify_message(message) is ErrorClass.RATE_LIMITED

    @pytest.mark.parametrize("message", ["", "Connection reset by peer", "API key not valid"])
    def test_everything_else_is_fatal(self, message):
        assert classify_message(message) is ErrorClass.FATAL

    def test_recoverable_flag(self):
        assert ErrorClass.MODEL_UNAVAILABLE.recoverable
        assert ErrorClass.RATE_LIMITED.recoverable
        assert not ErrorClass.FATAL.recoverable
