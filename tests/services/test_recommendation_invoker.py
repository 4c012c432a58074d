"""
Tests for the ordered model fallback loop.

The text generator is a fake async callable that records calls and
answers from a per-model script, so no Gemini client is involved.
"""

import pytest

from plantpal.services.backoff import FixedDelayBackoff, NoDelayBackoff
from plantpal.services.error_classifier import ErrorClass
from plantpal.services.errors import (
    ModelFallbackExhaustedError,
    ModelUnavailableError,
    QuotaExceededAllError,
    RateLimitedError,
    TransportError,
)
from plantpal.services.recommendation_invoker import (
    invoke_with_fallback,
    invoke_with_fallback_detailed,
)


class ScriptedGenerator:
    """Fake (model_id, prompt) -> text; an Exception in the script is raised."""

    def __init__(self, script):
        self.script = script
        self.calls = []

    async def __call__(self, model_id, prompt):
        self.calls.append(model_id)
        outcome = self.script[model_id]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


# =============================================================================
# SHORT-CIRCUIT AND PROGRESSION
# =============================================================================

class TestFallbackOrder:
    """Models are tried in order until one answers."""

    @pytest.mark.asyncio
    async def test_first_model_success_makes_one_call(self):
        generate = ScriptedGenerator({"A": "text from A", "B": "text from B", "C": "text from C"})

        text = await invoke_with_fallback("prompt", ["A", "B", "C"], generate, backoff=NoDelayBackoff())

        assert text == "text from A"
        assert generate.calls == ["A"]

    @pytest.mark.asyncio
    async def test_rate_limited_then_success_waits_between_calls(self, recorded_sleeps):
        generate = ScriptedGenerator({
            "A": Exception("429 Too Many Requests: quota exceeded"),
            "B": "text from B",
            "C": "text from C",
        })
        backoff = FixedDelayBackoff(1.0, sleep=recorded_sleeps)

        result = await invoke_with_fallback_detailed("prompt", ["A", "B", "C"], generate, backoff=backoff)

        assert result.text == "text from B"
        assert result.model_id == "B"
        assert generate.calls == ["A", "B"]
        assert recorded_sleeps.delays == [1.0]
        assert [f.error_class for f in result.failed_attempts] == [ErrorClass.RATE_LIMITED]

    @pytest.mark.asyncio
    async def test_model_unavailable_falls_back(self):
        generate = ScriptedGenerator({
            "A": Exception("models/A is not found for API version v1beta"),
            "B": "ok",
        })

        result = await invoke_with_fallback_detailed("prompt", ["A", "B"], generate, backoff=NoDelayBackoff())

        assert result.model_id == "B"
        assert result.failed_attempts[0].error_class is ErrorClass.MODEL_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_no_wait_after_last_model(self, recorded_sleeps):
        generate = ScriptedGenerator({"A": RateLimitedError("slow down"), "B": RateLimitedError("slow down")})
        backoff = FixedDelayBackoff(2.5, sleep=recorded_sleeps)

        with pytest.raises(QuotaExceededAllError):
            await invoke_with_fallback("prompt", ["A", "B"], generate, backoff=backoff)

        assert recorded_sleeps.delays == [2.5]

    @pytest.mark.asyncio
    async def test_empty_model_list_rejected(self):
        generate = ScriptedGenerator({})

        with pytest.raises(ValueError):
            await invoke_with_fallback("prompt", [], generate, backoff=NoDelayBackoff())

        assert generate.calls == []


# =============================================================================
# EXHAUSTION
# =============================================================================

class TestExhaustion:
    """What is raised once every model failed."""

    @pytest.mark.asyncio
    async def test_all_rate_limited_raises_quota_exceeded(self):
        generate = ScriptedGenerator({
            "A": Exception("RESOURCE_EXHAUSTED"),
            "B": Exception("You exceeded your current quota"),
        })

        with pytest.raises(QuotaExceededAllError) as exc_info:
            await invoke_with_fallback("prompt", ["A", "B"], generate, backoff=NoDelayBackoff())

        assert generate.calls == ["A", "B"]
        assert "A" in str(exc_info.value)
        assert "B" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_mixed_causes_raise_generic_exhaustion(self):
        generate = ScriptedGenerator({
            "A": RateLimitedError("quota"),
            "B": ModelUnavailableError("gone"),
        })

        with pytest.raises(ModelFallbackExhaustedError) as exc_info:
            await invoke_with_fallback("prompt", ["A", "B"], generate, backoff=NoDelayBackoff())

        assert not isinstance(exc_info.value, QuotaExceededAllError)
        assert len(exc_info.value.attempts) == 2


# =============================================================================
# FATAL ERRORS
# =============================================================================

class TestFatalErrors:
    """A non-recoverable failure stops the loop immediately."""

    @pytest.mark.asyncio
    async def test_fatal_error_skips_remaining_models(self, recorded_sleeps):
        cause = ConnectionError("network unreachable")
        generate = ScriptedGenerator({"A": cause, "B": "never returned"})
        backoff = FixedDelayBackoff(1.0, sleep=recorded_sleeps)

        with pytest.raises(TransportError) as exc_info:
            await invoke_with_fallback("prompt", ["A", "B"], generate, backoff=backoff)

        assert generate.calls == ["A"]
        assert recorded_sleeps.delays == []
        assert exc_info.value.model_id == "A"
        assert exc_info.value.__cause__ is cause

    @pytest.mark.asyncio
    async def test_fatal_after_recoverable(self):
        generate = ScriptedGenerator({
            "A": RateLimitedError("quota"),
            "B": Exception("API key not valid"),
            "C": "never returned",
        })

        with pytest.raises(TransportError):
            await invoke_with_fallback("prompt", ["A", "B", "C"], generate, backoff=NoDelayBackoff())

        assert generate.calls == ["A", "B"]

    @pytest.mark.asyncio
    async def test_custom_classifier_is_used(self):
        generate = ScriptedGenerator({"A": RateLimitedError("quota"), "B": "ok"})

        # Treat shared-quota rate limits as fatal
        def strict_classifier(exc):
            return ErrorClass.FATAL

        with pytest.raises(TransportError):
            await invoke_with_fallback(
                "prompt", ["A", "B"], generate, classifier=strict_classifier, backoff=NoDelayBackoff()
            )

        assert generate.calls == ["A"]
