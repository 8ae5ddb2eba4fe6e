import pytest
from pydantic import ValidationError

from answer_router.schemas.request import DEFAULT_SYSTEM_PROMPT, ChatRequest, RequestContext
from answer_router.schemas.response import Attempt, RouterResult, format_attempts


def _result(attempts, provider="Cohere"):
    return RouterResult(
        content="ok", provider_name=provider, model="m", latency_ms=5, attempts=attempts
    )


class TestChatRequest:

    @pytest.mark.parametrize("prompt", ["", "   "])
    def test_prompt_required(self, prompt):
        with pytest.raises(ValidationError):
            ChatRequest(prompt=prompt)

    def test_frozen(self):
        request = ChatRequest(prompt="hi")
        with pytest.raises(ValidationError):
            request.prompt = "changed"

    def test_defaults(self):
        request = ChatRequest(prompt="hi")
        assert request.effective_system_prompt == DEFAULT_SYSTEM_PROMPT
        assert not request.wants_vision

    def test_wants_vision(self):
        ctx = RequestContext(image_url="https://x/y.jpg", use_vision=True)
        assert ChatRequest(prompt="hi", context=ctx).wants_vision
        assert not ChatRequest(prompt="hi", context=RequestContext(use_vision=True)).wants_vision

    @pytest.mark.parametrize("field,value", [("max_tokens", 0), ("temperature", -0.1), ("temperature", 2.5)])
    def test_sampling_bounds(self, field, value):
        with pytest.raises(ValidationError):
            ChatRequest(prompt="hi", **{field: value})


class TestAttempt:

    def test_failed_attempt_needs_error(self):
        with pytest.raises(ValidationError):
            Attempt(provider_name="Groq", success=False)

    def test_success_has_no_error(self):
        with pytest.raises(ValidationError):
            Attempt(provider_name="Groq", success=True, error="x")


class TestRouterResult:

    def test_total_attempts_follows_attempts(self):
        result = _result([
            Attempt(provider_name="Groq", success=False, error="Timeout"),
            Attempt(provider_name="Cohere", success=True, latency_ms=5),
        ])
        assert result.total_attempts == 2
        assert result.summary() == "Groq: Timeout, Cohere: OK"

    def test_last_attempt_must_be_winner(self):
        with pytest.raises(ValidationError):
            _result([Attempt(provider_name="Groq", success=True)])
        with pytest.raises(ValidationError):
            _result([])

    def test_earlier_attempts_must_fail(self):
        with pytest.raises(ValidationError):
            _result([
                Attempt(provider_name="Groq", success=True),
                Attempt(provider_name="Cohere", success=True),
            ])


def test_format_attempts_empty():
    assert format_attempts([]) == ""
