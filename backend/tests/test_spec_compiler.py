from __future__ import annotations

import pytest

from goalcraft.services.ai_goal_generator import AIGoalGenerator
from goalcraft.services.generation_result import GenerationFailure
from goalcraft.services.security import RateLimiter
from goalcraft.services.spec_compiler import compile_goal_spec

VALID_KEY = "sk-test-0123456789abcdefghij"


class _BrokenModel:
    def invoke(self, prompt: str) -> str:
        raise ConnectionError("network down")


class _GarbageModel:
    def invoke(self, prompt: str) -> str:
        return "I cannot help with that."


class _ExplodingGenerator(AIGoalGenerator):
    def generate(self, text: str):
        raise RuntimeError("boom")


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        "🙂🙂🙂",
        "x" * 5000,
        "0 days",
        "<script>alert(1)</script>",
        "run 99999 years",
        "run 1" + "0" * 400 + " days",
        "run " + "9" * 5000 + " days",
    ],
)
@pytest.mark.parametrize("use_ai", [True, False])
def test_compile_is_total(text: str, use_ai: bool) -> None:
    spec = compile_goal_spec(text, use_ai=use_ai)

    assert spec.title
    assert spec.duration_days >= 1
    assert spec.motivation


@pytest.mark.parametrize(
    "generator",
    [
        AIGoalGenerator(model=_BrokenModel(), api_key=VALID_KEY, rate_limiter=RateLimiter()),
        AIGoalGenerator(model=_GarbageModel(), api_key=VALID_KEY, rate_limiter=RateLimiter()),
        AIGoalGenerator(model=_BrokenModel(), api_key=None, rate_limiter=RateLimiter()),
        _ExplodingGenerator(model=_BrokenModel(), api_key=VALID_KEY, rate_limiter=RateLimiter()),
    ],
)
def test_ai_failure_falls_back_to_rule_spec(generator: AIGoalGenerator) -> None:
    text = "I want to run a half marathon in 3 months"

    assert compile_goal_spec(text, use_ai=True, generator=generator) == compile_goal_spec(text, use_ai=False)


def test_ai_success_is_used() -> None:
    class _Model:
        def invoke(self, prompt: str) -> str:
            return '{"title": "Fly a Kite", "category": "personal", "duration": "2 weeks"}'

    generator = AIGoalGenerator(model=_Model(), api_key=VALID_KEY, rate_limiter=RateLimiter())

    spec = compile_goal_spec("fly a kite", use_ai=True, generator=generator)

    assert spec.source == "ai"
    assert spec.title == "Fly a Kite"
    assert spec.duration_days == 14


def test_fallback_is_logged(caplog) -> None:
    generator = AIGoalGenerator(model=_BrokenModel(), api_key=VALID_KEY, rate_limiter=RateLimiter())

    with caplog.at_level("WARNING"):
        compile_goal_spec("learn french", use_ai=True, generator=generator)

    assert any("model error: ConnectionError" in record.getMessage() for record in caplog.records)


def test_no_result_reasons_are_flagged() -> None:
    assert GenerationFailure(reason="no_credential").no_result
    assert not GenerationFailure(reason="no JSON found").no_result
