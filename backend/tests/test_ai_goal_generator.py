from __future__ import annotations

import json

import pytest

from goalcraft.services.ai_goal_generator import (
    AIGoalGenerator,
    badges_for_category,
    extract_json_object,
    parse_model_response,
    repair_spec,
)
from goalcraft.services.generation_result import GenerationFailure, GenerationSuccess
from goalcraft.services.security import RateLimiter

VALID_KEY = "sk-test-0123456789abcdefghij"


class _FakeModel:
    def __init__(self, response: str | None = None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.prompts: list[str] = []

    def invoke(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.response or ""


def _payload(**overrides) -> str:
    payload = {
        "title": "Learn Pottery",
        "duration": "8 weeks",
        "category": "creative",
        "target": "Throw a bowl",
        "milestones": [
            {"week": 2, "title": "Centering", "description": "Center clay", "target": "Centered clay"},
            {"week": 5, "title": "Pulling", "description": "Pull walls", "target": "6 inch walls"},
        ],
        "trackers": [
            {"name": "Studio Hours", "type": "number", "unit": "hours", "target": 40},
            {"name": "Bowls", "type": "counter", "target": 10},
        ],
        "motivation": ["Keep spinning! 🏺"],
    }
    payload.update(overrides)
    return json.dumps(payload)


def _generator(model: _FakeModel, limiter: RateLimiter | None = None) -> AIGoalGenerator:
    return AIGoalGenerator(model=model, api_key=VALID_KEY, rate_limiter=limiter or RateLimiter(max_requests=100))


def test_successful_generation_produces_ai_spec() -> None:
    model = _FakeModel(response="```json\n" + _payload() + "\n```")

    result = _generator(model).generate("I want to learn pottery in 8 weeks")

    assert isinstance(result, GenerationSuccess)
    spec = result.spec
    assert spec.source == "ai"
    assert spec.duration_days == 56
    assert spec.gamification.xp_rate == 15
    assert spec.gamification.badges[0] == "Learning Starter"
    assert "learn pottery in 8 weeks" in model.prompts[0]


def test_missing_key_skips_model() -> None:
    model = _FakeModel(response=_payload())
    generator = AIGoalGenerator(model=model, api_key="your-api-key-here", rate_limiter=RateLimiter())

    result = generator.generate("learn pottery")

    assert isinstance(result, GenerationFailure)
    assert result.no_result
    assert model.prompts == []


def test_blank_sanitized_input_is_no_result() -> None:
    result = _generator(_FakeModel(response=_payload())).generate("<>''")

    assert isinstance(result, GenerationFailure)
    assert result.reason == "empty_input"


def test_rate_limited_after_quota() -> None:
    limiter = RateLimiter(max_requests=1, window_seconds=60)
    generator = _generator(_FakeModel(response=_payload()), limiter)

    assert isinstance(generator.generate("pottery"), GenerationSuccess)
    second = generator.generate("pottery")

    assert isinstance(second, GenerationFailure)
    assert second.reason == "rate_limited"


def test_model_exception_becomes_failure() -> None:
    result = _generator(_FakeModel(error=TimeoutError("slow"))).generate("pottery")

    assert isinstance(result, GenerationFailure)
    assert not result.no_result
    assert "TimeoutError" in result.reason


@pytest.mark.parametrize("response", ["no braces here", "{not json}", "[1, 2]"])
def test_unusable_responses_fail(response: str) -> None:
    assert isinstance(parse_model_response(response), GenerationFailure)


def test_extract_json_object_is_greedy() -> None:
    text = 'Sure! {"a": {"b": 1}} hope that helps'

    assert extract_json_object(text) == '{"a": {"b": 1}}'


def test_repair_fills_defaults() -> None:
    spec = repair_spec({})

    assert spec.title == "My Goal"
    assert spec.category == "personal"
    assert (spec.duration_display, spec.duration_days) == ("3 months", 90)
    assert [m.week for m in spec.milestones] == [2, 6, 10]
    assert [(t.name, t.target) for t in spec.trackers] == [("Progress", 100), ("Days Active", 60)]
    assert len(spec.motivation) == 5


def test_repair_fixes_trackers_and_weeks() -> None:
    spec = repair_spec(
        {
            "category": "astrology",
            "milestones": [{"title": "a"}, {"week": -3, "title": "b"}, {"week": 1, "title": "c"}],
            "trackers": [
                {"name": "Pct", "type": "percentage", "target": 0},
                {"name": "Other", "type": "gauge"},
                {"name": "Pct", "type": "counter", "target": 5},
                "junk",
            ],
        }
    )

    assert spec.category == "personal"
    assert [m.week for m in spec.milestones] == [2, 4, 5]
    assert [(t.name, t.type, t.target) for t in spec.trackers] == [
        ("Pct", "percentage", 100),
        ("Other", "counter", 50),
    ]


def test_title_badge_override_last_match_wins() -> None:
    assert badges_for_category("fitness", "Learn to build muscle")[0] == "Builder Beginner"
    assert badges_for_category("unknown", None) == ["Goal Getter", "Progress Pro", "Achievement Unlocked"]


def test_default_weeks_follow_raw_positions() -> None:
    spec = repair_spec({"milestones": ["junk", None, {"title": "Kickoff"}, {"title": "Review"}]})

    assert [(m.week, m.title) for m in spec.milestones] == [(6, "Kickoff"), (8, "Review")]


def test_long_titles_are_shortened() -> None:
    spec = repair_spec({"title": "Become " + "very " * 100 + "good"})

    assert len(spec.title) == 120
    assert spec.title.endswith("...")
