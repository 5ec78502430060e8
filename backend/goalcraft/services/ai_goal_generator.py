"""Model-backed goal spec generation with strict repair of the returned JSON."""
from __future__ import annotations

import json
import logging
import math
import re
from functools import lru_cache
from typing import Any, Dict, List, Optional, Protocol

import openai
from pydantic import ValidationError

from goalcraft.api.schemas.goal_spec import (
    GOAL_CATEGORIES,
    TRACKER_TYPES,
    Gamification,
    GoalSpec,
    Milestone,
    Tracker,
)
from goalcraft.core.config import settings
from goalcraft.observability.metrics import log_metric, timed
from goalcraft.observability.tracing import annotate, trace
from goalcraft.services.generation_result import (
    EMPTY_INPUT,
    NO_CREDENTIAL,
    RATE_LIMITED,
    GenerationFailure,
    GenerationResult,
    GenerationSuccess,
)
from goalcraft.services.goal_templates import clamp_milestone_weeks, shorten_title
from goalcraft.services.security import (
    RateLimiter,
    filter_ai_response,
    sanitize_user_input,
    validate_api_key,
)
from goalcraft.services.timeframe import extract_timeframe

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are an expert goal-setting coach. You answer with a single JSON object and nothing else."

PROMPT_TEMPLATE = """Parse this dream/goal into a structured JSON format for a goal-tracking app:

"{goal_text}"

Return ONLY a valid JSON object with this EXACT structure (no markdown, no explanations):

{{
  "title": "Short, motivating title (max 50 chars)",
  "duration": "Extracted or reasonable timeframe (e.g., '3 months', '6 weeks')",
  "category": "One of: fitness, learning, writing, business, health, creative, career, financial, social, personal",
  "target": "Specific measurable target description",
  "milestones": [
    {{"week": 2, "title": "Milestone name", "description": "What to accomplish in this phase", "target": "Specific measurable target for this milestone"}}
  ],
  "trackers": [
    {{"name": "Tracker name", "type": "counter|number|percentage", "unit": "Optional unit (miles, hours, words, $, etc.)", "target": 100}}
  ],
  "motivation": ["5 personalized motivational messages specific to this goal with relevant emojis"]
}}

Guidelines:
- Extract realistic timeline from text, default to 3 months if unclear
- Create 3-5 progressive milestones spread across timeline
- Include 2-4 relevant tracking metrics that make sense for the goal
- Make motivation messages specific and encouraging for this exact goal
- Be creative but realistic with targets
- If it's a vague goal, make reasonable assumptions and structure it
- Handle ANY type of goal, even unusual ones
"""

DEFAULT_TITLE = "My Goal"
DEFAULT_DURATION = "3 months"
DEFAULT_CATEGORY = "personal"
DEFAULT_TARGET = "Complete goal"

DEFAULT_MILESTONES: List[Dict[str, Any]] = [
    {"week": 2, "title": "Getting Started", "description": "Build initial momentum", "target": "25% progress"},
    {"week": 6, "title": "Halfway Point", "description": "Maintain consistency", "target": "50% progress"},
    {"week": 10, "title": "Final Push", "description": "Complete the goal", "target": "100% progress"},
]

DEFAULT_TRACKERS: List[Dict[str, Any]] = [
    {"name": "Progress", "type": "percentage", "target": 100},
    {"name": "Days Active", "type": "counter", "target": 60},
]

DEFAULT_MOTIVATION = [
    "You're making great progress! 🌟",
    "Every step forward counts",
    "Consistency is the key to success",
    "Believe in yourself - you've got this!",
    "Your future self will thank you",
]

CATEGORY_XP: Dict[str, int] = {
    "fitness": 10,
    "learning": 5,
    "writing": 1,
    "business": 50,
    "health": 25,
    "creative": 15,
    "career": 30,
    "financial": 40,
    "social": 20,
    "personal": 15,
}
DEFAULT_XP = 20

CATEGORY_BADGES: Dict[str, List[str]] = {
    "fitness": ["First Workout", "Consistency Champion", "Fitness Master"],
    "learning": ["Knowledge Seeker", "Study Streak", "Learning Legend"],
    "writing": ["Word Warrior", "Chapter Champion", "Published Author"],
    "business": ["Entrepreneur", "First Sale", "Business Builder"],
    "health": ["Healthy Start", "Wellness Warrior", "Lifestyle Legend"],
    "creative": ["Creative Spark", "Artistic Flow", "Masterpiece Maker"],
    "career": ["Career Climber", "Skill Builder", "Professional Pro"],
    "financial": ["Money Manager", "Savings Star", "Financial Freedom"],
    "social": ["Social Butterfly", "Connection Creator", "Relationship Builder"],
    "personal": ["Self Improver", "Growth Guru", "Personal Champion"],
}
DEFAULT_BADGES = ["Goal Getter", "Progress Pro", "Achievement Unlocked"]

# Checked in order; a later hit overwrites an earlier one.
TITLE_BADGE_OVERRIDES = (
    ("learn", "Learning Starter"),
    ("build", "Builder Beginner"),
    ("create", "Creative Starter"),
    ("master", "Mastery Seeker"),
)

_CODE_FENCE = re.compile(r"```(?:json)?\n?")
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


class GoalTextModel(Protocol):
    """Anything that turns a prompt into raw model text."""

    def invoke(self, prompt: str) -> str:
        ...


class OpenAIGoalTextModel:
    """Chat-completions backed model."""

    def __init__(self, api_key: str, model: Optional[str] = None, timeout: Optional[float] = None) -> None:
        self.model = model or settings.openai_model
        self._client = openai.OpenAI(api_key=api_key, timeout=timeout or settings.ai_timeout_seconds)

    def invoke(self, prompt: str) -> str:
        response = self._client.chat.completions.create(
            model=self.model,
            temperature=0.7,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
        )
        return response.choices[0].message.content or ""


@lru_cache
def get_ai_rate_limiter() -> RateLimiter:
    return RateLimiter(
        max_requests=settings.ai_rate_limit_requests,
        window_seconds=settings.ai_rate_limit_window_seconds,
    )


def build_prompt(goal_text: str) -> str:
    return PROMPT_TEMPLATE.format(goal_text=goal_text)


def extract_json_object(response: str) -> Optional[str]:
    """Greedy slice from the first ``{`` to the last ``}`` after dropping code fences."""
    match = _JSON_OBJECT.search(_CODE_FENCE.sub("", response))
    return match.group(0) if match else None


def xp_for_category(category: str) -> int:
    return CATEGORY_XP.get(category, DEFAULT_XP)


def badges_for_category(category: str, title: str | None) -> List[str]:
    badges = list(CATEGORY_BADGES.get(category, DEFAULT_BADGES))
    if title:
        words = title.lower().split(" ")
        for word, badge in TITLE_BADGE_OVERRIDES:
            if word in words:
                badges[0] = badge
    return badges


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _positive_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) and number > 0 else None


def _repair_milestones(raw: Any) -> List[Milestone]:
    items = raw if isinstance(raw, list) else DEFAULT_MILESTONES
    milestones: List[Milestone] = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            continue
        week = _positive_number(item.get("week"))
        milestones.append(
            Milestone(
                week=int(week) if week and int(week) > 0 else (index + 1) * 2,
                title=_text(item.get("title"), f"Milestone {index + 1}"),
                description=_text(item.get("description"), ""),
                target=_text(item.get("target"), ""),
            )
        )
    if not milestones and raw is not DEFAULT_MILESTONES:
        return _repair_milestones(DEFAULT_MILESTONES)
    return clamp_milestone_weeks(milestones)


def _repair_trackers(raw: Any) -> List[Tracker]:
    items = raw if isinstance(raw, list) else DEFAULT_TRACKERS
    trackers: List[Tracker] = []
    seen: set[str] = set()
    for item in items:
        if not isinstance(item, dict):
            continue
        name = _text(item.get("name"), "")
        if not name or name in seen:
            continue
        tracker_type = item.get("type") if item.get("type") in TRACKER_TYPES else "counter"
        unit = item.get("unit") if isinstance(item.get("unit"), str) and item.get("unit").strip() else None
        target = _positive_number(item.get("target"))
        if target is None:
            target = 100 if tracker_type == "percentage" else 50
        trackers.append(Tracker(name=name, type=tracker_type, unit=unit, target=target))
        seen.add(name)
    if not trackers and raw is not DEFAULT_TRACKERS:
        return _repair_trackers(DEFAULT_TRACKERS)
    return trackers


def repair_spec(payload: Dict[str, Any]) -> GoalSpec:
    """Fill defaults and clamp values so any JSON object becomes a valid spec."""
    title = shorten_title(_text(payload.get("title"), DEFAULT_TITLE))
    duration = _text(payload.get("duration"), DEFAULT_DURATION)
    category = _text(payload.get("category"), DEFAULT_CATEGORY).lower()
    if category not in GOAL_CATEGORIES:
        category = DEFAULT_CATEGORY
    timeframe = extract_timeframe(duration)

    motivation = payload.get("motivation")
    if isinstance(motivation, list):
        motivation = [line.strip() for line in motivation if isinstance(line, str) and line.strip()]
    if not motivation:
        motivation = list(DEFAULT_MOTIVATION)

    return GoalSpec(
        title=title,
        duration_display=duration,
        duration_days=timeframe.days,
        category=category,
        target=_text(payload.get("target"), DEFAULT_TARGET),
        milestones=_repair_milestones(payload.get("milestones")),
        trackers=_repair_trackers(payload.get("trackers")),
        motivation=motivation,
        gamification=Gamification(
            streaks_enabled=True,
            xp_rate=xp_for_category(category),
            badges=badges_for_category(category, title),
        ),
        source="ai",
    )


def parse_model_response(response: str) -> GenerationResult:
    """Filter, unwrap and repair raw model output."""
    filtered = filter_ai_response(response)
    json_text = extract_json_object(filtered)
    if json_text is None:
        return GenerationFailure(reason="no JSON found")
    try:
        payload = json.loads(json_text)
    except json.JSONDecodeError as exc:
        return GenerationFailure(reason=f"invalid JSON: {exc.msg}")
    if not isinstance(payload, dict):
        return GenerationFailure(reason="JSON is not an object")
    try:
        return GenerationSuccess(spec=repair_spec(payload))
    except ValidationError as exc:
        return GenerationFailure(reason=f"spec repair failed: {exc.error_count()} errors")


class AIGoalGenerator:
    """Produce a goal spec through a text model, or explain why not."""

    def __init__(
        self,
        model: Optional[GoalTextModel] = None,
        api_key: Optional[str] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ) -> None:
        self._model = model
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.rate_limiter = rate_limiter or get_ai_rate_limiter()

    def _resolve_model(self) -> GoalTextModel:
        if self._model is None:
            self._model = OpenAIGoalTextModel(api_key=self.api_key or "")
        return self._model

    def generate(self, text: str) -> GenerationResult:
        key_check = validate_api_key(self.api_key)
        if not key_check.valid:
            logger.debug("AI generation skipped: %s", key_check.reason)
            return GenerationFailure(reason=NO_CREDENTIAL)

        sanitized = sanitize_user_input(text)
        if not sanitized:
            return GenerationFailure(reason=EMPTY_INPUT)

        if not self.rate_limiter.try_acquire():
            logger.warning(
                "AI rate limit reached; retry in %.0fs",
                self.rate_limiter.seconds_until_reset(),
            )
            log_metric("goal.ai_generate.rate_limited", 1)
            return GenerationFailure(reason=RATE_LIMITED)

        with timed("goal.ai_generate"), trace("goal.ai_generate", metadata={"llm_input_text": sanitized[:500]}) as span:
            try:
                raw = self._resolve_model().invoke(build_prompt(sanitized))
            except Exception as exc:
                logger.warning("AI model call failed: %s", exc.__class__.__name__)
                result: GenerationResult = GenerationFailure(reason=f"model error: {exc.__class__.__name__}")
            else:
                result = parse_model_response(raw)
            if isinstance(result, GenerationSuccess):
                annotate(span, category=result.spec.category, title=result.spec.title)
            else:
                annotate(span, failure=result.reason)

        if isinstance(result, GenerationFailure):
            log_metric("goal.ai_generate.failed", 1, {"reason": result.reason})
        return result
