"""Turn free goal text into a GoalSpec, preferring the model and falling back to rules."""
from __future__ import annotations

import logging
from typing import Optional

from goalcraft.api.schemas.goal_spec import GoalSpec
from goalcraft.core.config import settings
from goalcraft.observability.metrics import log_metric, timed
from goalcraft.observability.tracing import annotate, trace
from goalcraft.services.ai_goal_generator import AIGoalGenerator
from goalcraft.services.generation_result import GenerationFailure, GenerationResult, first_success
from goalcraft.services.goal_classifier import classify_goal
from goalcraft.services.goal_templates import build_rule_based_spec
from goalcraft.services.timeframe import extract_timeframe

logger = logging.getLogger(__name__)


def compile_rule_based(text: str) -> GoalSpec:
    """Deterministic path: classify, extract the timeframe, render the template."""
    classification = classify_goal(text)
    timeframe = extract_timeframe(text)
    return build_rule_based_spec(text or "", classification, timeframe)


def _guarded(generator: AIGoalGenerator, text: str) -> GenerationResult:
    try:
        return generator.generate(text)
    except Exception as exc:
        logger.exception("AI generator raised unexpectedly")
        return GenerationFailure(reason=f"generator error: {exc.__class__.__name__}")


def compile_goal_spec(
    text: Optional[str],
    use_ai: Optional[bool] = None,
    generator: Optional[AIGoalGenerator] = None,
) -> GoalSpec:
    """Compile ``text`` into a spec. Never raises.

    With ``use_ai`` the model path is attempted first; any failure (no key,
    rate limit, transport, unusable JSON) yields exactly the rule-based spec.
    """
    text = text or ""
    if use_ai is None:
        use_ai = settings.ai_enabled_by_default

    with timed("goal.compile"), trace("goal.compile", metadata={"use_ai": use_ai, "llm_input_text": text[:500]}) as span:
        attempts = []
        if use_ai:
            ai = generator or AIGoalGenerator()
            attempts.append(lambda: _guarded(ai, text))

        spec, failures = first_success(attempts, lambda: compile_rule_based(text))

        for failure in failures:
            if failure.no_result:
                logger.info("AI path skipped (%s); using rule-based spec", failure.reason)
            else:
                logger.warning("AI path failed (%s); using rule-based spec", failure.reason)
            log_metric("goal.compile.fallback", 1, {"reason": failure.reason})

        annotate(span, source=spec.source, category=spec.category, duration_days=spec.duration_days)
    log_metric("goal.compile.completed", 1, {"source": spec.source, "category": spec.category})
    return spec
