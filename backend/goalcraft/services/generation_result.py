"""Outcome type shared by spec producers and the fallback combinator."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Union

from goalcraft.api.schemas.goal_spec import GoalSpec

NO_CREDENTIAL = "no_credential"
EMPTY_INPUT = "empty_input"
RATE_LIMITED = "rate_limited"


@dataclass(frozen=True)
class GenerationSuccess:
    spec: GoalSpec

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class GenerationFailure:
    """A producer gave up; ``reason`` is short and safe to log."""

    reason: str

    @property
    def ok(self) -> bool:
        return False

    @property
    def no_result(self) -> bool:
        # Skipped before any model call, as opposed to a call that went wrong.
        return self.reason in {NO_CREDENTIAL, EMPTY_INPUT, RATE_LIMITED}


GenerationResult = Union[GenerationSuccess, GenerationFailure]


def first_success(
    attempts: Iterable[Callable[[], GenerationResult]],
    fallback: Callable[[], GoalSpec],
) -> tuple[GoalSpec, list[GenerationFailure]]:
    """Run ``attempts`` in order and return the first spec produced.

    Every failure along the way is returned so the caller can log it. When all
    attempts fail the ``fallback`` builder supplies the spec; it must not raise.
    """
    failures: list[GenerationFailure] = []
    for attempt in attempts:
        result = attempt()
        if isinstance(result, GenerationSuccess):
            return result.spec, failures
        failures.append(result)
    return fallback(), failures
