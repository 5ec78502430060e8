"""Goal specification schemas shared by the compiler, the engine and the API."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

GOAL_CATEGORIES = (
    "fitness",
    "learning",
    "writing",
    "business",
    "health",
    "creative",
    "career",
    "financial",
    "social",
    "personal",
    "general",
)

TRACKER_TYPES = ("counter", "number", "percentage")

GoalCategory = Literal[
    "fitness",
    "learning",
    "writing",
    "business",
    "health",
    "creative",
    "career",
    "financial",
    "social",
    "personal",
    "general",
]
TrackerType = Literal["counter", "number", "percentage"]


class SpecModel(BaseModel):
    """Immutable model serialised with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Tracker(SpecModel):
    name: str = Field(..., min_length=1)
    type: TrackerType
    unit: Optional[str] = None
    target: float = Field(..., gt=0)


class Milestone(SpecModel):
    week: int = Field(..., ge=0)
    title: str
    description: str
    target: str


class Gamification(SpecModel):
    streaks_enabled: bool = True
    xp_rate: float = Field(default=20, ge=0)
    badges: List[str] = Field(default_factory=list)


class GoalSpec(SpecModel):
    """Machine-actionable contract for one goal."""

    title: str
    duration_display: str
    duration_days: int = Field(..., ge=1)
    category: GoalCategory
    target: str
    milestones: List[Milestone]
    trackers: List[Tracker]
    motivation: List[str] = Field(..., min_length=1)
    gamification: Gamification
    source: Literal["rules", "ai"] = "rules"

    @model_validator(mode="after")
    def _check_invariants(self) -> "GoalSpec":
        names = [tracker.name for tracker in self.trackers]
        if len(names) != len(set(names)):
            raise ValueError("tracker names must be unique")
        weeks = [milestone.week for milestone in self.milestones]
        if any(later <= earlier for earlier, later in zip(weeks, weeks[1:])):
            raise ValueError("milestone weeks must be strictly increasing")
        return self

    def tracker(self, name: str) -> Optional[Tracker]:
        for tracker in self.trackers:
            if tracker.name == name:
                return tracker
        return None


class CompileRequest(BaseModel):
    text: str = Field(..., max_length=2000)
    use_ai: Optional[bool] = None
