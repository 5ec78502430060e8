"""Progress tracking schemas."""
from __future__ import annotations

from datetime import date as Date
from datetime import datetime
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ProgressModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProgressEntry(ProgressModel):
    """One day's logged value for one tracker."""

    date: Date
    tracker_name: str
    value: float
    note: Optional[str] = None
    timestamp: datetime


class Achievement(ProgressModel):
    id: str
    tracker_name: str
    threshold: int
    title: str
    description: str
    icon: str
    unlocked_at: datetime


class ProgressState(ProgressModel):
    totals: Dict[str, float] = Field(default_factory=dict)
    history: List[ProgressEntry] = Field(default_factory=list)
    streak: int = 0
    achievements: List[Achievement] = Field(default_factory=list)
    completed_milestones: List[int] = Field(default_factory=list)
    last_updated: Optional[datetime] = None


class ChartPoint(ProgressModel):
    date: Date
    label: str
    daily_activity: float
    window_cumulative: float


class RecentActivity(ProgressModel):
    date: Date
    tracker_name: str
    value: float
    note: Optional[str] = None
    timestamp: datetime
    time_ago: str


class ProgressSnapshot(ProgressModel):
    goal_title: str
    state: ProgressState
    recent_activity: List[RecentActivity]
    chart: List[ChartPoint]
    completion_percent: int
    streak: int
    streak_capped: bool


class LogEntryRequest(ProgressModel):
    tracker_name: str = Field(..., min_length=1)
    # Required, but non-numeric input is coerced to 0 rather than rejected.
    value: Union[float, str, None] = Field(...)
    note: Optional[str] = Field(default=None, max_length=500)
    date: Optional[str] = None


class LogResult(ProgressModel):
    accepted: bool
    reason: Optional[str] = None
    entry: Optional[ProgressEntry] = None
    total: Optional[float] = None
    unlocked: List[Achievement] = Field(default_factory=list)


class MilestoneResult(ProgressModel):
    accepted: bool
    newly_completed: bool = False
    reason: Optional[str] = None
