"""Daily progress ingestion, streaks, achievements and chart aggregation for one goal."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from goalcraft.api.schemas.goal_spec import GoalSpec, Tracker
from goalcraft.api.schemas.progress import (
    Achievement,
    ChartPoint,
    LogResult,
    MilestoneResult,
    ProgressEntry,
    ProgressSnapshot,
    ProgressState,
    RecentActivity,
)
from goalcraft.core.context import bind_goal_key, get_request_id
from goalcraft.observability.metrics import log_metric
from goalcraft.services.notifications.base import NotificationService
from goalcraft.services.notifications.factory import get_notification_service
from goalcraft.services.progress_store import InMemoryProgressStore, ProgressStore, progress_key

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 50
STREAK_CAP = 30
CHART_DAYS = 14
RECENT_ACTIVITY_LIMIT = 5
ACHIEVEMENT_THRESHOLDS = (25, 50, 75, 100)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Streak:
    days: int
    capped: bool


def coerce_value(raw: Any) -> float:
    """Numeric value of ``raw``; anything unparseable counts as 0."""
    if raw is None or isinstance(raw, bool):
        return 0.0
    try:
        value = float(raw.strip() if isinstance(raw, str) else raw)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def parse_day(raw: Union[str, date, datetime, None], today: date) -> Optional[date]:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return today
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    try:
        return date.fromisoformat(str(raw).strip())
    except ValueError:
        return None


def relative_age(then: datetime, now: datetime) -> str:
    seconds = (now - then).total_seconds()
    if seconds < 60:
        return "just now"
    minutes = int(seconds // 60)
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"


def compute_streak(active_days: Iterable[date], today: date) -> Streak:
    """Consecutive active days ending today, or ending yesterday when today is idle."""
    active = set(active_days)
    count = 1 if today in active else 0
    cursor = today - timedelta(days=1)
    while cursor in active and count < STREAK_CAP:
        count += 1
        cursor -= timedelta(days=1)
    return Streak(days=count, capped=count >= STREAK_CAP)


def build_achievement(tracker_name: str, threshold: int, unlocked_at: datetime) -> Achievement:
    return Achievement(
        id=f"{tracker_name}-{threshold}",
        tracker_name=tracker_name,
        threshold=threshold,
        title=f"{threshold}% Complete!",
        description=f"Reached {threshold}% of your {tracker_name} goal",
        icon="🏆" if threshold == 100 else "⭐",
        unlocked_at=unlocked_at,
    )


def crossed_thresholds(target: float, old_total: float, new_total: float) -> List[int]:
    old_percent = old_total / target * 100
    new_percent = new_total / target * 100
    return [threshold for threshold in ACHIEVEMENT_THRESHOLDS if old_percent < threshold <= new_percent]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class ProgressEngine:
    """Mutable progress state for a single compiled goal.

    The state is loaded from ``store`` on construction and written back after
    every mutation. Persistence problems are logged and counted, never raised.
    """

    def __init__(
        self,
        spec: GoalSpec,
        store: Optional[ProgressStore] = None,
        notifier: Optional[NotificationService] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.spec = spec
        self.store = store if store is not None else InMemoryProgressStore()
        self.notifier = notifier or get_notification_service()
        self._clock = clock
        self.key = progress_key(spec.title)
        self.state = self.load()

    def _today(self) -> date:
        return self._clock().date()

    def load(self) -> ProgressState:
        try:
            blob = self.store.get(self.key)
        except Exception as exc:
            logger.warning("Unable to read progress for %s: %s", self.key, exc)
            log_metric("progress.load.failed", 1, {"goal": self.spec.title})
            return ProgressState()
        if not blob:
            return ProgressState()
        try:
            return ProgressState.model_validate(blob)
        except ValidationError as exc:
            logger.warning("Discarding unreadable progress for %s (%s errors)", self.key, exc.error_count())
            return ProgressState()

    def persist(self) -> bool:
        try:
            self.store.set(self.key, self.state.model_dump(mode="json", by_alias=True))
        except Exception as exc:
            logger.warning("Unable to persist progress for %s: %s", self.key, exc)
            log_metric("progress.persist.failed", 1, {"goal": self.spec.title})
            return False
        return True

    def _tracker_total(self, history: List[ProgressEntry], tracker_name: str) -> float:
        return sum(entry.value for entry in history if entry.tracker_name == tracker_name and entry.value > 0)

    def _evaluate_achievements(self, tracker: Tracker, old_total: float, new_total: float, now: datetime) -> List[Achievement]:
        known = {achievement.id for achievement in self.state.achievements}
        unlocked: List[Achievement] = []
        for threshold in crossed_thresholds(tracker.target, old_total, new_total):
            achievement = build_achievement(tracker.name, threshold, now)
            if achievement.id in known:
                continue
            self.state.achievements.append(achievement)
            known.add(achievement.id)
            unlocked.append(achievement)
        return unlocked

    def log_entry(
        self,
        tracker_name: str,
        raw_value: Any,
        note: Optional[str] = None,
        day: Union[str, date, datetime, None] = None,
    ) -> LogResult:
        """Record ``raw_value`` for ``tracker_name`` on ``day``, replacing that day's prior value."""
        tracker = self.spec.tracker(tracker_name)
        if tracker is None:
            return LogResult(accepted=False, reason=f"Unknown tracker: {tracker_name}")
        now = self._clock()
        entry_day = parse_day(day, now.date())
        if entry_day is None:
            return LogResult(accepted=False, reason=f"Invalid date: {day}")

        with bind_goal_key(self.spec.title):
            entry = ProgressEntry(
                date=entry_day,
                tracker_name=tracker.name,
                value=coerce_value(raw_value),
                note=note or None,
                timestamp=now,
            )
            history = [
                existing
                for existing in self.state.history
                if not (existing.date == entry_day and existing.tracker_name == tracker.name)
            ]
            history.append(entry)

            old_total = self.state.totals.get(tracker.name, 0.0)
            new_total = self._tracker_total(history, tracker.name)
            self.state.totals[tracker.name] = new_total
            unlocked = self._evaluate_achievements(tracker, old_total, new_total, now)

            self.state.history = history[-HISTORY_LIMIT:]
            self.state.streak = self.streak().days
            self.state.last_updated = now
            self.persist()

            logger.info("Logged %s=%s for %s (total %s)", tracker.name, entry.value, entry_day, new_total)
            log_metric("progress.entry.logged", 1, {"tracker": tracker.name})
            for achievement in unlocked:
                self._notify_achievement(achievement)

        return LogResult(accepted=True, entry=entry, total=new_total, unlocked=unlocked)

    def streak(self) -> Streak:
        active_days = (entry.date for entry in self.state.history if entry.value > 0)
        return compute_streak(active_days, self._today())

    def chart_data(self) -> List[ChartPoint]:
        """Zero-filled daily activity for the trailing window ending today."""
        today = self._today()
        daily: Dict[date, float] = {}
        for entry in self.state.history:
            if entry.value > 0:
                daily[entry.date] = daily.get(entry.date, 0.0) + entry.value

        points: List[ChartPoint] = []
        cumulative = 0.0
        for offset in range(CHART_DAYS - 1, -1, -1):
            day = today - timedelta(days=offset)
            activity = daily.get(day, 0.0)
            cumulative += activity
            points.append(
                ChartPoint(
                    date=day,
                    label=f"{day:%b} {day.day}",
                    daily_activity=activity,
                    window_cumulative=cumulative,
                )
            )
        return points

    def recent_activity(self, limit: int = RECENT_ACTIVITY_LIMIT) -> List[RecentActivity]:
        now = self._clock()
        recent = self.state.history[-limit:] if limit > 0 else []
        return [
            RecentActivity(
                date=entry.date,
                tracker_name=entry.tracker_name,
                value=entry.value,
                note=entry.note,
                timestamp=entry.timestamp,
                time_ago=relative_age(entry.timestamp, now),
            )
            for entry in reversed(recent)
        ]

    def overall_completion(self) -> int:
        if not self.spec.trackers:
            return 0
        ratio = sum(
            min(1.0, max(0.0, self.state.totals.get(tracker.name, 0.0)) / tracker.target)
            for tracker in self.spec.trackers
        )
        return _round_half_up(100 * ratio / len(self.spec.trackers))

    def mark_milestone_complete(self, index: int) -> MilestoneResult:
        if not 0 <= index < len(self.spec.milestones):
            return MilestoneResult(accepted=False, reason=f"No milestone at index {index}")
        if index in self.state.completed_milestones:
            return MilestoneResult(accepted=True, newly_completed=False)

        with bind_goal_key(self.spec.title):
            self.state.completed_milestones.append(index)
            self.state.last_updated = self._clock()
            self.persist()
            milestone = self.spec.milestones[index]
            logger.info("Milestone %s completed: %s", index, milestone.title)
            log_metric("progress.milestone.completed", 1, {"index": index})
            self._notify_milestone(index, milestone.title)
        return MilestoneResult(accepted=True, newly_completed=True)

    def snapshot(self) -> ProgressSnapshot:
        streak = self.streak()
        return ProgressSnapshot(
            goal_title=self.spec.title,
            state=self.state,
            recent_activity=self.recent_activity(),
            chart=self.chart_data(),
            completion_percent=self.overall_completion(),
            streak=streak.days,
            streak_capped=streak.capped,
        )

    def _notify_milestone(self, index: int, title: str) -> None:
        try:
            self.notifier.notify_milestone_completed(
                goal_title=self.spec.title,
                milestone_index=index,
                milestone_title=title,
                request_id=get_request_id(),
            )
        except Exception as exc:
            logger.warning("Milestone notification failed: %s", exc)

    def _notify_achievement(self, achievement: Achievement) -> None:
        try:
            self.notifier.notify_achievement_unlocked(
                goal_title=self.spec.title,
                achievement_id=achievement.id,
                achievement_title=achievement.title,
                request_id=get_request_id(),
            )
        except Exception as exc:
            logger.warning("Achievement notification failed: %s", exc)
