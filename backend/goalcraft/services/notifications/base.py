"""Notification service interface."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class NotificationResult:
    status: str
    reason: str


class NotificationService:
    """Base interface for notification providers."""

    def notify_milestone_completed(
        self,
        *,
        goal_title: str,
        milestone_index: int,
        milestone_title: str,
        request_id: str | None,
    ) -> NotificationResult:
        raise NotImplementedError

    def notify_achievement_unlocked(
        self,
        *,
        goal_title: str,
        achievement_id: str,
        achievement_title: str,
        request_id: str | None,
    ) -> NotificationResult:
        raise NotImplementedError
