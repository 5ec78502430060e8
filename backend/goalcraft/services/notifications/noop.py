"""No-op notification provider (logs only)."""
from __future__ import annotations

import logging

from goalcraft.services.notifications.base import NotificationResult, NotificationService


logger = logging.getLogger(__name__)


class NoopNotificationService(NotificationService):
    def notify_milestone_completed(
        self,
        *,
        goal_title: str,
        milestone_index: int,
        milestone_title: str,
        request_id: str | None,
    ) -> NotificationResult:
        logger.info(
            "Notification queued (noop) milestone goal=%s index=%s title=%s",
            goal_title,
            milestone_index,
            milestone_title,
        )
        return NotificationResult(status="noop", reason="notification provider is noop")

    def notify_achievement_unlocked(
        self,
        *,
        goal_title: str,
        achievement_id: str,
        achievement_title: str,
        request_id: str | None,
    ) -> NotificationResult:
        logger.info(
            "Notification queued (noop) achievement goal=%s id=%s title=%s",
            goal_title,
            achievement_id,
            achievement_title,
        )
        return NotificationResult(status="noop", reason="notification provider is noop")
