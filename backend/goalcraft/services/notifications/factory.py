"""Notification service factory."""
from __future__ import annotations

import logging
from functools import lru_cache

from goalcraft.core.config import settings
from goalcraft.services.notifications.base import NotificationService
from goalcraft.services.notifications.noop import NoopNotificationService

logger = logging.getLogger(__name__)


@lru_cache
def get_notification_service() -> NotificationService:
    provider = settings.notifications_provider.lower()
    if not settings.notifications_enabled:
        return NoopNotificationService()
    if provider != "noop":
        logger.warning("Unknown notifications provider %r; using noop", provider)
    return NoopNotificationService()
