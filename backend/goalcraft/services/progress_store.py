"""Key-value persistence for compiled specs and progress state."""
from __future__ import annotations

import copy
import logging
from typing import Any, Dict, Optional, Protocol

from sqlalchemy.orm import Session

from goalcraft.db.models.goal_progress import GoalProgressRecord

logger = logging.getLogger(__name__)

SPEC_KEY_PREFIX = "spec:"
PROGRESS_KEY_PREFIX = "progress:"


def spec_key(title: str) -> str:
    return f"{SPEC_KEY_PREFIX}{title}"


def progress_key(title: str) -> str:
    return f"{PROGRESS_KEY_PREFIX}{title}"


class ProgressStore(Protocol):
    def get(self, key: str) -> Optional[Dict[str, Any]]:
        ...

    def set(self, key: str, blob: Dict[str, Any]) -> None:
        ...


class InMemoryProgressStore:
    """Dict-backed store; blobs are deep-copied in and out."""

    def __init__(self) -> None:
        self._data: Dict[str, Dict[str, Any]] = {}

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        blob = self._data.get(key)
        return copy.deepcopy(blob) if blob is not None else None

    def set(self, key: str, blob: Dict[str, Any]) -> None:
        self._data[key] = copy.deepcopy(blob)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class SqlProgressStore:
    """Store rows in the ``goal_progress`` table through a request-scoped session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        record = self.db.get(GoalProgressRecord, key)
        if record is None:
            return None
        return copy.deepcopy(record.payload)

    def set(self, key: str, blob: Dict[str, Any]) -> None:
        record = self.db.get(GoalProgressRecord, key)
        if record is None:
            record = GoalProgressRecord(key=key, payload=blob)
            self.db.add(record)
        else:
            record.payload = blob
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.debug("Stored %s", key)
