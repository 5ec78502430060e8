"""Shared dependencies for goal routes."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from goalcraft.api.schemas.goal_spec import GoalSpec
from goalcraft.db.deps import get_db
from goalcraft.services.ai_goal_generator import AIGoalGenerator
from goalcraft.services.progress_store import ProgressStore, SqlProgressStore, spec_key

logger = logging.getLogger(__name__)


def get_progress_store(db: Session = Depends(get_db)) -> ProgressStore:
    return SqlProgressStore(db)


def get_ai_generator() -> Optional[AIGoalGenerator]:
    """``None`` lets the compiler build the default generator from settings."""
    return None


def load_spec_or_404(store: ProgressStore, title: str) -> GoalSpec:
    blob = store.get(spec_key(title))
    if not blob:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Goal not found")
    try:
        return GoalSpec.model_validate(blob)
    except ValidationError as exc:
        logger.warning("Stored spec for %r is unreadable (%s errors)", title, exc.error_count())
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Goal not found") from exc
