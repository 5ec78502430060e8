"""Goal compilation API routes."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status

from goalcraft.api.routes.deps import get_ai_generator, get_progress_store, load_spec_or_404
from goalcraft.api.schemas.goal_spec import CompileRequest, GoalSpec
from goalcraft.observability.metrics import log_metric
from goalcraft.observability.tracing import trace
from goalcraft.services.ai_goal_generator import AIGoalGenerator
from goalcraft.services.progress_store import ProgressStore, spec_key
from goalcraft.services.spec_compiler import compile_goal_spec

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/goals", tags=["goals"])


@router.post("/compile", response_model=GoalSpec)
def compile_goal(
    payload: CompileRequest,
    http_request: Request,
    store: ProgressStore = Depends(get_progress_store),
    generator: Optional[AIGoalGenerator] = Depends(get_ai_generator),
) -> GoalSpec:
    """Compile free goal text into a spec and remember it under its title."""
    text = payload.text.strip()
    if not text:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="text must not be empty")
    request_id = getattr(http_request.state, "request_id", None)

    with trace("http.goals.compile", metadata={"route": "/goals/compile", "text_length": len(text)}, request_id=request_id):
        spec = compile_goal_spec(text, use_ai=payload.use_ai, generator=generator)
        try:
            store.set(spec_key(spec.title), spec.model_dump(mode="json", by_alias=True))
        except Exception as exc:
            logger.warning("Unable to persist compiled spec %r: %s", spec.title, exc)
            log_metric("goal.spec.persist.failed", 1)

    log_metric("goal.compile.text_length", len(text), metadata={"source": spec.source})
    return spec


# Declared after the progress router in main.py so suffixed paths match there first.
@router.get("/{title:path}", response_model=GoalSpec)
def get_goal(title: str, store: ProgressStore = Depends(get_progress_store)) -> GoalSpec:
    return load_spec_or_404(store, title)
