"""Progress tracking API routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status

from goalcraft.api.routes.deps import get_progress_store, load_spec_or_404
from goalcraft.api.schemas.progress import LogEntryRequest, ProgressSnapshot
from goalcraft.observability.tracing import annotate, trace
from goalcraft.services.progress_engine import ProgressEngine
from goalcraft.services.progress_store import ProgressStore

router = APIRouter(prefix="/goals", tags=["progress"])


def _engine(store: ProgressStore, title: str) -> ProgressEngine:
    return ProgressEngine(load_spec_or_404(store, title), store=store)


@router.post("/{title:path}/entries", response_model=ProgressSnapshot)
def log_progress_entry(
    title: str,
    payload: LogEntryRequest,
    http_request: Request,
    store: ProgressStore = Depends(get_progress_store),
) -> ProgressSnapshot:
    """Record one day's value for a tracker and return the refreshed snapshot."""
    engine = _engine(store, title)
    request_id = getattr(http_request.state, "request_id", None)
    with trace(
        "http.progress.log_entry",
        metadata={"tracker": payload.tracker_name},
        goal_key=title,
        request_id=request_id,
    ) as span:
        result = engine.log_entry(payload.tracker_name, payload.value, note=payload.note, day=payload.date)
        annotate(span, accepted=result.accepted, unlocked=len(result.unlocked))
    if not result.accepted:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.reason)
    return engine.snapshot()


@router.get("/{title:path}/progress", response_model=ProgressSnapshot)
def get_progress(title: str, store: ProgressStore = Depends(get_progress_store)) -> ProgressSnapshot:
    return _engine(store, title).snapshot()


@router.post("/{title:path}/milestones/{index}/complete", response_model=ProgressSnapshot)
def complete_milestone(
    title: str,
    index: int,
    store: ProgressStore = Depends(get_progress_store),
) -> ProgressSnapshot:
    engine = _engine(store, title)
    result = engine.mark_milestone_complete(index)
    if not result.accepted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=result.reason)
    return engine.snapshot()
