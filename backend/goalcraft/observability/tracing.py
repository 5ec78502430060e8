"""Opik trace helpers that fall back to no-ops."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Dict, Iterator, Optional

from goalcraft.core.context import get_goal_key, get_request_id
from goalcraft.observability import client as opik_client

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from opik.api_objects.trace.trace_client import Trace
else:  # pragma: no cover - typing helper
    Trace = object  # type: ignore[assignment]

logger = logging.getLogger(__name__)


def _open(name: str, metadata: Dict[str, Any]) -> Optional["Trace"]:
    client = opik_client.get_opik_client()
    if client is None:
        return None
    try:
        return client.trace(name=name, metadata=metadata or None)
    except Exception as exc:  # pragma: no cover - best-effort
        logger.debug("Unable to start trace %s: %s", name, exc)
        return None


def annotate(span: Optional["Trace"], **metadata: Any) -> None:
    """Attach metadata to an open trace; ignored when tracing is off."""
    if span is None:
        return
    try:
        span.update(metadata=metadata)
    except Exception:  # pragma: no cover - best-effort
        logger.debug("Failed to annotate trace", exc_info=True)


@contextmanager
def trace(
    name: str,
    metadata: Optional[Dict[str, Any]] = None,
    goal_key: Optional[str] = None,
    request_id: Optional[str] = None,
) -> Iterator[Optional["Trace"]]:
    """Wrap a block in an Opik trace tagged with the current goal and request.

    Yields ``None`` when Opik is disabled. Exceptions are recorded on the trace
    and re-raised.
    """
    tags = dict(metadata or {})
    goal_key = goal_key or get_goal_key()
    request_id = request_id or get_request_id()
    if goal_key:
        tags.setdefault("goal_key", goal_key)
    if request_id:
        tags.setdefault("request_id", request_id)

    span = _open(name, tags)
    try:
        yield span
    except Exception as exc:
        if span is not None:
            try:
                span.update(error_info={"message": str(exc)})
            except Exception:  # pragma: no cover
                logger.debug("Failed to record error on trace %s", name, exc_info=True)
        raise
    finally:
        if span is not None:
            try:
                span.end()
            except Exception:  # pragma: no cover
                logger.debug("Failed to close trace %s", name, exc_info=True)
