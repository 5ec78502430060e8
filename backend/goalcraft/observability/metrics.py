"""Counters and timings recorded as short-lived Opik traces."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from time import perf_counter
from typing import Any, Dict, Iterator, Optional

from goalcraft.observability import client as opik_client

logger = logging.getLogger(__name__)


def _clean(metadata: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return {key: item for key, item in (metadata or {}).items() if item is not None}


def log_metric(name: str, value: float | int, metadata: Optional[Dict[str, Any]] = None) -> None:
    """Emit ``metric:<name>`` with ``value``; does nothing while Opik is off."""
    client = opik_client.get_opik_client()
    if client is None:
        return
    try:
        client.trace(name=f"metric:{name}", metadata={"value": value, **_clean(metadata)}).end()
    except Exception as exc:  # pragma: no cover - best-effort
        logger.debug("Dropping metric %s: %s", name, exc)


@contextmanager
def timed(name: str, metadata: Optional[Dict[str, Any]] = None) -> Iterator[None]:
    """Record the block's wall time as ``<name>.duration_ms``, even when it raises."""
    started = perf_counter()
    try:
        yield
    finally:
        log_metric(f"{name}.duration_ms", (perf_counter() - started) * 1000, metadata)
