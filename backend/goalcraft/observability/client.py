"""Lazily constructed Opik client shared by tracing and metrics."""
from __future__ import annotations

import logging
from threading import Lock
from typing import Optional

from opik import Opik

from goalcraft.core.config import settings
from goalcraft.services.security import redact_sensitive

logger = logging.getLogger(__name__)

_lock = Lock()
_state: dict = {"client": None, "attempted": False}


def _build_client() -> Optional[Opik]:
    if not settings.opik_enabled:
        logger.debug("Opik disabled; traces and metrics are no-ops.")
        return None
    if not settings.opik_api_key:
        logger.warning("OPIK_ENABLED is true but OPIK_API_KEY is missing; skipping Opik init.")
        return None
    options = {"project_name": settings.opik_project, "api_key": settings.opik_api_key}
    try:
        client = Opik(**options)
    except Exception as exc:
        logger.warning("Failed to initialize Opik, tracing will be disabled: %s", exc)
        return None
    logger.info("Opik enabled with %s", redact_sensitive(options))
    return client


def init_opik() -> Optional[Opik]:
    """Build the client on first call; later calls return the cached outcome."""
    with _lock:
        if not _state["attempted"]:
            _state["attempted"] = True
            _state["client"] = _build_client()
        return _state["client"]


def get_opik_client() -> Optional[Opik]:
    return _state["client"] if _state["attempted"] else init_opik()


def reset_opik_client() -> None:
    """Forget the cached client so the next call re-reads settings."""
    with _lock:
        _state["client"] = None
        _state["attempted"] = False
