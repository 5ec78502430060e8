"""Custom FastAPI middleware."""
from __future__ import annotations

import logging
import re
from time import perf_counter
from typing import Callable, Optional
from urllib.parse import unquote
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from goalcraft.core.context import goal_key_ctx_var, request_id_ctx_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-Id"
GOALS_PREFIX = "/goals/"
GOAL_ROUTE_SUFFIX = re.compile(r"/(?:entries|progress|milestones/[^/]+/complete)$")


def goal_key_from_path(path: str) -> Optional[str]:
    """Title part of ``/goals/<title>/...`` paths, used to tag log lines.

    Titles may themselves contain slashes, so only the known route suffixes
    are stripped.
    """
    if not path.startswith(GOALS_PREFIX):
        return None
    title = GOAL_ROUTE_SUFFIX.sub("", path[len(GOALS_PREFIX):])
    if not title or title == "compile":
        return None
    return unquote(title)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Bind a request id (and the goal being addressed) for the lifetime of a request."""

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:  # type: ignore[override]
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        request.state.request_id = request_id
        id_token = request_id_ctx_var.set(request_id)
        goal_token = goal_key_ctx_var.set(goal_key_from_path(request.url.path))
        started = perf_counter()

        try:
            response = await call_next(request)
        finally:
            goal_key_ctx_var.reset(goal_token)
            request_id_ctx_var.reset(id_token)

        logger.debug(
            "%s %s -> %s in %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            (perf_counter() - started) * 1000,
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
