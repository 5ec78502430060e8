"""Per-request context utilities."""
from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

request_id_ctx_var: ContextVar[str | None] = ContextVar("request_id", default=None)
goal_key_ctx_var: ContextVar[str | None] = ContextVar("goal_key", default=None)


def get_request_id() -> str | None:
    """Return the current request id if available."""
    return request_id_ctx_var.get()


def get_goal_key() -> str | None:
    return goal_key_ctx_var.get()


@contextmanager
def bind_goal_key(goal_key: str | None) -> Iterator[None]:
    """Tag log records emitted inside the block with the goal being worked on."""
    token = goal_key_ctx_var.set(goal_key)
    try:
        yield
    finally:
        goal_key_ctx_var.reset(token)
