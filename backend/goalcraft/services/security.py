"""Input/output hygiene for the AI goal path."""
from __future__ import annotations

import re
import time
from collections import deque
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable, Deque, Dict, Mapping

MAX_INPUT_CHARS = 1000
MAX_RESPONSE_CHARS = 10000

PLACEHOLDER_KEYS = {"your-api-key-here", "your-openai-api-key-here", "sk-...", "changeme"}
SENSITIVE_FIELDS = {"api_key", "apikey", "key", "token", "password", "openai_api_key", "opik_api_key"}

_INJECTION_CHARS = re.compile(r"[<>\"'`]")
_UNSAFE_PROTOCOLS = re.compile(r"javascript:|data:|vbscript:", re.IGNORECASE)
_SCRIPT_BLOCK = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_JS_URL = re.compile(r"javascript:", re.IGNORECASE)
_HTML_DATA_URL = re.compile(r"data:text/html", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"on\w+\s*=", re.IGNORECASE)


def sanitize_user_input(raw: Any) -> str:
    """Strip markup characters and script protocols from goal text before it is sent out."""
    if not isinstance(raw, str) or not raw:
        return ""
    cleaned = _INJECTION_CHARS.sub("", raw)
    cleaned = _UNSAFE_PROTOCOLS.sub("", cleaned)
    return cleaned[:MAX_INPUT_CHARS].strip()


def filter_ai_response(response: Any) -> str:
    """Remove executable fragments from model output and cap its length."""
    if not isinstance(response, str) or not response:
        return ""
    filtered = _SCRIPT_BLOCK.sub("", response)
    filtered = _JS_URL.sub("", filtered)
    filtered = _HTML_DATA_URL.sub("", filtered)
    filtered = _EVENT_HANDLER.sub("", filtered)
    return filtered[:MAX_RESPONSE_CHARS]


@dataclass(frozen=True)
class ApiKeyCheck:
    valid: bool
    reason: str


def validate_api_key(api_key: str | None) -> ApiKeyCheck:
    if not api_key or not api_key.strip():
        return ApiKeyCheck(valid=False, reason="No API key provided")
    key = api_key.strip()
    if key.lower() in PLACEHOLDER_KEYS:
        return ApiKeyCheck(valid=False, reason="Placeholder API key")
    if len(key) < 20:
        return ApiKeyCheck(valid=False, reason="API key too short")
    return ApiKeyCheck(valid=True, reason="API key format looks correct")


def redact_sensitive(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy of ``payload`` with secret-looking fields masked, safe to log."""
    redacted: Dict[str, Any] = {}
    for name, value in payload.items():
        if name.lower() in SENSITIVE_FIELDS and value:
            redacted[name] = "***"
        else:
            redacted[name] = value
    return redacted


class RateLimiter:
    """Sliding-window limiter: at most ``max_requests`` per ``window_seconds``.

    A successful :meth:`try_acquire` records the request, so callers must only
    ask when they are about to make the call.
    """

    def __init__(
        self,
        max_requests: int = 10,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._requests: Deque[float] = deque()
        self._lock = Lock()

    def _evict(self, now: float) -> None:
        while self._requests and now - self._requests[0] >= self.window_seconds:
            self._requests.popleft()

    def try_acquire(self) -> bool:
        with self._lock:
            now = self._clock()
            self._evict(now)
            if len(self._requests) >= self.max_requests:
                return False
            self._requests.append(now)
            return True

    def seconds_until_reset(self) -> float:
        with self._lock:
            now = self._clock()
            self._evict(now)
            if not self._requests:
                return 0.0
            return max(0.0, self.window_seconds - (now - self._requests[0]))

    @property
    def in_window(self) -> int:
        with self._lock:
            self._evict(self._clock())
            return len(self._requests)
