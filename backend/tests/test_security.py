from __future__ import annotations

from goalcraft.services.security import (
    MAX_INPUT_CHARS,
    MAX_RESPONSE_CHARS,
    RateLimiter,
    filter_ai_response,
    redact_sensitive,
    sanitize_user_input,
    validate_api_key,
)


class _FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_sanitize_strips_markup_and_protocols() -> None:
    cleaned = sanitize_user_input("  <b>run</b> 'fast' javascript:alert(1)  ")

    assert cleaned == "brun/b fast alert(1)"


def test_sanitize_caps_length_and_rejects_non_strings() -> None:
    assert len(sanitize_user_input("a" * 5000)) == MAX_INPUT_CHARS
    assert sanitize_user_input(None) == ""
    assert sanitize_user_input(42) == ""


def test_filter_ai_response_removes_executable_fragments() -> None:
    response = '{"title": "Run"}<script>alert(1)</script><img onerror=x> data:text/html,hi'

    filtered = filter_ai_response(response)

    assert "<script>" not in filtered
    assert "onerror" not in filtered
    assert "data:text/html" not in filtered
    assert filtered.startswith('{"title": "Run"}')
    assert len(filter_ai_response("x" * 20000)) == MAX_RESPONSE_CHARS


def test_validate_api_key() -> None:
    assert not validate_api_key(None).valid
    assert not validate_api_key("your-api-key-here").valid
    assert not validate_api_key("short").valid
    assert validate_api_key("sk-" + "a" * 40).valid


def test_redact_sensitive_masks_secrets() -> None:
    redacted = redact_sensitive({"openai_api_key": "sk-secret", "model": "gpt-4o-mini", "token": None})

    assert redacted == {"openai_api_key": "***", "model": "gpt-4o-mini", "token": None}


def test_rate_limiter_sliding_window() -> None:
    clock = _FakeClock()
    limiter = RateLimiter(max_requests=2, window_seconds=60, clock=clock)

    assert limiter.try_acquire()
    clock.now += 10
    assert limiter.try_acquire()
    assert not limiter.try_acquire()
    assert limiter.seconds_until_reset() == 50

    clock.now += 50
    assert limiter.in_window == 1
    assert limiter.try_acquire()
