"""Duration extraction from free-text goals."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

DEFAULT_DAYS = 90
DEFAULT_DISPLAY = "3 months"
# Counts beyond a century are treated as noise rather than a duration.
MAX_DAYS = 36500
MAX_COUNT_DIGITS = 6


@dataclass(frozen=True)
class Timeframe:
    days: int
    display: str


@dataclass(frozen=True)
class _TimePattern:
    pattern: re.Pattern[str]
    multiplier: Optional[int] = None
    fixed_days: Optional[int] = None
    fixed_display: Optional[str] = None


TIME_PATTERNS: List[_TimePattern] = [
    _TimePattern(re.compile(r"(\d+)\s*months?", re.IGNORECASE), multiplier=30),
    _TimePattern(re.compile(r"(\d+)\s*weeks?", re.IGNORECASE), multiplier=7),
    _TimePattern(re.compile(r"(\d+)\s*days?", re.IGNORECASE), multiplier=1),
    _TimePattern(re.compile(r"(\d+)\s*years?", re.IGNORECASE), multiplier=365),
    _TimePattern(re.compile(r"half\s*year|6\s*months", re.IGNORECASE), fixed_days=180, fixed_display="6 months"),
    _TimePattern(re.compile(r"quarter|3\s*months", re.IGNORECASE), fixed_days=90, fixed_display="3 months"),
]


def extract_timeframe(text: str | None) -> Timeframe:
    """Return the first duration mentioned in ``text``; 3 months when none is found."""
    lowered = (text or "").lower().strip()
    for entry in TIME_PATTERNS:
        match = entry.pattern.search(lowered)
        if not match:
            continue
        if entry.fixed_days is not None:
            return Timeframe(days=entry.fixed_days, display=entry.fixed_display or match.group(0))
        digits = match.group(1).lstrip("0")
        if len(digits) > MAX_COUNT_DIGITS:
            continue
        days = int(digits or "0") * (entry.multiplier or 1)
        if not 0 < days <= MAX_DAYS:
            # "0 days" and absurd counts carry no usable duration; keep looking.
            continue
        return Timeframe(days=days, display=match.group(0))
    return Timeframe(days=DEFAULT_DAYS, display=DEFAULT_DISPLAY)


def total_weeks(duration_days: int) -> int:
    return duration_days // 7
