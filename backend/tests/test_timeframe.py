from __future__ import annotations

import pytest

from goalcraft.services.timeframe import extract_timeframe, total_weeks


@pytest.mark.parametrize(
    "text, days, display",
    [
        ("run a half marathon in 3 months", 90, "3 months"),
        ("Write a novel in 6 Weeks", 42, "6 weeks"),
        ("meditate for 10 days", 10, "10 days"),
        ("learn spanish in 1 year", 365, "1 year"),
        ("finish it within half year", 180, "6 months"),
        ("ship it this quarter", 90, "3 months"),
    ],
)
def test_extracts_first_matching_duration(text: str, days: int, display: str) -> None:
    timeframe = extract_timeframe(text)

    assert timeframe.days == days
    assert timeframe.display == display


def test_months_win_over_weeks_regardless_of_position() -> None:
    timeframe = extract_timeframe("2 weeks of prep, then 4 months of training")

    assert timeframe.days == 120


def test_defaults_to_three_months() -> None:
    for text in ("get better at chess", "", None):
        timeframe = extract_timeframe(text)
        assert (timeframe.days, timeframe.display) == (90, "3 months")


def test_zero_count_is_skipped() -> None:
    timeframe = extract_timeframe("0 months and 3 weeks")

    assert timeframe.days == 21


def test_total_weeks_floors() -> None:
    assert total_weeks(90) == 12
    assert total_weeks(6) == 0


@pytest.mark.parametrize(
    "text",
    ["run 1" + "0" * 400 + " days", "read " + "9" * 5000 + " pages in " + "9" * 5000 + " weeks", "run 200 years"],
)
def test_oversized_counts_fall_back_to_default(text: str) -> None:
    timeframe = extract_timeframe(text)

    assert (timeframe.days, timeframe.display) == (90, "3 months")


def test_oversized_count_does_not_hide_later_pattern() -> None:
    timeframe = extract_timeframe("1000000 weeks, or really 10 days")

    assert timeframe.days == 10


def test_leading_zeros_are_ignored() -> None:
    assert extract_timeframe("run every day for 0000014 days").days == 14
