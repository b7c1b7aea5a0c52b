"""
Unit Tests for interview date selection helpers.
"""

from datetime import date, datetime

import pytest

from src.errors import ValidationFailure
from src.scheduling import (
    QUICK_SELECT_OPTIONS,
    combine_date_and_time,
    parse_time_of_day,
    quick_select_label,
    resolve_quick_option,
    selectable_window,
)

TODAY = date(2024, 1, 31)


@pytest.mark.parametrize("option, expected", [
    ("tomorrow", date(2024, 2, 1)),
    ("day-after", date(2024, 2, 2)),
    ("in-3-days", date(2024, 2, 3)),
    ("in-1-week", date(2024, 2, 7)),
    ("in-2-weeks", date(2024, 2, 14)),
    ("next-month", date(2024, 2, 29)),
])
def test_quick_select_options(option, expected):
    assert resolve_quick_option(option, TODAY) == expected


def test_next_month_rolls_over_year():
    assert resolve_quick_option("next-month", date(2024, 12, 15)) == date(2025, 1, 15)


def test_unknown_quick_option():
    with pytest.raises(ValidationFailure):
        resolve_quick_option("someday", TODAY)


def test_quick_select_labels():
    assert quick_select_label("in-2-days") == "In 2 days"
    assert set(QUICK_SELECT_OPTIONS) >= {"tomorrow", "next-week", "next-month"}


def test_parse_time_of_day():
    assert parse_time_of_day("09:00").hour == 9
    assert parse_time_of_day(" 14:45 ").minute == 45
    for bad in ("", "9", "25:00", "ab:cd", None):
        with pytest.raises(ValidationFailure):
            parse_time_of_day(bad)


def test_selectable_window_spans_two_years():
    assert selectable_window(TODAY) == (TODAY, date(2026, 1, 31))
    assert selectable_window(date(2024, 2, 29)) == (date(2024, 2, 29), date(2026, 2, 28))


def test_combine_date_and_time():
    assert combine_date_and_time(date(2024, 2, 5), "15:30", today=TODAY) == datetime(2024, 2, 5, 15, 30)


def test_combine_rejects_days_outside_window():
    with pytest.raises(ValidationFailure):
        combine_date_and_time(date(2024, 1, 30), "09:00", today=TODAY)
    with pytest.raises(ValidationFailure):
        combine_date_and_time(date(2026, 2, 1), "09:00", today=TODAY)
    with pytest.raises(ValidationFailure):
        combine_date_and_time(None, "09:00", today=TODAY)
