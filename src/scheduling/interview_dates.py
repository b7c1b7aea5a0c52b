"""
Helpers for picking an interview date and time.

The board offers quick-select options relative to today, a time field in
``HH:MM`` form, and only accepts days from today up to two years ahead.
"""

import calendar
from datetime import date, datetime, time, timedelta
from typing import Callable, Dict, Optional, Tuple

from ..errors import ValidationFailure

DEFAULT_INTERVIEW_TIME = "09:00"


def _add_months(day: date, months: int) -> date:
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    # Clamp to the last day of the target month
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


QUICK_SELECT_OPTIONS: Dict[str, Callable[[date], date]] = {
    "tomorrow": lambda today: today + timedelta(days=1),
    "day-after": lambda today: today + timedelta(days=2),
    "in-2-days": lambda today: today + timedelta(days=2),
    "in-3-days": lambda today: today + timedelta(days=3),
    "in-1-week": lambda today: today + timedelta(weeks=1),
    "in-2-weeks": lambda today: today + timedelta(weeks=2),
    "next-week": lambda today: today + timedelta(weeks=1),
    "next-month": lambda today: _add_months(today, 1),
}


def quick_select_label(option: str) -> str:
    """Human label for a quick-select key, e.g. ``in-2-days`` -> ``In 2 days``."""
    return option.replace("-", " ").capitalize()


def resolve_quick_option(option: str, today: Optional[date] = None) -> date:
    try:
        resolver = QUICK_SELECT_OPTIONS[option]
    except KeyError:
        raise ValidationFailure(f"Unknown quick-select option: {option!r}") from None
    return resolver(today or date.today())


def parse_time_of_day(value: str) -> time:
    """Parse ``HH:MM`` into a time."""
    try:
        hours, minutes = (int(part) for part in value.strip().split(":"))
        return time(hour=hours, minute=minutes)
    except (ValueError, AttributeError):
        raise ValidationFailure("Interview time is required") from None


def selectable_window(today: Optional[date] = None) -> Tuple[date, date]:
    """First and last day an interview may be scheduled on."""
    today = today or date.today()
    try:
        last = today.replace(year=today.year + 2)
    except ValueError:
        # 29 February
        last = today.replace(year=today.year + 2, day=28)
    return today, last


def combine_date_and_time(day: date, time_of_day: str = DEFAULT_INTERVIEW_TIME,
                          today: Optional[date] = None) -> datetime:
    """Build the interview datetime, rejecting days outside the selectable window."""
    if day is None:
        raise ValidationFailure("Interview date is required")
    first, last = selectable_window(today)
    if not first <= day <= last:
        raise ValidationFailure(f"Interview date must be between {first} and {last}")
    return datetime.combine(day, parse_time_of_day(time_of_day))
