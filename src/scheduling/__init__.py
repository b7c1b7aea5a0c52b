"""
Interview scheduling: clash detection and date selection helpers.
"""

from .clash_detector import clashing_dates, upcoming_interview_dates, find_clashes
from .interview_dates import (
    QUICK_SELECT_OPTIONS,
    DEFAULT_INTERVIEW_TIME,
    quick_select_label,
    resolve_quick_option,
    parse_time_of_day,
    selectable_window,
    combine_date_and_time,
)

__all__ = [
    'clashing_dates',
    'upcoming_interview_dates',
    'find_clashes',
    'QUICK_SELECT_OPTIONS',
    'DEFAULT_INTERVIEW_TIME',
    'quick_select_label',
    'resolve_quick_option',
    'parse_time_of_day',
    'selectable_window',
    'combine_date_and_time',
]
