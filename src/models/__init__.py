"""
Data models for the Job Application Tracker.
"""

from .application import (
    JobStatus,
    JobApplication,
    BOARD_STATUSES,
    STATUS_LABELS,
    parse_datetime,
)

__all__ = [
    'JobStatus',
    'JobApplication',
    'BOARD_STATUSES',
    'STATUS_LABELS',
    'parse_datetime',
]
