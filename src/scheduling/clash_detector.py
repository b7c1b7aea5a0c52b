"""
Interview clash detection.

Two or more interviews on the same calendar day are a clash. Days are
compared in local time, so 09:00 and 15:00 on the same date clash while
23:00 and 01:00 the next morning do not.
"""

from datetime import date, datetime
from typing import Dict, Iterable, List, Optional

from ..models import JobApplication, JobStatus


def _local(moment: datetime) -> datetime:
    # Naive datetimes are already local; aware ones are converted first
    if moment.tzinfo is not None:
        return moment.astimezone().replace(tzinfo=None)
    return moment


def clashing_dates(dates: Iterable[datetime]) -> List[date]:
    """
    Return the calendar days on which two or more of ``dates`` fall.

    Each day appears once, in the order its first timestamp was seen.
    """
    counts: Dict[date, int] = {}
    for moment in dates:
        day = _local(moment).date()
        counts[day] = counts.get(day, 0) + 1
    return [day for day, count in counts.items() if count >= 2]


def upcoming_interview_dates(applications: Iterable[JobApplication],
                             now: Optional[datetime] = None) -> List[datetime]:
    """Interview dates of applications in the interview column that are not yet past."""
    reference = _local(now) if now is not None else datetime.now()
    return [
        application.interview_date
        for application in applications
        if application.status == JobStatus.INTERVIEW
        and application.interview_date is not None
        and _local(application.interview_date) >= reference
    ]


def find_clashes(applications: Iterable[JobApplication],
                 now: Optional[datetime] = None) -> List[date]:
    """Clash days among the upcoming interviews of ``applications``."""
    return clashing_dates(upcoming_interview_dates(applications, now))
