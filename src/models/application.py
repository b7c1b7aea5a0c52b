"""
Job application model shared by the store, the API and persistence.

The wire format is camelCase JSON. Fields the tracker does not interpret are
kept in ``details`` and written back unchanged.
"""

import copy
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from ..errors import ValidationFailure


class JobStatus(str, Enum):
    BOOKMARKED = "bookmarked"
    APPLIED = "applied"
    INTERVIEW = "interview"
    OFFER = "offer"
    REJECTED = "rejected"
    ARCHIVED = "archived"

    @classmethod
    def parse(cls, value: Any) -> "JobStatus":
        """Coerce a string or enum member, raising ValidationFailure otherwise."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationFailure(f"Unknown status: {value!r}") from None


# Columns shown on the board, in display order
BOARD_STATUSES = (
    JobStatus.BOOKMARKED,
    JobStatus.APPLIED,
    JobStatus.INTERVIEW,
    JobStatus.OFFER,
    JobStatus.REJECTED,
)

STATUS_LABELS = {
    JobStatus.BOOKMARKED: "Bookmarked",
    JobStatus.APPLIED: "Applied",
    JobStatus.INTERVIEW: "Interview Scheduled",
    JobStatus.OFFER: "Got Offer",
    JobStatus.REJECTED: "Rejected",
    JobStatus.ARCHIVED: "Archived",
}

_KNOWN_KEYS = {"id", "status", "previousStatus", "interviewDate", "company", "role"}


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp (a trailing ``Z`` is accepted)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise ValidationFailure(f"Invalid timestamp: {value!r}") from None


@dataclass
class JobApplication:
    """A single tracked job application."""
    id: Optional[int] = None
    status: JobStatus = JobStatus.BOOKMARKED
    previous_status: Optional[JobStatus] = None
    interview_date: Optional[datetime] = None
    company: str = ""
    role: str = ""
    details: Dict[str, Any] = field(default_factory=dict)

    def copy(self, **changes: Any) -> "JobApplication":
        """Copy with its own details mapping, optionally changing fields."""
        changes.setdefault("details", copy.deepcopy(self.details))
        return replace(self, **changes)

    @property
    def is_archived(self) -> bool:
        return self.status == JobStatus.ARCHIVED

    def archived(self) -> "JobApplication":
        """Copy of this record moved to the archive."""
        if self.is_archived:
            return self.copy()
        return self.copy(status=JobStatus.ARCHIVED, previous_status=self.status)

    def restored(self) -> "JobApplication":
        """Copy of this record moved back to the column it was archived from."""
        return self.copy(
            status=self.previous_status or JobStatus.BOOKMARKED,
            previous_status=None,
        )

    def moved(self, to: JobStatus) -> "JobApplication":
        return self.copy(status=to, previous_status=None)

    def with_interview_date(self, when: Optional[datetime]) -> "JobApplication":
        return self.copy(interview_date=when)

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.details)
        data.update({
            "id": self.id,
            "status": self.status.value,
            "previousStatus": self.previous_status.value if self.previous_status else None,
            "interviewDate": self.interview_date.isoformat() if self.interview_date else None,
            "company": self.company,
            "role": self.role,
        })
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobApplication":
        raw_id = data.get("id")
        if raw_id is not None and (isinstance(raw_id, bool) or not isinstance(raw_id, int)):
            raise ValidationFailure(f"Invalid application ID: {raw_id!r}")

        previous = data.get("previousStatus")
        return cls(
            id=raw_id,
            status=JobStatus.parse(data.get("status") or JobStatus.BOOKMARKED),
            previous_status=JobStatus.parse(previous) if previous else None,
            interview_date=parse_datetime(data.get("interviewDate")),
            company=data.get("company") or "",
            role=data.get("role") or "",
            details={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )
