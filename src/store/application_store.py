"""
Application Store - optimistic client-side cache of a user's applications.

Every mutation updates the in-memory list as soon as the operation starts
(before its first suspension point), then asks the remote service to persist
the change. Success is reported with a notice. Any failure is reported and
followed by a full re-fetch, which replaces whatever optimistic state exists
with the authoritative list.

Derived views (unarchived, archived, archived count) are recomputed from the
list on every change and never modified on their own.

The store has an explicit lifecycle: ``open()`` at session start and
``close()`` at session end (or ``async with``).
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Tuple
import asyncio

from ..api.base import RemoteApplicationService
from ..errors import TransientRemoteFailure, ValidationFailure
from ..models import JobApplication, JobStatus
from ..utils import get_store_logger, RetryPolicy, retry_async
from .notifications import Notifier

logger = get_store_logger()

# action -> (success notice, failure notice)
MESSAGES: Dict[str, Tuple[str, str]] = {
    "fetch": ("Applications loaded", "Failed to fetch applications"),
    "add": ("Application added successfully", "Failed to add application"),
    "archive": ("Application archived successfully", "Failed to archive application"),
    "restore": ("Application restored successfully", "Failed to restore application"),
    "delete": ("Application deleted successfully", "Failed to delete application"),
    "move": ("Application moved successfully", "Failed to move application"),
    "interview_date": ("Interview date set successfully", "Failed to set interview date"),
}


@dataclass(frozen=True)
class DerivedState:
    unarchived_applications: Tuple[JobApplication, ...]
    archived_applications: Tuple[JobApplication, ...]
    archived_count: int


def calculate_derived_state(applications: Iterable[JobApplication]) -> DerivedState:
    """Split applications into unarchived and archived views."""
    applications = list(applications)
    archived = tuple(a for a in applications if a.status == JobStatus.ARCHIVED)
    unarchived = tuple(a for a in applications if a.status != JobStatus.ARCHIVED)
    return DerivedState(
        unarchived_applications=unarchived,
        archived_applications=archived,
        archived_count=len(archived),
    )


def _validate_id(application_id: Any) -> int:
    if isinstance(application_id, bool) or not isinstance(application_id, int) or application_id <= 0:
        raise ValidationFailure(f"Invalid application ID: {application_id!r}")
    return application_id


class ApplicationStore:
    """In-memory mirror of the signed-in user's job applications."""

    def __init__(self, remote: RemoteApplicationService,
                 notifier: Optional[Notifier] = None,
                 retry_policy: Optional[RetryPolicy] = None,
                 sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep):
        self.remote = remote
        self.notifier = notifier or Notifier()
        self.retry_policy = retry_policy or RetryPolicy()
        self._sleep = sleep

        self._applications: List[JobApplication] = []
        self._derived = calculate_derived_state([])
        self.loading = True
        self._open = False
        self._fetches_in_flight = 0

    # Lifecycle
    def open(self) -> "ApplicationStore":
        self._open = True
        logger.debug("Application store opened")
        return self

    def close(self) -> None:
        self._open = False
        self._commit([])
        self.loading = False
        logger.debug("Application store closed")

    @property
    def is_open(self) -> bool:
        return self._open

    async def __aenter__(self) -> "ApplicationStore":
        return self.open()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _ensure_open(self) -> None:
        if not self._open:
            raise RuntimeError("ApplicationStore is closed")

    # Snapshot
    @property
    def applications(self) -> List[JobApplication]:
        return list(self._applications)

    @property
    def unarchived_applications(self) -> List[JobApplication]:
        return list(self._derived.unarchived_applications)

    @property
    def archived_applications(self) -> List[JobApplication]:
        return list(self._derived.archived_applications)

    @property
    def archived_count(self) -> int:
        return self._derived.archived_count

    def get_application(self, application_id: int) -> Optional[JobApplication]:
        return next((a for a in self._applications if a.id == application_id), None)

    def applications_with_status(self, status: JobStatus) -> List[JobApplication]:
        """Applications in one board column, in list order."""
        status = JobStatus.parse(status)
        return [a for a in self._applications if a.status == status]

    def _commit(self, applications: Iterable[JobApplication]) -> None:
        self._applications = list(applications)
        self._derived = calculate_derived_state(self._applications)

    def _update_matching(self, application_id: int,
                         change: Callable[[JobApplication], JobApplication]) -> None:
        self._commit(change(a) if a.id == application_id else a for a in self._applications)

    # Remote synchronisation
    async def fetch_applications(self) -> bool:
        """Replace the cache with the authoritative list, retrying with backoff."""
        self._ensure_open()
        self._fetches_in_flight += 1
        self.loading = True
        try:
            applications = await retry_async(self._load, self.retry_policy, sleep=self._sleep)
        except Exception as e:
            logger.error(f"Failed to fetch applications: {e}", exc_info=True)
            if self._open:
                self.notifier.error(MESSAGES["fetch"][1])
            return False
        finally:
            self._fetches_in_flight -= 1
            self.loading = self._open and self._fetches_in_flight > 0

        if not self._open:
            logger.info("Store closed during fetch, discarding result")
            return False
        self._commit(self._without_duplicates(applications))
        logger.info(f"Fetched {len(self._applications)} applications")
        return True

    async def _load(self) -> List[JobApplication]:
        applications = await self.remote.list_applications()
        if applications is None:
            raise TransientRemoteFailure("No applications found")
        return applications

    @staticmethod
    def _without_duplicates(applications: Iterable[JobApplication]) -> List[JobApplication]:
        seen = set()
        unique = []
        for application in applications:
            if application.id is not None and application.id in seen:
                logger.warning(f"Dropping duplicate application id {application.id} from fetched list",
                               application_id=application.id)
                continue
            seen.add(application.id)
            unique.append(application)
        return unique

    async def _sync(self, action: str, remote_call: Callable[[], Awaitable[Any]],
                    application_id: Optional[int] = None,
                    on_success: Optional[Callable[[Any], None]] = None) -> bool:
        success_message, failure_message = MESSAGES[action]
        try:
            result = await remote_call()
        except Exception as e:
            logger.error(f"{failure_message}: {e}", exc_info=True,
                         action=action, application_id=application_id)
            if not self._open:
                logger.info(f"Store closed during {action}, skipping re-fetch", action=action)
                return False
            self.notifier.error(failure_message)
            await self.fetch_applications()
            return False

        if on_success is not None and self._open:
            on_success(result)
        self.notifier.success(success_message)
        return True

    def _reject(self, action: str, error: ValidationFailure) -> bool:
        logger.warning(f"Rejected {action}: {error}", action=action)
        self.notifier.error(MESSAGES[action][1])
        return False

    # Mutations
    async def add_application(self, draft: JobApplication) -> bool:
        """Append a draft, then create it remotely and adopt the stored record."""
        self._ensure_open()
        try:
            if not isinstance(draft, JobApplication):
                raise ValidationFailure("Draft must be a JobApplication")
            if draft.id is not None:
                _validate_id(draft.id)
                if self.get_application(draft.id) is not None:
                    raise ValidationFailure(f"Duplicate application ID: {draft.id}")
            if draft.is_archived:
                raise ValidationFailure("New applications cannot start archived")
        except ValidationFailure as e:
            return self._reject("add", e)

        draft = draft.copy()
        self._commit([*self._applications, draft])

        def adopt(created: Optional[JobApplication]) -> None:
            if created is not None:
                self._commit(created if a is draft else a for a in self._applications)

        return await self._sync("add", lambda: self.remote.create_application(draft),
                                application_id=draft.id, on_success=adopt)

    async def archive_application(self, application_id: int) -> bool:
        self._ensure_open()
        try:
            _validate_id(application_id)
        except ValidationFailure as e:
            return self._reject("archive", e)

        self._update_matching(application_id, JobApplication.archived)
        return await self._sync("archive", lambda: self.remote.archive_application(application_id),
                                application_id=application_id)

    async def restore_application(self, application_id: int) -> bool:
        self._ensure_open()
        try:
            _validate_id(application_id)
        except ValidationFailure as e:
            return self._reject("restore", e)

        self._update_matching(application_id, JobApplication.restored)
        return await self._sync("restore", lambda: self.remote.restore_application(application_id),
                                application_id=application_id)

    async def delete_application(self, application_id: int) -> bool:
        self._ensure_open()
        try:
            _validate_id(application_id)
        except ValidationFailure as e:
            return self._reject("delete", e)

        self._commit(a for a in self._applications if a.id != application_id)
        return await self._sync("delete", lambda: self.remote.delete_application(application_id),
                                application_id=application_id)

    async def move_application(self, application_id: int, to: JobStatus) -> bool:
        self._ensure_open()
        try:
            _validate_id(application_id)
            to = JobStatus.parse(to)
            if to == JobStatus.ARCHIVED:
                raise ValidationFailure("Use archive to move an application to the archive")
        except ValidationFailure as e:
            return self._reject("move", e)

        self._update_matching(application_id, lambda a: a.moved(to))
        return await self._sync("move", lambda: self.remote.move_application(application_id, to),
                                application_id=application_id)

    async def set_interview_date(self, application_id: int, interview_date: datetime,
                                 send_email: bool = False) -> bool:
        self._ensure_open()
        try:
            _validate_id(application_id)
            if not isinstance(interview_date, datetime):
                raise ValidationFailure("Interview date is required")
        except ValidationFailure as e:
            return self._reject("interview_date", e)

        self._update_matching(application_id, lambda a: a.with_interview_date(interview_date))
        return await self._sync(
            "interview_date",
            lambda: self.remote.set_interview_date(application_id, interview_date, send_email),
            application_id=application_id,
        )
