"""
Remote application service interface.

The store talks to persistence only through this interface. The session
identity is held by the implementation, so every call is implicitly scoped
to the signed-in user.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from ..models import JobApplication, JobStatus


class RemoteApplicationService(ABC):
    """Abstract base class for application persistence backends."""

    @abstractmethod
    async def list_applications(self) -> List[JobApplication]:
        """Read all applications of the current user."""
        pass

    @abstractmethod
    async def create_application(self, draft: JobApplication) -> JobApplication:
        """Persist a new application and return it with its assigned id."""
        pass

    @abstractmethod
    async def archive_application(self, application_id: int) -> None:
        pass

    @abstractmethod
    async def restore_application(self, application_id: int) -> None:
        pass

    @abstractmethod
    async def move_application(self, application_id: int, status: JobStatus) -> None:
        pass

    @abstractmethod
    async def delete_application(self, application_id: int) -> None:
        pass

    @abstractmethod
    async def set_interview_date(self, application_id: int, interview_date: datetime,
                                 send_email: bool = False) -> None:
        pass
