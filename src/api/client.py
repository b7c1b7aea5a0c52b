"""
HTTP client for the application API.

Implements RemoteApplicationService over aiohttp. Non-success responses and
transport errors are raised as tracker errors so the store can reconcile.
"""

import asyncio
from datetime import datetime
from typing import Any, Dict, List, Optional

import aiohttp

from ..errors import TransientRemoteFailure, error_for_status
from ..models import JobApplication, JobStatus
from ..utils import get_logger
from .base import RemoteApplicationService

logger = get_logger(__name__)


class ApplicationsClient(RemoteApplicationService):
    """Talks to the tracker API on behalf of one session."""

    def __init__(self, base_url: str, session_token: Optional[str] = None,
                 timeout_seconds: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.session_token = session_token
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self.headers = {"Content-Type": "application/json"}
        if session_token:
            self.headers["Authorization"] = f"Bearer {session_token}"

    async def _request(self, method: str, path: str, *,
                       application_id: Optional[int] = None,
                       payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        params = {"applicationId": str(application_id)} if application_id is not None else None
        url = f"{self.base_url}{path}"
        try:
            async with aiohttp.ClientSession(timeout=self.timeout, headers=self.headers) as session:
                async with session.request(method, url, params=params, json=payload) as response:
                    try:
                        data = await response.json(content_type=None)
                    except ValueError:
                        data = None
                    if response.status != 200:
                        message = (data or {}).get("message", "") if isinstance(data, dict) else ""
                        logger.warning(f"{method} {path} failed with {response.status}: {message}",
                                       application_id=application_id)
                        raise error_for_status(response.status, message)
                    return data if isinstance(data, dict) else {}
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransientRemoteFailure(f"{method} {path} failed: {e}") from e

    async def list_applications(self) -> List[JobApplication]:
        data = await self._request("GET", "/api/applications")
        applications = data.get("applications")
        if applications is None:
            raise TransientRemoteFailure("No applications found")
        return [JobApplication.from_dict(item) for item in applications]

    async def create_application(self, draft: JobApplication) -> JobApplication:
        data = await self._request("POST", "/api/new-application", payload=draft.to_dict())
        created = data.get("application")
        if not created:
            raise TransientRemoteFailure("Created application missing from response")
        return JobApplication.from_dict(created)

    async def archive_application(self, application_id: int) -> None:
        await self._request("PATCH", "/api/archive-application", application_id=application_id)

    async def restore_application(self, application_id: int) -> None:
        await self._request("POST", "/api/restore", application_id=application_id)

    async def move_application(self, application_id: int, status: JobStatus) -> None:
        status = JobStatus.parse(status)
        await self._request("PATCH", f"/api/move/{status.value}", application_id=application_id)

    async def delete_application(self, application_id: int) -> None:
        await self._request("DELETE", "/api/delete-application", application_id=application_id)

    async def set_interview_date(self, application_id: int, interview_date: datetime,
                                 send_email: bool = False) -> None:
        await self._request(
            "PATCH", "/api/interview-date",
            application_id=application_id,
            payload={"interviewDate": interview_date.isoformat(), "sendEmail": bool(send_email)},
        )
