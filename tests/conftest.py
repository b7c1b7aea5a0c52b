"""
Pytest Configuration and Shared Fixtures

Fixtures:
---------
- fake_remote / make_store: in-memory remote service and a store wired to it
- db: temporary SQLite DatabaseManager
- http: aiohttp test client serving the API over the temporary database
- api_session: (user_id, token) for a signed-in user

Notes:
------
- Uses pytest-asyncio for async test support
- Store retries never sleep; requested delays are recorded on ``sleeps``
"""

import asyncio
from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestClient, TestServer

from src.api import create_app
from src.api.base import RemoteApplicationService
from src.config import DatabaseManager
from src.errors import NotFound, TransientRemoteFailure
from src.models import JobApplication, JobStatus
from src.store import ApplicationStore, Notifier
from src.utils import RetryConfig, RetryPolicy


class FakeRemote(RemoteApplicationService):
    """Authoritative in-memory backend with scriptable failures."""

    def __init__(self, applications: Optional[List[JobApplication]] = None):
        self.server: Dict[int, JobApplication] = {a.id: replace(a) for a in applications or []}
        self.next_id = max(self.server, default=0) + 1
        self.calls: List[str] = []
        self.failures: Dict[str, int] = {}
        self.gates: Dict[str, asyncio.Event] = {}
        self.list_override: Optional[List[JobApplication]] = None

    def fail(self, name: str, times: int = 1) -> None:
        self.failures[name] = self.failures.get(name, 0) + times

    def gate(self, name: str) -> asyncio.Event:
        self.gates[name] = asyncio.Event()
        return self.gates[name]

    async def _enter(self, name: str) -> None:
        self.calls.append(name)
        if name in self.gates:
            await self.gates[name].wait()
        if self.failures.get(name):
            self.failures[name] -= 1
            raise TransientRemoteFailure(f"{name} failed")

    def _get(self, application_id: int) -> JobApplication:
        if application_id not in self.server:
            raise NotFound(f"Application {application_id} not found")
        return self.server[application_id]

    async def list_applications(self) -> List[JobApplication]:
        await self._enter("list")
        if self.list_override is not None:
            return [replace(a) for a in self.list_override]
        return [replace(a) for a in self.server.values()]

    async def create_application(self, draft: JobApplication) -> JobApplication:
        await self._enter("create")
        created = replace(draft, id=self.next_id)
        self.next_id += 1
        self.server[created.id] = created
        return replace(created)

    async def archive_application(self, application_id: int) -> None:
        await self._enter("archive")
        self.server[application_id] = self._get(application_id).archived()

    async def restore_application(self, application_id: int) -> None:
        await self._enter("restore")
        self.server[application_id] = self._get(application_id).restored()

    async def move_application(self, application_id: int, status: JobStatus) -> None:
        await self._enter("move")
        self.server[application_id] = self._get(application_id).moved(status)

    async def delete_application(self, application_id: int) -> None:
        await self._enter("delete")
        self._get(application_id)
        del self.server[application_id]

    async def set_interview_date(self, application_id: int, interview_date: datetime,
                                 send_email: bool = False) -> None:
        await self._enter("interview_date")
        self.server[application_id] = self._get(application_id).with_interview_date(interview_date)


@pytest.fixture
def sample_applications():
    return [
        JobApplication(id=1, status=JobStatus.BOOKMARKED, company="Acme", role="Backend Engineer"),
        JobApplication(id=2, status=JobStatus.APPLIED, company="Globex", role="Data Engineer",
                       details={"url": "https://globex.example/jobs/2"}),
        JobApplication(id=3, status=JobStatus.INTERVIEW, company="Initech", role="SRE",
                       interview_date=datetime(2030, 1, 1, 9, 0)),
    ]


@pytest.fixture
def fake_remote(sample_applications):
    return FakeRemote(sample_applications)


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def make_store(sleeps):
    async def fake_sleep(delay):
        sleeps.append(delay)

    def factory(remote: RemoteApplicationService, max_attempts: int = 3) -> ApplicationStore:
        policy = RetryPolicy(RetryConfig(max_attempts=max_attempts, backoff_seconds=0.5,
                                         backoff_multiplier=2.0, max_backoff_seconds=30.0))
        return ApplicationStore(remote, notifier=Notifier(), retry_policy=policy,
                                sleep=fake_sleep).open()

    return factory


@pytest_asyncio.fixture
async def store(make_store, fake_remote):
    store = make_store(fake_remote)
    await store.fetch_applications()
    fake_remote.calls.clear()
    store.notifier.drain()
    yield store
    store.close()


@pytest.fixture
def db(tmp_path):
    return DatabaseManager(str(tmp_path / "test.db"))


@pytest.fixture
def api_session(db):
    user_id = 1
    return user_id, db.create_session(user_id)


@pytest_asyncio.fixture
async def http(db):
    client = TestClient(TestServer(create_app(db)))
    await client.start_server()
    yield client
    await client.close()


@pytest.fixture
def base_url(http):
    return str(http.make_url("/"))
