"""
Integration Tests for the HTTP API and ApplicationsClient

Runs the aiohttp application in-process against a temporary database.
"""

import asyncio
from datetime import datetime

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer, unused_port

from src.api import ApplicationsClient
from src.errors import NotFound, TransientRemoteFailure, Unauthorized, ValidationFailure
from src.models import JobApplication, JobStatus
from src.store import ApplicationStore, Notifier


def auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(base_url, api_session):
    _, token = api_session
    return ApplicationsClient(base_url, session_token=token)


# Raw routes
@pytest.mark.asyncio
async def test_list_requires_session(http):
    response = await http.get("/api/applications")
    assert response.status == 401
    body = await response.json()
    assert body == {"success": False, "message": "Unauthorized"}


@pytest.mark.asyncio
async def test_unknown_token_is_unauthorized(http):
    response = await http.get("/api/applications", headers=auth("not-a-token"))
    assert response.status == 401


@pytest.mark.asyncio
@pytest.mark.parametrize("raw_id", ["", "abc", "0", "-4", "1.5"])
async def test_bad_application_id_checked_before_session(http, raw_id):
    response = await http.patch("/api/archive-application", params={"applicationId": raw_id})
    assert response.status == 400
    assert (await response.json())["message"] == "Invalid application ID"


@pytest.mark.asyncio
async def test_move_rejects_unknown_and_archived_status(http, api_session, db):
    user_id, token = api_session
    created = db.create_application(user_id, JobApplication(company="Acme"))

    for status in ("hired", "archived"):
        response = await http.patch(f"/api/move/{status}",
                                    params={"applicationId": str(created.id)}, headers=auth(token))
        assert response.status == 400
    assert db.get_application(user_id, created.id).status == JobStatus.BOOKMARKED


@pytest.mark.asyncio
async def test_new_application_ignores_client_supplied_id(http, api_session):
    _, token = api_session
    response = await http.post("/api/new-application", headers=auth(token),
                               json={"id": 500, "company": "Acme", "status": "applied",
                                     "previousStatus": "offer", "url": "https://acme.example"})
    assert response.status == 200
    body = await response.json()
    assert body["success"] is True
    assert body["application"]["id"] != 500
    assert body["application"]["previousStatus"] is None
    assert body["application"]["url"] == "https://acme.example"


@pytest.mark.asyncio
async def test_new_application_rejects_non_object_body(http, api_session):
    _, token = api_session
    response = await http.post("/api/new-application", headers=auth(token), json=[1, 2])
    assert response.status == 400


@pytest.mark.asyncio
async def test_interview_date_requires_date(http, api_session, db):
    user_id, token = api_session
    created = db.create_application(user_id, JobApplication(status=JobStatus.INTERVIEW))
    response = await http.patch("/api/interview-date", params={"applicationId": str(created.id)},
                                headers=auth(token), json={"sendEmail": True})
    assert response.status == 400


# Client
@pytest.mark.asyncio
async def test_client_create_and_list(client):
    created = await client.create_application(
        JobApplication(company="Acme", role="Engineer", details={"notes": "referral"})
    )
    assert created.id is not None
    assert created.details == {"notes": "referral"}

    listed = await client.list_applications()
    assert listed == [created]


@pytest.mark.asyncio
async def test_client_status_changes(client, db, api_session):
    user_id, _ = api_session
    created = await client.create_application(JobApplication(company="Acme", status=JobStatus.APPLIED))

    await client.archive_application(created.id)
    archived = db.get_application(user_id, created.id)
    assert archived.status == JobStatus.ARCHIVED
    assert archived.previous_status == JobStatus.APPLIED

    await client.restore_application(created.id)
    assert db.get_application(user_id, created.id).status == JobStatus.APPLIED

    await client.move_application(created.id, JobStatus.OFFER)
    assert db.get_application(user_id, created.id).status == JobStatus.OFFER

    when = datetime(2030, 2, 3, 11, 0)
    await client.set_interview_date(created.id, when, send_email=True)
    assert db.get_application(user_id, created.id).interview_date == when

    await client.delete_application(created.id)
    assert db.list_applications(user_id) == []


@pytest.mark.asyncio
async def test_client_maps_error_statuses(client, base_url, db):
    with pytest.raises(NotFound):
        await client.delete_application(12345)

    with pytest.raises(ValidationFailure):
        await client.move_application(1, JobStatus.ARCHIVED)

    anonymous = ApplicationsClient(base_url)
    with pytest.raises(Unauthorized):
        await anonymous.list_applications()


@pytest.mark.asyncio
async def test_records_of_other_users_are_not_found(client, base_url, db):
    theirs = db.create_application(2, JobApplication(company="Theirs"))

    with pytest.raises(NotFound):
        await client.archive_application(theirs.id)
    assert await client.list_applications() == []
    assert db.get_application(2, theirs.id).status == JobStatus.BOOKMARKED


# End to end
@pytest.mark.asyncio
async def test_store_over_http(client, db, api_session):
    user_id, _ = api_session
    db.create_application(user_id, JobApplication(company="Acme"))

    async with ApplicationStore(client, notifier=Notifier()) as store:
        assert await store.fetch_applications() is True
        assert [a.company for a in store.applications] == ["Acme"]

        assert await store.add_application(JobApplication(company="Globex")) is True
        globex = store.applications[-1]
        assert globex.id is not None

        assert await store.archive_application(globex.id) is True
        assert store.archived_count == 1

        # Server rejects the delete; the re-fetch restores the authoritative state
        assert await store.delete_application(globex.id + 100) is False
        assert [a.id for a in store.applications] == [a.id for a in db.list_applications(user_id)]
        assert store.archived_count == 1


# Transport failures
@pytest_asyncio.fixture
async def unreliable_server():
    async def slow(request):
        await asyncio.sleep(0.5)
        return web.json_response({"success": True, "message": "OK", "applications": []})

    async def unavailable(request):
        return web.json_response({"success": False, "message": "down"}, status=503)

    async def created_without_record(request):
        return web.json_response({"success": True, "message": "OK"})

    app = web.Application()
    app.add_routes([
        web.get("/api/applications", slow),
        web.patch("/api/archive-application", unavailable),
        web.post("/api/new-application", created_without_record),
    ])
    server = TestServer(app)
    await server.start_server()
    yield str(server.make_url("/"))
    await server.close()


@pytest.mark.asyncio
async def test_connection_refused_is_transient():
    client = ApplicationsClient(f"http://127.0.0.1:{unused_port()}", session_token="token")
    with pytest.raises(TransientRemoteFailure):
        await client.list_applications()


@pytest.mark.asyncio
async def test_timeout_is_transient(unreliable_server):
    client = ApplicationsClient(unreliable_server, session_token="token", timeout_seconds=0.05)
    with pytest.raises(TransientRemoteFailure):
        await client.list_applications()


@pytest.mark.asyncio
async def test_server_errors_are_transient(unreliable_server):
    client = ApplicationsClient(unreliable_server, session_token="token")
    with pytest.raises(TransientRemoteFailure) as excinfo:
        await client.archive_application(1)
    assert excinfo.value.status_code == 503


@pytest.mark.asyncio
async def test_create_without_returned_record_is_transient(unreliable_server):
    client = ApplicationsClient(unreliable_server, session_token="token")
    with pytest.raises(TransientRemoteFailure):
        await client.create_application(JobApplication(company="Acme"))


@pytest.mark.asyncio
async def test_unexpected_server_error_returns_generic_500(http, client, db, api_session, monkeypatch):
    _, token = api_session

    def broken(user_id):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(db, "list_applications", broken)

    response = await http.get("/api/applications", headers=auth(token))
    assert response.status == 500
    assert await response.json() == {"success": False, "message": "Server error. Please try again later."}

    with pytest.raises(TransientRemoteFailure) as excinfo:
        await client.list_applications()
    assert excinfo.value.status_code == 500
