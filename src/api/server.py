"""
HTTP API for job applications.

Routes mirror the operations the board performs. Each request is checked in
the same order: application id, then session, then the database call.
Responses are JSON objects with ``success`` and ``message`` keys.

    GET    /api/applications
    POST   /api/new-application
    PATCH  /api/archive-application?applicationId=
    POST   /api/restore?applicationId=
    DELETE /api/delete-application?applicationId=
    PATCH  /api/move/{status}?applicationId=
    PATCH  /api/interview-date?applicationId=
"""

from dataclasses import replace
from typing import Any, Dict

from aiohttp import web

from ..config.database import DatabaseManager
from ..errors import TrackerError, Unauthorized, ValidationFailure
from ..models import JobApplication, JobStatus, parse_datetime
from ..utils import get_api_logger

logger = get_api_logger()

DB_KEY = web.AppKey("db", DatabaseManager)


def _response(message: str, status: int = 200, **extra: Any) -> web.Response:
    return web.json_response({"success": status == 200, "message": message, **extra}, status=status)


def _application_id(request: web.Request) -> int:
    raw = request.query.get("applicationId", "")
    if not raw.isdigit() or int(raw) <= 0:
        raise ValidationFailure("Invalid application ID")
    return int(raw)


def _require_user(request: web.Request) -> int:
    header = request.headers.get("Authorization", "")
    token = header[len("Bearer "):].strip() if header.startswith("Bearer ") else ""
    user_id = request.app[DB_KEY].get_session_user(token)
    if user_id is None:
        raise Unauthorized()
    return user_id


async def _json_body(request: web.Request) -> Dict[str, Any]:
    try:
        body = await request.json()
    except ValueError:
        raise ValidationFailure("Invalid request body") from None
    if not isinstance(body, dict):
        raise ValidationFailure("Invalid request body")
    return body


@web.middleware
async def error_middleware(request: web.Request, handler):
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except ValidationFailure as e:
        return _response(str(e), status=e.status_code)
    except TrackerError as e:
        if e.status_code >= 500:
            logger.error(f"{request.method} {request.path} failed: {e}", exc_info=True)
        return _response(e.user_message, status=e.status_code)
    except Exception as e:
        logger.error(f"{request.method} {request.path} failed: {e}", exc_info=True)
        return _response("Server error. Please try again later.", status=500)


async def list_applications(request: web.Request) -> web.Response:
    user_id = _require_user(request)
    applications = request.app[DB_KEY].list_applications(user_id)
    return _response("OK", applications=[a.to_dict() for a in applications])


async def new_application(request: web.Request) -> web.Response:
    body = await _json_body(request)
    user_id = _require_user(request)
    # The database assigns the id
    draft = replace(JobApplication.from_dict({**body, "id": None}), previous_status=None)
    created = request.app[DB_KEY].create_application(user_id, draft)
    return _response("Application created successfully", application=created.to_dict())


async def archive_application(request: web.Request) -> web.Response:
    application_id = _application_id(request)
    user_id = _require_user(request)
    request.app[DB_KEY].archive_application(user_id, application_id)
    return _response("Application archived successfully")


async def restore_application(request: web.Request) -> web.Response:
    application_id = _application_id(request)
    user_id = _require_user(request)
    request.app[DB_KEY].restore_application(user_id, application_id)
    return _response("Application restored successfully")


async def delete_application(request: web.Request) -> web.Response:
    application_id = _application_id(request)
    user_id = _require_user(request)
    request.app[DB_KEY].delete_application(user_id, application_id)
    return _response("Application deleted successfully")


async def move_application(request: web.Request) -> web.Response:
    application_id = _application_id(request)
    status = JobStatus.parse(request.match_info["status"])
    if status == JobStatus.ARCHIVED:
        raise ValidationFailure("Use archive to move an application to the archive")
    user_id = _require_user(request)
    request.app[DB_KEY].move_application(user_id, application_id, status)
    return _response(f"Application moved to {status.value} status")


async def set_interview_date(request: web.Request) -> web.Response:
    application_id = _application_id(request)
    body = await _json_body(request)
    interview_date = parse_datetime(body.get("interviewDate"))
    if interview_date is None:
        raise ValidationFailure("Interview date is required")
    user_id = _require_user(request)
    request.app[DB_KEY].set_interview_date(
        user_id, application_id, interview_date, bool(body.get("sendEmail", False)),
    )
    return _response("Interview date set successfully")


def create_app(db: DatabaseManager) -> web.Application:
    """Build the API application around a database."""
    app = web.Application(middlewares=[error_middleware])
    app[DB_KEY] = db
    app.add_routes([
        web.get("/api/applications", list_applications),
        web.post("/api/new-application", new_application),
        web.patch("/api/archive-application", archive_application),
        web.post("/api/restore", restore_application),
        web.delete("/api/delete-application", delete_application),
        web.patch("/api/move/{status}", move_application),
        web.patch("/api/interview-date", set_interview_date),
    ])
    return app


def run_server(db: DatabaseManager, host: str = "127.0.0.1", port: int = 8080) -> None:
    logger.info(f"Starting API server on {host}:{port}")
    web.run_app(create_app(db), host=host, port=port, print=None)
