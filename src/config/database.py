"""
Database models and schema for the Job Application Tracker.

This module defines the SQLite database structure backing the remote
application service: per-user job applications and session tokens.
Every read and write is scoped to the owning user.
"""

import sqlite3
import json
import secrets
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Iterator, List, Optional, Any
from pathlib import Path
import logging

from ..errors import NotFound, ValidationFailure
from ..models import JobApplication, JobStatus, parse_datetime

logger = logging.getLogger(__name__)

_COLUMNS = "id, status, previous_status, interview_date, company, role, details"

class DatabaseManager:
    """Manages SQLite database operations for job applications."""

    def __init__(self, db_path: str = "data/job_applications.db"):
        """Initialize database manager with path to SQLite database."""
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.init_database()

    @contextmanager
    def get_connection(self) -> Iterator[sqlite3.Connection]:
        """Open a connection with dict-like rows; commit or roll back, then close."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def init_database(self) -> None:
        """Initialize database with all required tables."""
        with self.get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS job_applications (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id INTEGER NOT NULL,
                    status TEXT NOT NULL DEFAULT 'bookmarked',
                    previous_status TEXT,
                    interview_date TEXT,
                    reminder_email BOOLEAN DEFAULT FALSE,
                    company TEXT,
                    role TEXT,
                    details TEXT,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            # Session tokens issued to authenticated users
            conn.execute("""
                CREATE TABLE IF NOT EXISTS sessions (
                    token TEXT PRIMARY KEY,
                    user_id INTEGER NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            conn.execute("CREATE INDEX IF NOT EXISTS idx_applications_user ON job_applications(user_id)")
            conn.execute("CREATE INDEX IF NOT EXISTS idx_applications_status ON job_applications(status)")

            conn.commit()
            logger.info("Database initialized successfully")

    @staticmethod
    def _row_to_application(row: sqlite3.Row) -> JobApplication:
        return JobApplication(
            id=row["id"],
            status=JobStatus(row["status"]),
            previous_status=JobStatus(row["previous_status"]) if row["previous_status"] else None,
            interview_date=parse_datetime(row["interview_date"]),
            company=row["company"] or "",
            role=row["role"] or "",
            details=json.loads(row["details"]) if row["details"] else {},
        )

    # Application operations
    def list_applications(self, user_id: int) -> List[JobApplication]:
        """Get all applications owned by a user, oldest first."""
        with self.get_connection() as conn:
            cursor = conn.execute(f"""
                SELECT {_COLUMNS} FROM job_applications
                WHERE user_id = ?
                ORDER BY id ASC
            """, (user_id,))
            return [self._row_to_application(row) for row in cursor.fetchall()]

    def get_application(self, user_id: int, application_id: int) -> JobApplication:
        """Get one application, raising NotFound if absent or not owned."""
        with self.get_connection() as conn:
            cursor = conn.execute(f"""
                SELECT {_COLUMNS} FROM job_applications
                WHERE id = ? AND user_id = ?
            """, (application_id, user_id))
            row = cursor.fetchone()
        if row is None:
            raise NotFound(f"Application {application_id} not found")
        return self._row_to_application(row)

    def create_application(self, user_id: int, application: JobApplication) -> JobApplication:
        """Insert a new application; the database assigns its id."""
        if application.is_archived:
            raise ValidationFailure("New applications cannot start archived")

        with self.get_connection() as conn:
            cursor = conn.execute("""
                INSERT INTO job_applications
                (user_id, status, interview_date, company, role, details)
                VALUES (?, ?, ?, ?, ?, ?)
            """, (
                user_id,
                application.status.value,
                application.interview_date.isoformat() if application.interview_date else None,
                application.company,
                application.role,
                json.dumps(application.details),
            ))
            new_id = cursor.lastrowid

        logger.info(f"Created application {new_id} for user {user_id}")
        return self.get_application(user_id, new_id)

    def update_application_status(self, user_id: int, application_id: int,
                                  status: JobStatus, **extra: Any) -> None:
        """Set an application's status plus any extra columns."""
        fields = {"status": JobStatus.parse(status).value, **extra}
        self._update(user_id, application_id, **fields)

    def move_application(self, user_id: int, application_id: int, status: JobStatus) -> None:
        """Move an application to another board column."""
        status = JobStatus.parse(status)
        if status == JobStatus.ARCHIVED:
            raise ValidationFailure("Use archive to move an application to the archive")
        self.update_application_status(user_id, application_id, status, previous_status=None)

    def archive_application(self, user_id: int, application_id: int) -> None:
        """Archive an application, remembering the column it came from."""
        current = self.get_application(user_id, application_id)
        if current.is_archived:
            return
        self.update_application_status(
            user_id, application_id, JobStatus.ARCHIVED,
            previous_status=current.status.value,
        )

    def restore_application(self, user_id: int, application_id: int) -> None:
        """Restore an archived application to its previous column."""
        current = self.get_application(user_id, application_id)
        restored = current.restored()
        self.update_application_status(
            user_id, application_id, restored.status, previous_status=None,
        )

    def set_interview_date(self, user_id: int, application_id: int,
                           interview_date: datetime, send_email: bool = False) -> None:
        """Schedule an interview and record whether a reminder email is wanted."""
        self._update(
            user_id, application_id,
            interview_date=interview_date.isoformat(),
            reminder_email=bool(send_email),
        )

    def delete_application(self, user_id: int, application_id: int) -> None:
        """Delete an application owned by the user."""
        with self.get_connection() as conn:
            cursor = conn.execute("""
                DELETE FROM job_applications
                WHERE id = ? AND user_id = ?
            """, (application_id, user_id))
            if cursor.rowcount == 0:
                raise NotFound(f"Application {application_id} not found")
        logger.info(f"Deleted application {application_id} for user {user_id}")

    def _update(self, user_id: int, application_id: int, **kwargs) -> None:
        """Update application columns, raising NotFound if nothing matched."""
        # Always update the updated_at timestamp
        kwargs['updated_at'] = datetime.now().isoformat()

        fields = ', '.join([f"{k} = ?" for k in kwargs.keys()])
        values = list(kwargs.values()) + [application_id, user_id]

        with self.get_connection() as conn:
            cursor = conn.execute(f"""
                UPDATE job_applications
                SET {fields}
                WHERE id = ? AND user_id = ?
            """, values)
            if cursor.rowcount == 0:
                raise NotFound(f"Application {application_id} not found")

    # Session operations
    def create_session(self, user_id: int) -> str:
        """Issue a new session token for a user."""
        token = secrets.token_urlsafe(32)
        with self.get_connection() as conn:
            conn.execute("""
                INSERT INTO sessions (token, user_id)
                VALUES (?, ?)
            """, (token, user_id))
        return token

    def get_session_user(self, token: str) -> Optional[int]:
        """Resolve a session token to its user id."""
        if not token:
            return None
        with self.get_connection() as conn:
            cursor = conn.execute("SELECT user_id FROM sessions WHERE token = ?", (token,))
            row = cursor.fetchone()
            return row["user_id"] if row else None

    def delete_session(self, token: str) -> None:
        """Revoke a session token."""
        with self.get_connection() as conn:
            conn.execute("DELETE FROM sessions WHERE token = ?", (token,))

    # Analytics and reporting
    def get_stats(self, user_id: int) -> Dict[str, Any]:
        """Get application counts for a user."""
        with self.get_connection() as conn:
            stats = {}

            cursor = conn.execute("""
                SELECT status, COUNT(*) as count FROM job_applications
                WHERE user_id = ?
                GROUP BY status
            """, (user_id,))
            stats['applications_by_status'] = {row['status']: row['count'] for row in cursor.fetchall()}

            cursor = conn.execute("""
                SELECT COUNT(*) as count FROM job_applications
                WHERE user_id = ? AND created_at > datetime('now', '-7 days')
            """, (user_id,))
            stats['applications_last_week'] = cursor.fetchone()['count']

            return stats
