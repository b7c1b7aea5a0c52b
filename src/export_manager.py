"""
Export Manager Module

This module exports a snapshot of the tracked applications as CSV or JSON,
either to a file in the export directory or as bytes for a download button.
"""

from pathlib import Path
from typing import Iterable, List, Optional
from datetime import datetime

import pandas as pd

from .errors import ValidationFailure
from .models import JobApplication, STATUS_LABELS
from .utils import get_logger

logger = get_logger(__name__)

EXPORT_COLUMNS = ["id", "company", "role", "status", "status_label",
                  "previous_status", "interview_date"]
EXPORT_FORMATS = ("csv", "json")

class ApplicationExporter:
    """Turns application snapshots into tabular exports."""

    def __init__(self, export_dir: str = "data/exports"):
        self.export_base_dir = Path(export_dir)

    def to_dataframe(self, applications: Iterable[JobApplication]) -> pd.DataFrame:
        """Build one row per application; extra fields become extra columns."""
        rows = []
        for application in applications:
            row = {
                "id": application.id,
                "company": application.company,
                "role": application.role,
                "status": application.status.value,
                "status_label": STATUS_LABELS[application.status],
                "previous_status": application.previous_status.value if application.previous_status else None,
                "interview_date": application.interview_date.isoformat() if application.interview_date else None,
            }
            for key, value in application.details.items():
                row.setdefault(key, value)
            rows.append(row)

        frame = pd.DataFrame(rows)
        if frame.empty:
            return pd.DataFrame(columns=EXPORT_COLUMNS)
        extra_columns: List[str] = [c for c in frame.columns if c not in EXPORT_COLUMNS]
        return frame[EXPORT_COLUMNS + extra_columns]

    def render(self, applications: Iterable[JobApplication], export_format: str = "csv") -> bytes:
        """Serialize applications into the requested format."""
        frame = self.to_dataframe(applications)
        if export_format == "csv":
            return frame.to_csv(index=False).encode("utf-8")
        if export_format == "json":
            return frame.to_json(orient="records", indent=2).encode("utf-8")
        raise ValidationFailure(f"Unsupported export format: {export_format}")

    def export(self, applications: Iterable[JobApplication], export_format: str = "csv",
               filename: Optional[str] = None) -> Path:
        """Write an export file and return its path."""
        payload = self.render(applications, export_format)

        export_timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.export_base_dir.mkdir(parents=True, exist_ok=True)
        path = self.export_base_dir / (filename or f"job_applications_{export_timestamp}.{export_format}")
        path.write_bytes(payload)

        logger.info(f"Exported applications to {path}")
        return path
