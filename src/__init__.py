"""
Job Application Tracker

Track job applications across board columns:
- Optimistic client-side store synchronised with the API
- Interview scheduling with same-day clash warnings
- SQLite-backed HTTP API scoped per user session
- Streamlit board and CSV/JSON export
"""

__version__ = "1.0.0"
