"""
User interface module for the Job Application Tracker.

This module provides the Streamlit board for managing job applications.
"""

# UI components will be imported as needed
# Main entry point is in app.py

__all__ = []
