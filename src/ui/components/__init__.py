"""
UI Components module for the Job Application Tracker.

This module contains the Streamlit components for the board.
"""

from .board import BoardTab

__all__ = [
    'BoardTab',
]
