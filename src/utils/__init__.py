"""
Utility modules for the Job Application Tracker.

This package provides logging and retry helpers.
"""

from .logger import (
    setup_logging,
    get_logger,
    get_store_logger,
    get_api_logger,
    get_ui_logger,
    TrackerLogger,
)

from .retry import (
    RetryConfig,
    RetryPolicy,
    retry_async,
)

__all__ = [
    # Logging
    'setup_logging',
    'get_logger',
    'get_store_logger',
    'get_api_logger',
    'get_ui_logger',
    'TrackerLogger',

    # Retry
    'RetryConfig',
    'RetryPolicy',
    'retry_async',
]
