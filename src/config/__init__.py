"""
Configuration module for the Job Application Tracker.

This module provides database management and application configuration.
"""

from .database import DatabaseManager
from .settings import (
    ConfigManager,
    AppConfig,
    ApiConfig,
    SyncConfig,
    DatabaseConfig,
    get_config,
    get_config_manager,
    get_api_config,
    get_sync_config,
    validate_config,
)

__all__ = [
    'DatabaseManager',
    'ConfigManager',
    'AppConfig',
    'ApiConfig',
    'SyncConfig',
    'DatabaseConfig',
    'get_config',
    'get_config_manager',
    'get_api_config',
    'get_sync_config',
    'validate_config',
]
