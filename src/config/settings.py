"""
Configuration management for the Job Application Tracker.

This module handles loading environment variables and application settings
for the API server, the HTTP client used by the board, and state syncing.
"""

import os
from typing import Dict, Any, Optional, List
from pathlib import Path
from dotenv import load_dotenv
import logging
from dataclasses import dataclass, asdict

logger = logging.getLogger(__name__)

@dataclass
class ApiConfig:
    """Configuration for the HTTP API and its client."""
    base_url: str = "http://localhost:8080"
    host: str = "127.0.0.1"
    port: int = 8080
    session_token: Optional[str] = None
    timeout_seconds: float = 10.0

@dataclass
class SyncConfig:
    """Retry behaviour used when the board fetches applications."""
    fetch_retry_attempts: int = 3
    backoff_seconds: float = 0.5
    backoff_multiplier: float = 2.0
    max_backoff_seconds: float = 30.0

@dataclass
class DatabaseConfig:
    """SQLite persistence configuration."""
    path: str = "data/job_applications.db"

@dataclass
class AppConfig:
    """Main application configuration."""
    log_level: str = "INFO"
    log_to_file: bool = True
    data_dir: str = "data"
    export_dir: str = "data/exports"

    # Component configurations
    api: ApiConfig = None
    sync: SyncConfig = None
    database: DatabaseConfig = None

    def __post_init__(self):
        if self.api is None:
            self.api = ApiConfig()
        if self.sync is None:
            self.sync = SyncConfig()
        if self.database is None:
            self.database = DatabaseConfig()

class ConfigManager:
    """Manages application configuration from environment variables."""

    def __init__(self, env_file: Optional[str] = None):
        """Initialize configuration manager."""
        self.env_file = env_file or ".env"
        self.config = AppConfig()
        self.load_config()

    def load_config(self) -> None:
        """Load configuration from environment variables."""
        # Load .env file if it exists
        if Path(self.env_file).exists():
            load_dotenv(self.env_file)
            logger.info(f"Loaded environment from {self.env_file}")

        # API Configuration
        self.config.api.base_url = os.getenv("TRACKER_API_BASE_URL", "http://localhost:8080").rstrip("/")
        self.config.api.host = os.getenv("TRACKER_API_HOST", "127.0.0.1")
        self.config.api.port = int(os.getenv("TRACKER_API_PORT", "8080"))
        self.config.api.session_token = os.getenv("TRACKER_SESSION_TOKEN") or None
        self.config.api.timeout_seconds = float(os.getenv("TRACKER_TIMEOUT_SECONDS", "10"))

        # Sync Configuration
        self.config.sync.fetch_retry_attempts = int(os.getenv("FETCH_RETRY_ATTEMPTS", "3"))
        self.config.sync.backoff_seconds = float(os.getenv("FETCH_BACKOFF_SECONDS", "0.5"))
        self.config.sync.backoff_multiplier = float(os.getenv("FETCH_BACKOFF_MULTIPLIER", "2.0"))
        self.config.sync.max_backoff_seconds = float(os.getenv("FETCH_MAX_BACKOFF_SECONDS", "30"))

        # App Configuration
        self.config.log_level = os.getenv("LOG_LEVEL", "INFO")
        self.config.log_to_file = os.getenv("LOG_TO_FILE", "true").lower() == "true"
        self.config.data_dir = os.getenv("DATA_DIR", "data")
        self.config.export_dir = os.getenv("EXPORT_DIR", f"{self.config.data_dir}/exports")
        self.config.database.path = os.getenv("DATABASE_PATH", f"{self.config.data_dir}/job_applications.db")

        # Ensure directories exist
        self._ensure_directories()

        logger.info("Configuration loaded successfully")

    def _ensure_directories(self) -> None:
        """Ensure required directories exist."""
        directories = [
            self.config.data_dir,
            self.config.export_dir,
            f"{self.config.data_dir}/logs"
        ]

        for directory in directories:
            Path(directory).mkdir(parents=True, exist_ok=True)

    def get_api_config(self) -> ApiConfig:
        """Get API configuration."""
        return self.config.api

    def get_sync_config(self) -> SyncConfig:
        """Get sync configuration."""
        return self.config.sync

    def get_app_config(self) -> AppConfig:
        """Get full application configuration."""
        return self.config

    def validate_config(self) -> Dict[str, List[str]]:
        """Validate configuration and return any issues."""
        issues = {
            "errors": [],
            "warnings": []
        }

        if not self.config.api.base_url.startswith(("http://", "https://")):
            issues["errors"].append("TRACKER_API_BASE_URL must start with http:// or https://")

        if self.config.sync.fetch_retry_attempts < 1:
            issues["errors"].append("FETCH_RETRY_ATTEMPTS must be at least 1")

        if self.config.api.timeout_seconds <= 0:
            issues["errors"].append("TRACKER_TIMEOUT_SECONDS must be positive")

        if not self.config.api.session_token:
            issues["warnings"].append("No session token configured - the board will be unauthorized")

        if self.config.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            issues["warnings"].append(f"Unknown LOG_LEVEL {self.config.log_level!r} - falling back to INFO")

        return issues

    def mask_sensitive_config(self) -> Dict[str, Any]:
        """Get configuration with sensitive values masked for display."""
        config_dict = asdict(self.config)

        sensitive_keys = ["session_token"]

        def mask_value(obj):
            if isinstance(obj, dict):
                for key, value in obj.items():
                    if key in sensitive_keys and value:
                        obj[key] = f"{value[:8]}..." if len(value) > 8 else "***"
                    elif isinstance(value, dict):
                        mask_value(value)
            return obj

        return mask_value(config_dict)

_config_manager: Optional[ConfigManager] = None

def get_config_manager() -> ConfigManager:
    """Get the shared configuration manager, loading it on first use."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager

def get_config() -> AppConfig:
    """Get the global configuration instance."""
    return get_config_manager().get_app_config()

def get_api_config() -> ApiConfig:
    """Get API configuration."""
    return get_config_manager().get_api_config()

def get_sync_config() -> SyncConfig:
    """Get sync configuration."""
    return get_config_manager().get_sync_config()

def validate_config() -> Dict[str, List[str]]:
    """Validate current configuration."""
    return get_config_manager().validate_config()
