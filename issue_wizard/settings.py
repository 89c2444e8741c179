"""Application configuration management."""

import os
from dataclasses import dataclass, field
from typing import List, Optional
from functools import lru_cache

from dotenv import load_dotenv


@dataclass
class Settings:
    """Application settings loaded from environment."""

    # App
    app_name: str = "Issue Wizard"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"  # development, staging, production

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: List[str] = field(default_factory=lambda: ["http://localhost:8000"])

    # Tracker
    tracker_base_url: str = ""
    tracker_username: Optional[str] = None
    tracker_api_token: Optional[str] = None
    tracker_timeout_seconds: int = 30

    # Field metadata cache
    field_metadata_ttl_seconds: int = 600

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"  # json or text

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.field_metadata_ttl_seconds <= 0:
            raise ValueError("FIELD_METADATA_TTL_SECONDS must be positive")
        if self.is_production and not self.tracker_configured:
            raise ValueError(
                "TRACKER_BASE_URL, TRACKER_USERNAME and TRACKER_API_TOKEN are required in production"
            )

    @property
    def tracker_configured(self) -> bool:
        """Check if tracker credentials are present."""
        return bool(self.tracker_base_url and self.tracker_username and self.tracker_api_token)

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"


def load_settings_from_env() -> Settings:
    """Load settings from environment variables (and a .env file, if any)."""
    load_dotenv()

    def get_bool(key: str, default: bool = False) -> bool:
        value = os.getenv(key, str(default)).lower()
        return value in ("true", "1", "yes")

    def get_int(key: str, default: int) -> int:
        return int(os.getenv(key, str(default)))

    def get_list(key: str, default: List[str]) -> List[str]:
        value = os.getenv(key)
        if value:
            return [item.strip() for item in value.split(",")]
        return default

    return Settings(
        # App
        app_name=os.getenv("APP_NAME", "Issue Wizard"),
        app_version=os.getenv("APP_VERSION", "0.1.0"),
        debug=get_bool("DEBUG", False),
        environment=os.getenv("ENVIRONMENT", "development"),

        # Server
        host=os.getenv("HOST", "0.0.0.0"),
        port=get_int("PORT", 8000),
        allowed_origins=get_list("ALLOWED_ORIGINS", ["http://localhost:8000"]),

        # Tracker
        tracker_base_url=os.getenv("TRACKER_BASE_URL", ""),
        tracker_username=os.getenv("TRACKER_USERNAME"),
        tracker_api_token=os.getenv("TRACKER_API_TOKEN"),
        tracker_timeout_seconds=get_int("TRACKER_TIMEOUT_SECONDS", 30),

        # Field metadata cache
        field_metadata_ttl_seconds=get_int("FIELD_METADATA_TTL_SECONDS", 600),

        # Logging
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_format=os.getenv("LOG_FORMAT", "text"),
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings_from_env()


def clear_settings_cache() -> None:
    """Clear settings cache (for testing)."""
    get_settings.cache_clear()
