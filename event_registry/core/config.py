"""
Application configuration using pydantic-settings.
All config is loaded from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Event Registry API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "auto"  # auto, json, console

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # Registry rules
    MIN_CAPACITY: int = 1
    MAX_CAPACITY: int = 1000

    # Notifications
    NOTIFICATION_HISTORY_SIZE: int = 50

    # Load demo events on startup
    SEED_DEMO_DATA: bool = False

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
