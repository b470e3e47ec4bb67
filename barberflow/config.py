# barberflow/config.py

import os
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Which .env file to read (tests point this somewhere empty)
env_file_path = os.getenv("ENV_FILE", ".env")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=env_file_path,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    DATABASE_URL: str = "sqlite:///./barberflow.db"
    SQL_ECHO: bool = False
    SEED_DEFAULTS: bool = True

    # Auth
    SECRET_KEY: str = "change-me-later"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Scheduling
    SLOT_MINUTES: int = 15

    # Logging
    LOG_LEVEL: str = "INFO"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide settings, creating them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


settings = get_settings()
