from __future__ import annotations
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables (and .env)."""

    APP_NAME: str = "Personnel Duty Service"

    # Database
    DATABASE_URL: str = "sqlite:///./personnel.db"
    SQL_ECHO: bool = False

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Logging
    LOG_LEVEL: str = "INFO"

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
