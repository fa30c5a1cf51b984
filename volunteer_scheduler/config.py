# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite:///./volunteer_scheduler.db"
    secret_key: str = "change-me-in-production"
    app_env: str = "development"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30
    allowed_origins: str = "http://localhost:3000"
    log_level: str = "INFO"

    # Storage
    db_timeout_seconds: int = 5

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 100

    # Reminders are created for confirmed shifts starting within this window
    reminder_window_minutes: int = 30

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


# Create an instance of Settings to be imported across the application
settings = Settings()
