# File: app/core/config.py

import os
from functools import lru_cache
from typing import List

from pydantic import BaseModel, field_validator


class Settings(BaseModel):
    # Run validators on the env-derived defaults below as well
    model_config = {"validate_default": True}

    # Basic app info
    PROJECT_NAME: str = "Roadmap Tracker API"
    VERSION: str = "0.1.0"

    api_v1_prefix: str = "/api/v1"
    debug: bool = os.getenv("DEBUG", "false").lower() in ("1", "true", "yes")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS (the Vite dev server by default)
    backend_cors_origins: List[str] = os.getenv(
        "BACKEND_CORS_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173",
    )

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./roadmaps.db")

    # Sessions
    secret_key: str = os.getenv("SECRET_KEY", "CHANGE_ME_IN_PRODUCTION")
    session_cookie_name: str = "roadmap_session"
    session_max_age_seconds: int = 60 * 60 * 24 * 7  # 7 days
    session_cookie_secure: bool = os.getenv("SESSION_COOKIE_SECURE", "false").lower() in ("1", "true", "yes")

    @field_validator("backend_cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, list):
            return v
        return []


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
