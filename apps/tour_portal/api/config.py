"""
Tour API Configuration
=======================

Settings come from the process environment plus, when present, the
project's .env files (read by pydantic-settings):

    .env                         shared defaults
    config/.env.{ARCADE_ENV}     per-environment overrides (wins)

ARCADE_ENV defaults to "development".
"""

import os
from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from config.settings import DEFAULT_DATABASE_PATH

# API is at apps/tour_portal/api/, project root is 3 levels up
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent

_ENV_NAME = os.getenv("ARCADE_ENV", "development")

# Local frontends that may call the API during development
DEV_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]


class Settings(BaseSettings):
    """Tour API settings"""

    model_config = SettingsConfigDict(
        env_file=(PROJECT_ROOT / ".env", PROJECT_ROOT / "config" / f".env.{_ENV_NAME}"),
        extra="ignore",
    )

    ENV: str = Field("development", validation_alias="ARCADE_ENV")

    # Storage
    DATABASE_PATH: str = DEFAULT_DATABASE_PATH
    SEED_FIXTURES: bool = False

    # Access tokens
    JWT_SECRET_KEY: str = "CHANGE-THIS-IN-PRODUCTION-use-openssl-rand-hex-32"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Comma-separated; kept as a plain string so it is not parsed as JSON
    CORS_ORIGINS: str = ""

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"

    @property
    def cors_origins(self) -> List[str]:
        configured = [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]
        # dict.fromkeys keeps the first occurrence of each origin, in order
        return list(dict.fromkeys(configured + DEV_ORIGINS))

    @property
    def database_path(self) -> Path:
        """DATABASE_PATH resolved against the project root"""
        path = Path(self.DATABASE_PATH)
        return path if path.is_absolute() else PROJECT_ROOT / path


settings = Settings()
