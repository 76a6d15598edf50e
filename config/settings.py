"""
Arcade Tours - Settings Module
===============================

Usage:
    from config.settings import settings

    delay = settings.RECORDING_DELAY_SECONDS
    if settings.is_development:
        ...
"""

import os
from pathlib import Path
from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent

# Shared with the Tour API so the runner, the player and the API use one file
DEFAULT_DATABASE_PATH = 'data/arcade_tours.db'


class Settings:
    def __init__(self):
        self.ENV = os.getenv('ARCADE_ENV', 'development')

        # config/.env.{ENV} wins; root .env only fills in what it leaves unset
        for env_file in (PROJECT_ROOT / 'config' / f'.env.{self.ENV}', PROJECT_ROOT / '.env'):
            if env_file.exists():
                load_dotenv(env_file)

        # Database
        self.DATABASE_PATH = os.getenv('DATABASE_PATH', DEFAULT_DATABASE_PATH)

        # Editor
        self.RECORDING_DELAY_SECONDS = float(os.getenv('RECORDING_DELAY_SECONDS', 2.0))
        self.PLACEHOLDER_IMAGE_BASE = os.getenv(
            'PLACEHOLDER_IMAGE_BASE', 'https://placehold.co/800x600/2563EB/ffffff'
        )

        # Logging
        self.LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
        self.LOG_TO_FILE = os.getenv('LOG_TO_FILE', 'false').lower() == 'true'
        self.LOG_FILE = os.getenv('LOG_FILE', 'logs/arcade_tours.log')

    @property
    def database_path(self) -> Path:
        """DATABASE_PATH resolved against the project root"""
        path = Path(self.DATABASE_PATH)
        return path if path.is_absolute() else PROJECT_ROOT / path

    @property
    def is_development(self): return self.ENV == 'development'

    def placeholder_image(self, label: str) -> str:
        """Placeholder screenshot URL with `label` rendered as its text."""
        return f"{self.PLACEHOLDER_IMAGE_BASE}?text={label.replace(' ', '+')}"


settings = Settings()
