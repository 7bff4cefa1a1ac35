"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Values from a ``.env`` file in the working
directory are loaded first with ``python-dotenv`` so that local
development does not require exporting variables by hand.  Defaults
are provided for all fields.
"""

import os
from dataclasses import dataclass
from typing import List

from dotenv import load_dotenv

load_dotenv()


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Exercise Tracker")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Connection string for the store.  Either a plain file path or a
    # ``sqlite:///`` URL.  Relative paths are resolved against the
    # project root by ``core.db``.
    database_url: str = os.getenv("DATABASE_URL", "exercise_tracker.db")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Comma‑separated list of allowed CORS origins.  ``*`` allows any.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class creation time, environment variables should
# be set before importing this module.
settings = Settings()
