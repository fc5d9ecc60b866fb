"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API can be started without any configuration; in a deployment you
override them via environment variables.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Mithril Cars API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional path of a log file written in addition to the console.
    log_file: str = os.getenv("LOG_FILE", "")
    # ``logging.Formatter`` format string for every handler.
    log_format: str = os.getenv("LOG_FORMAT", "")

    # Path of the SQLite database file.  Relative paths are resolved
    # against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "cars.sqlite3")

    # Connections kept open for the lifetime of the process.  A request
    # waits at most ``db_pool_timeout`` seconds for a free connection.
    db_pool_size: int = int(os.getenv("DB_POOL_SIZE", "5"))
    db_pool_timeout: float = float(os.getenv("DB_POOL_TIMEOUT", "5"))
    # Seconds SQLite waits on a locked database before raising.
    db_busy_timeout: float = float(os.getenv("DB_BUSY_TIMEOUT", "5"))

    # Comma-separated list of allowed CORS origins; ``*`` allows any.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before importing this module.
settings = Settings()
