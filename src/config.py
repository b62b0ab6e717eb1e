"""Configuration module for the design marketplace API.

This module provides centralized configuration management: directory paths,
server settings, database and token settings, upload limits and rate limiting.
All values are read from environment variables once at startup and frozen
into a ``Settings`` value that is handed to the application factory.
"""

import os
import re
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import List, Mapping, Optional

from dotenv import load_dotenv

from core.exceptions import ConfigurationError

# Load environment variables from .env file
load_dotenv()

# --- Directory Configuration ---

# Root directory of the project
ROOT_DIR = Path(__file__).parent.parent.resolve()

DATA_DIR_NAME = "data"
DATA_DIR = ROOT_DIR / DATA_DIR_NAME

UPLOAD_DIR_NAME = "uploads"

# --- Defaults ---

DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_PORT = 5000
DEFAULT_APP_ENV = "development"
DEFAULT_DATABASE_URL = f"sqlite:///{DATA_DIR}/marketplace.db"

# Placeholder secret for local development only; refused in production.
DEFAULT_JWT_SECRET = "your-secret-key-change-in-production"
DEFAULT_JWT_EXPIRES_IN = "24h"

DEFAULT_FRONTEND_URL = "http://localhost:3000"

# 500 MB
DEFAULT_MAX_FILE_SIZE = 524288000

# 15 minutes, 100 requests per client
DEFAULT_RATE_LIMIT_WINDOW_MS = 900000
DEFAULT_RATE_LIMIT_MAX_REQUESTS = 100

DEFAULT_LOG_LEVEL = "INFO"

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


@dataclass(frozen=True)
class Settings:
    """Immutable process-wide configuration."""

    host: str = DEFAULT_API_HOST
    port: int = DEFAULT_PORT
    environment: str = DEFAULT_APP_ENV
    database_url: str = DEFAULT_DATABASE_URL
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_expires_in: timedelta = timedelta(hours=24)
    cors_allowed_origins: List[str] = field(
        default_factory=lambda: [DEFAULT_FRONTEND_URL]
    )
    upload_dir: Path = ROOT_DIR / UPLOAD_DIR_NAME
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    rate_limit_window: timedelta = timedelta(milliseconds=DEFAULT_RATE_LIMIT_WINDOW_MS)
    rate_limit_max_requests: int = DEFAULT_RATE_LIMIT_MAX_REQUESTS
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``"24h"``, ``"30m"``, ``"7d"`` or ``"3600"``.

    Args:
        text: Duration string. A bare number is taken as seconds.

    Returns:
        The parsed duration.

    Raises:
        ConfigurationError: If the string is not a recognised duration.
    """
    match = _DURATION_RE.match(text or "")
    if not match:
        raise ConfigurationError(f"Invalid duration: {text!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


def _get_int(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}")


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build the settings value from environment variables.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        Frozen Settings instance.

    Raises:
        ConfigurationError: If a value cannot be parsed, or if production
            is configured with the placeholder signing secret.
    """
    if environ is None:
        environ = os.environ

    environment = environ.get("APP_ENV", DEFAULT_APP_ENV)
    jwt_secret = environ.get("JWT_SECRET") or DEFAULT_JWT_SECRET
    if environment == "production" and jwt_secret == DEFAULT_JWT_SECRET:
        raise ConfigurationError("JWT_SECRET must be set in production")

    upload_dir = Path(environ.get("UPLOAD_DIR") or ROOT_DIR / UPLOAD_DIR_NAME)

    return Settings(
        host=environ.get("API_HOST", DEFAULT_API_HOST),
        port=_get_int(environ, "PORT", DEFAULT_PORT),
        environment=environment,
        database_url=environ.get("DATABASE_URL") or DEFAULT_DATABASE_URL,
        jwt_secret=jwt_secret,
        jwt_expires_in=parse_duration(
            environ.get("JWT_EXPIRES_IN", DEFAULT_JWT_EXPIRES_IN)
        ),
        cors_allowed_origins=_split_origins(
            environ.get("FRONTEND_URL", DEFAULT_FRONTEND_URL)
        ),
        upload_dir=upload_dir.resolve(),
        max_file_size=_get_int(environ, "MAX_FILE_SIZE", DEFAULT_MAX_FILE_SIZE),
        rate_limit_window=timedelta(
            milliseconds=_get_int(
                environ, "RATE_LIMIT_WINDOW_MS", DEFAULT_RATE_LIMIT_WINDOW_MS
            )
        ),
        rate_limit_max_requests=_get_int(
            environ, "RATE_LIMIT_MAX_REQUESTS", DEFAULT_RATE_LIMIT_MAX_REQUESTS
        ),
        log_level=environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )
