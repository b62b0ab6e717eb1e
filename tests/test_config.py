from datetime import timedelta

import pytest

from config import DEFAULT_JWT_SECRET, load_settings, parse_duration
from core.exceptions import ConfigurationError


@pytest.mark.parametrize(
    "text, expected",
    [
        ("24h", timedelta(hours=24)),
        ("30m", timedelta(minutes=30)),
        ("7d", timedelta(days=7)),
        ("45s", timedelta(seconds=45)),
        ("3600", timedelta(seconds=3600)),
    ],
)
def test_parse_duration(text, expected):
    assert parse_duration(text) == expected


@pytest.mark.parametrize("text", ["", "soon", "h24", "1.5h"])
def test_parse_duration_rejects_garbage(text):
    with pytest.raises(ConfigurationError):
        parse_duration(text)


def test_defaults():
    settings = load_settings({})
    assert settings.port == 5000
    assert settings.environment == "development"
    assert settings.jwt_secret == DEFAULT_JWT_SECRET
    assert settings.jwt_expires_in == timedelta(hours=24)
    assert settings.rate_limit_window == timedelta(minutes=15)
    assert settings.rate_limit_max_requests == 100
    assert settings.cors_allowed_origins == ["http://localhost:3000"]
    assert not settings.is_production


def test_environment_overrides(tmp_path):
    settings = load_settings(
        {
            "APP_ENV": "production",
            "JWT_SECRET": "s3cret",
            "PORT": "8080",
            "DATABASE_URL": "sqlite:///" + str(tmp_path / "m.db"),
            "JWT_EXPIRES_IN": "2h",
            "FRONTEND_URL": "https://a.com, https://b.com",
            "UPLOAD_DIR": str(tmp_path / "files"),
            "MAX_FILE_SIZE": "2048",
            "RATE_LIMIT_WINDOW_MS": "60000",
            "RATE_LIMIT_MAX_REQUESTS": "5",
            "LOG_LEVEL": "debug",
        }
    )
    assert settings.is_production
    assert settings.port == 8080
    assert settings.jwt_expires_in == timedelta(hours=2)
    assert settings.cors_allowed_origins == ["https://a.com", "https://b.com"]
    assert settings.upload_dir == (tmp_path / "files").resolve()
    assert settings.max_file_size == 2048
    assert settings.rate_limit_window == timedelta(minutes=1)
    assert settings.rate_limit_max_requests == 5
    assert settings.log_level == "DEBUG"


def test_production_refuses_placeholder_secret():
    with pytest.raises(ConfigurationError):
        load_settings({"APP_ENV": "production"})
    with pytest.raises(ConfigurationError):
        load_settings({"APP_ENV": "production", "JWT_SECRET": DEFAULT_JWT_SECRET})


def test_bad_integer_is_reported():
    with pytest.raises(ConfigurationError, match="PORT"):
        load_settings({"PORT": "eighty"})
