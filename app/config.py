"""Process-wide settings, read once from the environment."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlsplit

__all__ = [
    "CACHE_CONTROL",
    "DEFAULT_SITE_URL",
    "ConfigError",
    "Settings",
    "normalize_site_url",
    "normalize_log_level",
    "get_site_url_from_env",
    "load_settings",
    "get_settings",
]

DEFAULT_SITE_URL = "https://devtools.wsgrok.com"

# No browser caching; shared caches may keep the document for one hour.
CACHE_CONTROL = "max-age=0, s-maxage=3600"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigError(ValueError):
    code: str = "invalid_config"


@dataclass(frozen=True)
class Settings:
    site_url: str
    app_version: str = "0.1.0"
    log_level: str = "INFO"
    cache_control: str = CACHE_CONTROL


def normalize_site_url(raw: str) -> str:
    """Return the absolute site origin without a trailing slash.

    Raises:
        ConfigError: if the value is not an absolute http(s) origin.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise ConfigError("SITE_URL must be a non-empty string")

    url = raw.strip().rstrip("/")
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigError(f"SITE_URL must be an absolute http(s) URL, got {raw!r}")
    if parts.query or parts.fragment:
        raise ConfigError("SITE_URL must not carry a query or fragment")
    return url


def normalize_log_level(raw: str) -> str:
    level = raw.strip().upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got {raw!r}")
    return level


def get_site_url_from_env() -> str:
    """Return SITE_URL from environment, defaulting to the production origin."""
    return normalize_site_url(os.getenv("SITE_URL", DEFAULT_SITE_URL))


def load_settings() -> Settings:
    """Read every setting from the environment; prefer get_settings() at runtime."""
    return Settings(
        site_url=get_site_url_from_env(),
        app_version=os.getenv("APP_VERSION", "0.1.0"),
        log_level=normalize_log_level(os.getenv("LOG_LEVEL", "INFO")),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
