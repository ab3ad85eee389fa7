"""Base settings for the secure download links Django project."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List

BASE_DIR = Path(__file__).resolve().parent.parent.parent


def env_bool(name: str, default: bool = False) -> bool:
    """Read a boolean flag from the environment."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def env_list(name: str, default: Iterable[str] | None = None) -> List[str]:
    """Read a comma-separated list from the environment."""
    raw_value = os.environ.get(name)
    if not raw_value:
        if default is None:
            return []
        return [item for item in default]
    return [item.strip() for item in raw_value.split(",") if item.strip()]


def env_int(name: str, default: int) -> int:
    """Read an integer value from the environment."""
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def env_mapping(name: str) -> dict[str, str]:
    """Read ``key=value`` pairs separated by commas from the environment."""
    mapping: dict[str, str] = {}
    for item in env_list(name):
        key, separator, value = item.partition("=")
        if not separator or not key.strip() or not value.strip():
            continue
        mapping[key.strip()] = value.strip()
    return mapping


ENVIRONMENT = os.environ.get("DJANGO_ENV", "dev").strip().lower()
SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "django-insecure-change-me")
DEBUG = env_bool("DJANGO_DEBUG", False)

ALLOWED_HOSTS = env_list("DJANGO_ALLOWED_HOSTS", ["localhost", "127.0.0.1"])  # type: ignore[assignment]

INSTALLED_APPS = [
    "securedownloads",
]

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
            ],
        },
    }
]

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Signed download links. The signing key falls back to SECRET_KEY when empty.
SECURE_DOWNLOADS_SIGNING_KEY = os.environ.get("DJANGO_SECURE_DOWNLOADS_SIGNING_KEY", "")
SECURE_DOWNLOADS_ALGORITHM = os.environ.get("DJANGO_SECURE_DOWNLOADS_ALGORITHM", "HS256")
SECURE_DOWNLOADS_LINK_TIMEOUT = env_int("DJANGO_SECURE_DOWNLOADS_LINK_TIMEOUT", 43200)
SECURE_DOWNLOADS_LINK_PREFIX = os.environ.get("DJANGO_SECURE_DOWNLOADS_LINK_PREFIX", "securedl")
SECURE_DOWNLOADS_TOKEN_PREFIX = os.environ.get("DJANGO_SECURE_DOWNLOADS_TOKEN_PREFIX", "sdl-")
SECURE_DOWNLOADS_LINK_FACTORY = "securedownloads.factory.SecureLinkFactory"
SECURE_DOWNLOADS_SITES = env_mapping("DJANGO_SECURE_DOWNLOADS_SITES")
SECURE_DOWNLOADS_STORAGE_ID = env_int("DJANGO_SECURE_DOWNLOADS_STORAGE_ID", 1)

LOG_LEVEL = os.environ.get("DJANGO_LOG_LEVEL", "INFO")


def _resolve_log_path(env_var: str, default: Path) -> Path:
    """Resolve a log file path and ensure that its directory exists."""

    candidate = os.environ.get(env_var)
    path = Path(candidate) if candidate else default
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        # Read-only deployments still log to the console.
        pass
    return path


LOG_DIR = Path(os.environ.get("DJANGO_LOG_DIR", BASE_DIR / "logs"))
MAIN_LOG_FILE = _resolve_log_path("DJANGO_LOG_FILE", LOG_DIR / "app.log")
LOG_ROTATION_MAX_BYTES = env_int("DJANGO_LOG_MAX_BYTES", 5 * 1024 * 1024)
LOG_ROTATION_BACKUP_COUNT = env_int("DJANGO_LOG_BACKUP_COUNT", 10)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        },
        "simple": {
            "format": "%(levelname)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
            "level": LOG_LEVEL,
        },
        "app_file": {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "verbose",
            "filename": str(MAIN_LOG_FILE),
            "maxBytes": LOG_ROTATION_MAX_BYTES,
            "backupCount": LOG_ROTATION_BACKUP_COUNT,
            "encoding": "utf-8",
            "level": LOG_LEVEL,
            "delay": True,
        },
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "securedownloads": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
}

__all__ = [
    "BASE_DIR",
    "ENVIRONMENT",
    "SECRET_KEY",
    "DEBUG",
    "ALLOWED_HOSTS",
    "INSTALLED_APPS",
    "TEMPLATES",
    "LANGUAGE_CODE",
    "TIME_ZONE",
    "USE_I18N",
    "USE_TZ",
    "SECURE_DOWNLOADS_SIGNING_KEY",
    "SECURE_DOWNLOADS_ALGORITHM",
    "SECURE_DOWNLOADS_LINK_TIMEOUT",
    "SECURE_DOWNLOADS_LINK_PREFIX",
    "SECURE_DOWNLOADS_TOKEN_PREFIX",
    "SECURE_DOWNLOADS_LINK_FACTORY",
    "SECURE_DOWNLOADS_SITES",
    "SECURE_DOWNLOADS_STORAGE_ID",
    "LOG_DIR",
    "MAIN_LOG_FILE",
    "LOG_LEVEL",
    "LOG_ROTATION_MAX_BYTES",
    "LOG_ROTATION_BACKUP_COUNT",
    "LOGGING",
    "env_bool",
    "env_int",
    "env_list",
    "env_mapping",
]
