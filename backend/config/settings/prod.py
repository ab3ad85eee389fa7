"""Production settings for the secure download links project."""
from __future__ import annotations

from . import base as base_settings

globals().update({name: getattr(base_settings, name) for name in base_settings.__all__})

ALLOWED_HOSTS = base_settings.ALLOWED_HOSTS
LOGGING = base_settings.LOGGING
SECRET_KEY = base_settings.SECRET_KEY
SECURE_DOWNLOADS_SIGNING_KEY = base_settings.SECURE_DOWNLOADS_SIGNING_KEY

DEBUG = False

if not ALLOWED_HOSTS:
    raise RuntimeError(
        "DJANGO_ALLOWED_HOSTS must be configured for the production environment."
    )

if not SECURE_DOWNLOADS_SIGNING_KEY and SECRET_KEY.startswith("django-insecure"):
    raise RuntimeError(
        "DJANGO_SECURE_DOWNLOADS_SIGNING_KEY or DJANGO_SECRET_KEY must be configured "
        "for the production environment."
    )

# Logging configuration with rotating file handlers for production deployments.
LOGGING["loggers"]["django"]["handlers"] = ["console", "app_file"]
LOGGING["loggers"]["securedownloads"]["handlers"] = ["console", "app_file"]
LOGGING["root"]["handlers"] = ["console", "app_file"]
