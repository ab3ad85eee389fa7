"""Accessors for the ``SECURE_DOWNLOADS_*`` settings with their defaults."""
from __future__ import annotations

from django.conf import settings

DEFAULT_ALGORITHM = "HS256"
DEFAULT_LINK_TIMEOUT = 43200
DEFAULT_LINK_PREFIX = "securedl"
DEFAULT_TOKEN_PREFIX = "sdl-"
DEFAULT_LINK_FACTORY = "securedownloads.factory.SecureLinkFactory"
DEFAULT_STORAGE_ID = 1


def get_signing_key() -> str:
    key = getattr(settings, "SECURE_DOWNLOADS_SIGNING_KEY", "")
    return key or settings.SECRET_KEY


def get_algorithm() -> str:
    return getattr(settings, "SECURE_DOWNLOADS_ALGORITHM", DEFAULT_ALGORITHM) or DEFAULT_ALGORITHM


def get_link_timeout() -> int:
    """Return the default lifetime of a link in seconds."""

    value = getattr(settings, "SECURE_DOWNLOADS_LINK_TIMEOUT", DEFAULT_LINK_TIMEOUT)
    if not isinstance(value, int) or value <= 0:
        return DEFAULT_LINK_TIMEOUT
    return value


def get_link_prefix() -> str:
    prefix = getattr(settings, "SECURE_DOWNLOADS_LINK_PREFIX", DEFAULT_LINK_PREFIX)
    return prefix.strip("/")


def get_token_prefix() -> str:
    return getattr(settings, "SECURE_DOWNLOADS_TOKEN_PREFIX", DEFAULT_TOKEN_PREFIX)


def get_link_factory_path() -> str:
    return getattr(settings, "SECURE_DOWNLOADS_LINK_FACTORY", DEFAULT_LINK_FACTORY)


def get_sites() -> dict[str, str]:
    """Return the mapping of site identifiers to their base URLs."""

    return dict(getattr(settings, "SECURE_DOWNLOADS_SITES", {}) or {})


def get_storage_id() -> int:
    return int(getattr(settings, "SECURE_DOWNLOADS_STORAGE_ID", DEFAULT_STORAGE_ID))


__all__ = [
    "get_algorithm",
    "get_link_factory_path",
    "get_link_prefix",
    "get_link_timeout",
    "get_signing_key",
    "get_sites",
    "get_storage_id",
    "get_token_prefix",
]
