"""Site lookup used to turn relative download links into absolute ones."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping
from urllib.parse import urlsplit

from django.core.exceptions import ImproperlyConfigured

from . import conf

_DEFAULT_PORTS = {"http": 80, "https": 443}


class SiteNotFound(LookupError):
    """Raised when no site is configured for an identifier."""


@dataclass(frozen=True)
class Site:
    """A configured site and the base URL it is served from."""

    identifier: str
    base: str

    @property
    def base_url(self) -> str:
        """Return ``scheme://host[:port]`` for the configured base."""

        parts = urlsplit(self.base)
        if not parts.scheme or not parts.hostname:
            raise ImproperlyConfigured(
                f"Site '{self.identifier}' has no absolute base URL: {self.base!r}."
            )
        host = parts.hostname
        if ":" in host:
            host = f"[{host}]"
        domain = f"{parts.scheme}://{host}"
        port = parts.port
        if port and port != _DEFAULT_PORTS.get(parts.scheme):
            domain = f"{domain}:{port}"
        return domain


class SiteFinder:
    """Resolve site identifiers against ``SECURE_DOWNLOADS_SITES``."""

    def __init__(self, sites: Mapping[str, str] | None = None) -> None:
        self._sites = dict(sites) if sites is not None else None

    def get_all_sites(self) -> dict[str, Site]:
        sites = self._sites if self._sites is not None else conf.get_sites()
        return {identifier: Site(identifier, base) for identifier, base in sites.items()}

    def get_site_by_identifier(self, identifier: str) -> Site:
        try:
            return self.get_all_sites()[identifier]
        except KeyError as exc:
            raise SiteNotFound(f"No site configured for identifier '{identifier}'.") from exc


def join_url(base: str, url: str) -> str:
    """Join a domain and a path with exactly one slash between them."""

    return base.rstrip("/") + "/" + url.lstrip("/")


__all__ = ["Site", "SiteFinder", "SiteNotFound", "join_url"]
