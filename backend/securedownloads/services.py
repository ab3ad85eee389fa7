"""Generation of signed download links for templates and commands."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from .factory import get_link_factory_class
from .resources import extract_identifier, resolve_resource_uri
from .sites import SiteFinder, SiteNotFound, join_url

logger = logging.getLogger(__name__)

PUBLIC_USER = "public"
PUBLIC_USER_ID = 0


def normalise_user_id(feuser: Any) -> int | None:
    """Map the ``feuser`` argument to a user id.

    ``None`` means no user restriction, ``"public"`` maps to user ``0``.
    """

    if feuser is None:
        return None
    if feuser == PUBLIC_USER:
        return PUBLIC_USER_ID
    try:
        return int(feuser)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid feuser value: {feuser!r}.") from exc


def normalise_timeout(timeout: Any) -> int | None:
    """Cast the timeout to seconds.

    Empty, unparsable and ``0`` values use the default TTL of the factory.
    """

    if timeout is None or timeout == "":
        return None
    try:
        seconds = int(timeout)
    except (TypeError, ValueError):
        return None
    return seconds or None


@dataclass(frozen=True)
class LinkRequest:
    """Arguments of a single link generation call."""

    resource_identifier: str
    user_id: int | None = None
    timeout: int | None = None
    site_identifier: str | None = None

    @classmethod
    def from_arguments(
        cls,
        file: object,
        feuser: Any = None,
        timeout: Any = None,
        site_identifier: str | None = None,
    ) -> LinkRequest | None:
        """Build a request from template arguments, ``None`` without a file."""

        resource_identifier = resolve_resource_uri(file)
        if not resource_identifier:
            return None
        return cls(
            resource_identifier=resource_identifier,
            user_id=normalise_user_id(feuser),
            timeout=normalise_timeout(timeout),
            site_identifier=site_identifier or None,
        )


class SecureDownloadLinkService:
    """Create signed download links through the configured link factory."""

    def __init__(
        self,
        factory_class: Callable[[], Any] | None = None,
        site_finder: SiteFinder | None = None,
    ) -> None:
        self.factory_class = factory_class or get_link_factory_class()
        self.site_finder = site_finder or SiteFinder()

    def create_secure_link(
        self,
        resource_uri: str,
        user_id: int | None = None,
        timeout: int | None = None,
        site_identifier: str | None = None,
    ) -> str:
        """Return the signed URL for ``resource_uri``.

        ``user_id=None`` leaves the link unrestricted while ``0`` is passed on
        as the public user. Without ``timeout`` the factory default applies.
        Errors raised by the factory are not handled here.
        """

        # Factories cache state between calls, never share an instance.
        factory = self.factory_class()
        factory = factory.with_resource_uri(resource_uri)

        if user_id is not None:
            factory = factory.with_user(user_id)

        if timeout is not None:
            factory = factory.with_link_timeout(timeout)

        url = factory.get_url()
        logger.debug(
            "Created secure link for %s (user=%s, timeout=%s)", resource_uri, user_id, timeout
        )

        if site_identifier is not None:
            url = self.prepend_site_domain(url, site_identifier)

        return url

    def extract_identifier_from_file(self, file: object) -> str | None:
        return extract_identifier(file)

    def prepend_site_domain(self, url: str, site_identifier: str) -> str:
        """Prefix ``url`` with the domain of the site, or return it unchanged."""

        try:
            site = self.site_finder.get_site_by_identifier(site_identifier)
            domain = site.base_url
        except SiteNotFound:
            logger.warning(
                "Unknown site '%s', returning relative secure link", site_identifier
            )
            return url
        except Exception:
            logger.exception(
                "Cannot resolve site '%s', returning relative secure link", site_identifier
            )
            return url
        return join_url(domain, url)

    def create_link_for_request(self, request: LinkRequest) -> str:
        return self.create_secure_link(
            request.resource_identifier,
            request.user_id,
            request.timeout,
            request.site_identifier,
        )


def get_link_service() -> SecureDownloadLinkService:
    """Return a service wired from the current settings."""

    return SecureDownloadLinkService()


def build_secure_download_url(
    file: object,
    feuser: Any = None,
    timeout: Any = None,
    site_identifier: str | None = None,
) -> str:
    """Return the signed URL for ``file`` or an empty string without a file."""

    request = LinkRequest.from_arguments(file, feuser, timeout, site_identifier)
    if request is None:
        return ""
    return get_link_service().create_link_for_request(request)


__all__ = [
    "LinkRequest",
    "PUBLIC_USER",
    "PUBLIC_USER_ID",
    "SecureDownloadLinkService",
    "build_secure_download_url",
    "get_link_service",
    "normalise_timeout",
    "normalise_user_id",
]
