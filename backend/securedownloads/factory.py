"""Default signing factory producing JWT based download links.

The delivery side owns the verification of these links. The factory only
mirrors the contract it relies on: a JWT carrying ``file``, ``user`` (when a
user restriction is set), ``groups`` and ``exp``, embedded in the URL
``/<link prefix>/<token prefix><jwt>/<filename>``. The trailing filename is
cosmetic; the delivery side reads the file from the token payload only.
"""
from __future__ import annotations

import posixpath
import time
from dataclasses import dataclass, replace
from typing import Any, Iterable
from urllib.parse import quote

import jwt
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from . import conf


@dataclass(frozen=True)
class SecureLinkFactory:
    """Immutable builder for signed download links.

    Every ``with_*`` call returns a new factory, so a configured factory can
    never carry a user or group restriction into another link.
    """

    resource_uri: str = ""
    user_id: int | None = None
    group_ids: tuple[int, ...] = ()
    link_timeout: int | None = None

    def with_resource_uri(self, resource_uri: str) -> SecureLinkFactory:
        return replace(self, resource_uri=resource_uri)

    def with_user(self, user_id: int) -> SecureLinkFactory:
        return replace(self, user_id=int(user_id))

    def with_groups(self, group_ids: Iterable[int]) -> SecureLinkFactory:
        return replace(self, group_ids=tuple(int(group_id) for group_id in group_ids))

    def with_link_timeout(self, timeout: int) -> SecureLinkFactory:
        timeout = int(timeout)
        if timeout <= 0:
            raise ValueError(f"Link timeout must be a positive number of seconds, got {timeout}.")
        return replace(self, link_timeout=timeout)

    def get_payload(self, *, now: int | None = None) -> dict[str, Any]:
        """Return the claims signed into the token."""

        if not self.resource_uri:
            raise ImproperlyConfigured("A resource URI is required to build a secure link.")

        issued_at = int(time.time()) if now is None else now
        timeout = self.link_timeout if self.link_timeout is not None else conf.get_link_timeout()
        payload: dict[str, Any] = {"file": self.resource_uri}
        if self.user_id is not None:
            payload["user"] = self.user_id
        payload["groups"] = list(self.group_ids)
        payload["exp"] = issued_at + timeout
        return payload

    def get_token(self) -> str:
        key = conf.get_signing_key()
        if not key:
            raise ImproperlyConfigured("SECURE_DOWNLOADS_SIGNING_KEY or SECRET_KEY must be set.")
        return jwt.encode(self.get_payload(), key, algorithm=conf.get_algorithm())

    def get_url(self) -> str:
        """Return the relative URL of the signed link."""

        token = self.get_token()
        filename = posixpath.basename(self.resource_uri.split(":", 1)[-1])
        return "/{prefix}/{token_prefix}{token}/{filename}".format(
            prefix=conf.get_link_prefix(),
            token_prefix=conf.get_token_prefix(),
            token=token,
            filename=quote(filename),
        )


def get_link_factory_class() -> type:
    """Return the configured factory class (``SECURE_DOWNLOADS_LINK_FACTORY``)."""

    return import_string(conf.get_link_factory_path())


__all__ = ["SecureLinkFactory", "get_link_factory_class"]
