from __future__ import annotations

import re

import pytest
from django.template import Context, Template

from securedownloads.resources import extract_identifier
from securedownloads.services import build_secure_download_url
from tests.factories import decode_link_token

RELATIVE_LINK = re.compile(r"^/securedl/sdl-[\w-]+\.[\w-]+\.[\w-]+/document\.pdf$")


def render(source: str, **context: object) -> str:
    return Template("{% load secure_downloads %}" + source).render(Context(context))


@pytest.mark.parametrize(
    "handle_fixture", ["stored_file", "file_reference", "wrapped_file_reference"]
)
def test_every_handle_resolves_to_terminal_identifier(request, handle_fixture) -> None:
    handle = request.getfixturevalue(handle_fixture)
    terminal = handle
    while not hasattr(terminal, "combined_identifier"):
        terminal = getattr(terminal, "original_resource", None) or terminal.original_file

    assert extract_identifier(handle) == terminal.combined_identifier


@pytest.mark.parametrize("stored_file__identifier", ["documents/document.pdf"])
def test_link_for_wrapped_reference(wrapped_file_reference, decode_token) -> None:
    url = build_secure_download_url(wrapped_file_reference)

    assert RELATIVE_LINK.match(url)
    assert decode_token(url)["file"] == "2:documents/document.pdf"


def test_relative_link_without_options(decode_token) -> None:
    url = build_secure_download_url("2:documents/document.pdf")

    assert RELATIVE_LINK.match(url)
    payload = decode_token(url)
    assert set(payload) == {"file", "groups", "exp"}
    assert payload["file"] == "2:documents/document.pdf"


def test_absolute_link_for_site(decode_token) -> None:
    url = build_secure_download_url("2:documents/document.pdf", site_identifier="landingpage")

    prefix = "https://landingpage.example"
    assert url.startswith(prefix + "/securedl/sdl-")
    assert RELATIVE_LINK.match(url[len(prefix):])
    assert decode_token(url)["file"] == "2:documents/document.pdf"


def test_custom_port_is_kept_in_absolute_link() -> None:
    url = build_secure_download_url("2:documents/document.pdf", site_identifier="intranet")

    assert url.startswith("http://intranet.example:8080/securedl/sdl-")


def test_unknown_site_returns_relative_link() -> None:
    url = build_secure_download_url("2:documents/document.pdf", site_identifier="unknown")

    assert RELATIVE_LINK.match(url)


def test_public_user_differs_from_unrestricted(decode_token) -> None:
    unrestricted = decode_token(build_secure_download_url("2:documents/document.pdf"))
    public = decode_token(build_secure_download_url("2:documents/document.pdf", feuser="public"))

    assert "user" not in unrestricted
    assert public["user"] == 0


def test_user_restriction_does_not_leak(decode_token) -> None:
    restricted = decode_token(build_secure_download_url("2:private.pdf", feuser="42", timeout=60))
    following = decode_token(build_secure_download_url("2:documents/document.pdf"))

    assert restricted["user"] == 42
    assert "user" not in following
    assert following["exp"] - restricted["exp"] > 60


def test_missing_file_gives_empty_results() -> None:
    assert build_secure_download_url(None) == ""
    assert render("{% secure_download_url file %}", file=None) == ""
    assert render(
        "{% secure_download_link file %}Download{% endsecure_download_link %}", file=None
    ) == ""


def test_signing_key_falls_back_to_secret_key(settings) -> None:
    settings.SECURE_DOWNLOADS_SIGNING_KEY = ""
    settings.SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"

    url = build_secure_download_url("2:documents/document.pdf")

    assert decode_link_token(url, key=settings.SECRET_KEY)["file"] == "2:documents/document.pdf"


def test_factory_errors_are_not_masked(settings) -> None:
    settings.SECURE_DOWNLOADS_LINK_FACTORY = "securedownloads.missing.Factory"

    with pytest.raises(ImportError):
        build_secure_download_url("2:documents/document.pdf")
