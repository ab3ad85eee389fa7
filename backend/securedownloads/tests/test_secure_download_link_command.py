from __future__ import annotations

import json
from io import StringIO

from django.core.management import CommandError, call_command
from django.test import SimpleTestCase
from django.test.utils import override_settings

from tests.factories import SIGNING_KEY, decode_link_token


@override_settings(
    SECURE_DOWNLOADS_SIGNING_KEY=SIGNING_KEY,
    SECURE_DOWNLOADS_LINK_FACTORY="securedownloads.factory.SecureLinkFactory",
)
class SecureDownloadLinkCommandTests(SimpleTestCase):
    """Checks for the command printing signed links."""

    def test_prints_relative_link(self) -> None:
        stdout = StringIO()
        call_command("secure_download_link", "2:documents/document.pdf", stdout=stdout)

        url = stdout.getvalue().strip()
        self.assertTrue(url.startswith("/securedl/sdl-"))
        self.assertTrue(url.endswith("/document.pdf"))
        self.assertNotIn("user", decode_link_token(url))

    def test_site_and_public_user(self) -> None:
        stdout = StringIO()
        with override_settings(SECURE_DOWNLOADS_SITES={"landingpage": "https://landingpage.example"}):
            call_command(
                "secure_download_link",
                "2:documents/document.pdf",
                "--feuser=public",
                "--site=landingpage",
                stdout=stdout,
            )

        url = stdout.getvalue().strip()
        self.assertTrue(url.startswith("https://landingpage.example/securedl/sdl-"))
        self.assertEqual(decode_link_token(url)["user"], 0)

    def test_json_output(self) -> None:
        stdout = StringIO()
        call_command(
            "secure_download_link",
            "2:documents/document.pdf",
            "--feuser=12",
            "--timeout=90",
            "--json",
            stdout=stdout,
        )

        payload = json.loads(stdout.getvalue())
        self.assertEqual(payload["file"], "2:documents/document.pdf")
        self.assertEqual(payload["user"], 12)
        self.assertEqual(payload["timeout"], 90)
        self.assertIsNone(payload["site"])
        self.assertEqual(decode_link_token(payload["url"])["user"], 12)

    def test_invalid_user_is_reported(self) -> None:
        with self.assertRaises(CommandError):
            call_command("secure_download_link", "2:a.pdf", "--feuser=nobody", stdout=StringIO())

    def test_negative_timeout_is_reported(self) -> None:
        with self.assertRaises(CommandError):
            call_command("secure_download_link", "2:a.pdf", "--timeout=-10", stdout=StringIO())

    def test_empty_file_is_reported(self) -> None:
        with self.assertRaises(CommandError):
            call_command("secure_download_link", "", stdout=StringIO())
