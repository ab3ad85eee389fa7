from __future__ import annotations

import json
from typing import Any

from django.core.exceptions import ImproperlyConfigured
from django.core.management.base import BaseCommand, CommandError

from securedownloads.services import LinkRequest, get_link_service


class Command(BaseCommand):
    """Print a signed download link for a stored file."""

    help = (
        "Builds a signed download link for a combined identifier or file path. "
        "Use --site to get an absolute URL outside of a request."
    )

    def add_arguments(self, parser: Any) -> None:  # type: ignore[override]
        parser.add_argument(
            "file",
            help="Combined identifier (e.g. 2:documents/document.pdf) or file path.",
        )
        parser.add_argument(
            "--feuser",
            default=None,
            help="Restrict the link to a user id, or 'public' for the public user.",
        )
        parser.add_argument(
            "--timeout",
            default=None,
            help="Link lifetime in seconds. Defaults to SECURE_DOWNLOADS_LINK_TIMEOUT.",
        )
        parser.add_argument(
            "--site",
            dest="site_identifier",
            default=None,
            help="Site identifier whose domain is prepended to the link.",
        )
        parser.add_argument(
            "--json",
            action="store_true",
            dest="as_json",
            help="Print the request and the link as JSON.",
        )

    def handle(self, *args: object, **options: Any) -> str | None:  # type: ignore[override]
        as_json: bool = options.get("as_json", False)

        try:
            request = LinkRequest.from_arguments(
                options["file"],
                options.get("feuser"),
                options.get("timeout"),
                options.get("site_identifier"),
            )
        except ValueError as exc:
            raise CommandError(str(exc)) from exc

        if request is None:
            raise CommandError("No file given, nothing to sign.")

        try:
            url = get_link_service().create_link_for_request(request)
        except (ImproperlyConfigured, ValueError) as exc:
            raise CommandError(f"Cannot create secure link: {exc}") from exc

        if as_json:
            payload = {
                "file": request.resource_identifier,
                "user": request.user_id,
                "timeout": request.timeout,
                "site": request.site_identifier,
                "url": url,
            }
            return json.dumps(payload, ensure_ascii=False, indent=2)

        self.stdout.write(url)
        return None
