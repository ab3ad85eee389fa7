from __future__ import annotations

from django.apps import AppConfig


class SecureDownloadsConfig(AppConfig):
    """Application configuration for signed download links."""

    name = "securedownloads"
    verbose_name = "Secure downloads"
