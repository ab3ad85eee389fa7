"""Development settings for the secure download links project."""
from __future__ import annotations

from copy import deepcopy

from . import base as base_settings


_base_settings = {name: getattr(base_settings, name) for name in base_settings.__all__}
globals().update(_base_settings)

ALLOWED_HOSTS = list(_base_settings["ALLOWED_HOSTS"])
LOGGING = deepcopy(_base_settings["LOGGING"])
LOG_LEVEL = _base_settings["LOG_LEVEL"]
env_bool = _base_settings["env_bool"]

del _base_settings

DEBUG = env_bool("DJANGO_DEBUG", True)

# Ensure local hosts are always allowed during development and testing.
for host in ["localhost", "127.0.0.1", "testserver"]:
    if host not in ALLOWED_HOSTS:
        ALLOWED_HOSTS.append(host)

LOGGING["handlers"]["console"]["formatter"] = "simple"
LOGGING["handlers"]["console"]["level"] = "DEBUG" if DEBUG else LOG_LEVEL
LOGGING["loggers"]["securedownloads"]["level"] = "DEBUG" if DEBUG else LOG_LEVEL
LOGGING["root"]["level"] = "DEBUG" if DEBUG else LOG_LEVEL
