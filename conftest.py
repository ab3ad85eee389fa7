from __future__ import annotations

import os
from typing import Iterator

import pytest
from pytest_factoryboy import register

os.environ.setdefault("DJANGO_ENV", "test")

from tests import factories as test_factories

register(test_factories.StoredFileFactory)
register(test_factories.FileReferenceFactory)
register(test_factories.WrappedFileReferenceFactory)


@pytest.fixture(autouse=True)
def _configure_test_environment(settings) -> Iterator[None]:
    settings.SECURE_DOWNLOADS_SIGNING_KEY = test_factories.SIGNING_KEY
    settings.SECURE_DOWNLOADS_SITES = dict(test_factories.SITES)

    yield


@pytest.fixture
def decode_token():
    return test_factories.decode_link_token
