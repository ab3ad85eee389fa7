"""File handles accepted by the link generator and their identifier lookup.

A file may be handed over in one of several shapes:

* ``StoredFile``: the terminal handle, knows its storage and path;
* ``FileReference``: a direct reference pointing at a ``StoredFile``;
* ``WrappedFileReference``: a domain-level reference wrapping a
  ``FileReference``;
* Django ``FieldFile``: the value of a ``FileField`` on a model instance.

Every variant resolves to the combined identifier ``"<storage>:<path>"`` of
the terminal handle. Unknown objects resolve to ``None``.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import singledispatch

from django.db.models.fields.files import FieldFile

from .conf import get_storage_id


@dataclass(frozen=True)
class StoredFile:
    """Terminal file handle living in a numbered storage."""

    storage_id: int
    identifier: str

    @property
    def combined_identifier(self) -> str:
        return f"{self.storage_id}:{self.identifier.lstrip('/')}"


@dataclass(frozen=True)
class FileReference:
    """Direct reference to a stored file."""

    original_file: StoredFile


@dataclass(frozen=True)
class WrappedFileReference:
    """Reference wrapping another reference."""

    original_resource: FileReference


@singledispatch
def extract_identifier(file: object) -> str | None:
    """Return the combined identifier for ``file`` or ``None`` if unsupported."""

    return None


@extract_identifier.register
def _(file: StoredFile) -> str | None:
    return file.combined_identifier


@extract_identifier.register
def _(file: FileReference) -> str | None:
    return extract_identifier(file.original_file)


@extract_identifier.register
def _(file: WrappedFileReference) -> str | None:
    return extract_identifier(file.original_resource)


@extract_identifier.register
def _(file: FieldFile) -> str | None:
    if not file.name:
        return None
    return StoredFile(get_storage_id(), file.name).combined_identifier


def resolve_resource_uri(file: object) -> str | None:
    """Turn a template argument into a resource URI.

    Strings are returned untouched; they are either a combined identifier or a
    plain file path and are never inspected here.
    """

    if isinstance(file, str):
        return file or None
    return extract_identifier(file)


__all__ = [
    "FileReference",
    "StoredFile",
    "WrappedFileReference",
    "extract_identifier",
    "resolve_resource_uri",
]
