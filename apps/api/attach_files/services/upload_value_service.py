"""Normalize submitted upload values into ordered stored-file ids."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from attach_files.db.models import StoredFile


@dataclass(frozen=True)
class UploadedFile:
    """A single uploaded file as handed over by the upload element.

    ``original_file`` is the stored object backing the upload; it is None
    when storage did not (or no longer does) hold the file.
    """

    original_file: StoredFile | None
    filename: str | None = None


@dataclass(frozen=True)
class UploadedFileCollection:
    """Ordered files submitted through a multi-upload element."""

    files: tuple[UploadedFile, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[UploadedFile]:
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)


def get_file_id(item: object) -> int:
    """Return the stored-file id behind an uploaded file, or 0."""
    if not isinstance(item, UploadedFile):
        return 0
    original = item.original_file
    if original is None:
        return 0
    try:
        return int(original.id or 0)
    except (TypeError, ValueError):
        return 0


def extract_file_ids(value: object) -> list[int]:
    """
    Extract positive stored-file ids from an upload value, in order.

    Accepts a single UploadedFile, an UploadedFileCollection, or a list/tuple
    of uploaded files. Entries without a backing file are skipped; any other
    value yields an empty list.
    """
    if isinstance(value, UploadedFile):
        file_id = get_file_id(value)
        return [file_id] if file_id > 0 else []

    if isinstance(value, (UploadedFileCollection, list, tuple)):
        file_ids: list[int] = []
        for item in value:
            file_id = get_file_id(item)
            if file_id > 0:
                file_ids.append(file_id)
        return file_ids

    return []
