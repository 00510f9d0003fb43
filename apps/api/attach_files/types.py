"""Shared type aliases for form payloads and file mappings."""

from __future__ import annotations

from typing import TypeAlias

# Element identifier -> submitted value (UploadedFile, collection, scalar, None)
FormValues: TypeAlias = dict[str, object]

# Target column -> ordered stored-file ids
FieldMapping: TypeAlias = dict[str, list[int]]
