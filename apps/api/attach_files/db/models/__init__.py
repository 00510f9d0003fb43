"""SQLAlchemy ORM models."""

from attach_files.db.models.files import FileReference, StoredFile

__all__ = ["FileReference", "StoredFile"]
