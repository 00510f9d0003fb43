"""SQLAlchemy ORM models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from attach_files.core.config import settings
from attach_files.db.base import Base


class StoredFile(Base):
    """
    A file object persisted by the storage layer.

    Rows are written when an upload is stored; this service only reads them
    to resolve the identifier an uploaded file points at.
    """

    __tablename__ = "stored_files"
    __table_args__ = (Index("idx_stored_files_storage_pid", "storage_pid"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    storage_pid: Mapped[int] = mapped_column(
        Integer, default=0, server_default=text("0"), nullable=False
    )
    storage_key: Mapped[str] = mapped_column(String(512), nullable=False)
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    content_type: Mapped[str] = mapped_column(String(100), nullable=False)
    file_size: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        server_default=text("CURRENT_TIMESTAMP"), nullable=False
    )


class FileReference(Base):
    """
    Links a stored file to a field of a record in another table.

    One row per (field, file); ``sorting`` keeps the upload order within
    the field. Rows are append-only here.
    """

    __tablename__ = settings.FILE_REFERENCE_TABLE
    __table_args__ = (
        Index("idx_file_references_target", "table_name", "record_id", "field_name"),
        Index("idx_file_references_file", "file_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    storage_pid: Mapped[int] = mapped_column(
        Integer, default=0, server_default=text("0"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(nullable=False)
    updated_at: Mapped[datetime] = mapped_column(nullable=False)

    file_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("stored_files.id", ondelete="CASCADE"), nullable=False
    )
    table_name: Mapped[str] = mapped_column(String(255), nullable=False)
    record_id: Mapped[int] = mapped_column(Integer, nullable=False)
    field_name: Mapped[str] = mapped_column(String(100), nullable=False)
    sorting: Mapped[int] = mapped_column(
        Integer, default=0, server_default=text("0"), nullable=False
    )

    file: Mapped["StoredFile"] = relationship()
