"""Write file references and per-field file counts for a record."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from attach_files.core.config import settings
from attach_files.core.structured_logging import build_log_context
from attach_files.services.record_store import RecordStore
from attach_files.types import FieldMapping

logger = logging.getLogger(__name__)


def create_file_references(
    store: RecordStore,
    table: str,
    record_id: int,
    storage_pid: int,
    mappings: FieldMapping,
    *,
    now: datetime | None = None,
) -> int:
    """
    Insert one file reference per (field, file id), in mapping order.

    ``sorting`` restarts at 0 for every field. Existing references are not
    consulted, so calling this twice duplicates rows. A failing insert
    propagates and leaves earlier rows in place.
    """
    inserted = 0
    for field_name, file_ids in mappings.items():
        for sorting, file_id in enumerate(file_ids):
            timestamp = now or datetime.now(timezone.utc)
            store.insert(
                settings.FILE_REFERENCE_TABLE,
                {
                    "storage_pid": storage_pid,
                    "created_at": timestamp,
                    "updated_at": timestamp,
                    "file_id": file_id,
                    "table_name": table,
                    "record_id": record_id,
                    "field_name": field_name,
                    "sorting": sorting,
                },
            )
            inserted += 1

    logger.debug(
        "file_references_created count=%s",
        inserted,
        extra=build_log_context(table=table, record_id=record_id),
    )
    return inserted


def update_file_counts(
    store: RecordStore,
    table: str,
    record_id: int,
    mappings: FieldMapping,
) -> None:
    """Set each mapped column on the record to its number of file ids."""
    counts = {field_name: len(file_ids) for field_name, file_ids in mappings.items()}
    if not counts:
        return

    matched = store.update(table, counts, {"id": record_id})
    if not matched:
        logger.warning(
            "file_count_update_matched_no_record",
            extra=build_log_context(table=table, record_id=record_id),
        )
