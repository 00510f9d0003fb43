"""Finisher registry."""

from __future__ import annotations

from typing import Any, Mapping

from attach_files.db.enums import FinisherIdentifier
from attach_files.finishers.attach_files_to_record import AttachFilesToRecordFinisher
from attach_files.finishers.context import FinisherContext
from attach_files.services.record_store import RecordStore

FINISHERS: Mapping[str, type[AttachFilesToRecordFinisher]] = {
    FinisherIdentifier.ATTACH_FILES_TO_RECORD.value: AttachFilesToRecordFinisher,
}


def get_finisher(
    identifier: str, options: Mapping[str, Any], store: RecordStore
) -> AttachFilesToRecordFinisher:
    finisher_class = FINISHERS.get(identifier)
    if finisher_class is None:
        raise ValueError(f"Unknown finisher: {identifier}")
    return finisher_class(options, store)


def execute_finisher(
    identifier: str,
    options: Mapping[str, Any],
    context: FinisherContext,
    store: RecordStore,
) -> str | None:
    """Build the finisher registered under ``identifier`` and execute it."""
    return get_finisher(identifier, options, store).execute(context)
