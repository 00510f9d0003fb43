"""
Finisher attaching uploaded files to a record created earlier in the pipeline.

Configuration example (runs after SaveToDatabase)::

    identifier: AttachFilesToRecord
    options:
      table: tx_myext_item
      recordUid: '{SaveToDatabase.insertedUids.0}'
      storagePid: 1
      elements:
        images:
          mapOnDatabaseColumn: images
        files:
          mapOnDatabaseColumn: files
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from attach_files.core.structured_logging import build_log_context
from attach_files.db.enums import ElementKind, FinisherIdentifier
from attach_files.finishers.context import FinisherContext
from attach_files.schemas.finishers import AttachFilesToRecordOptions
from attach_files.services.file_reference_service import (
    create_file_references,
    update_file_counts,
)
from attach_files.services.form_element_service import (
    is_upload_element,
    resolve_element_kinds,
)
from attach_files.services.record_store import RecordStore
from attach_files.services.upload_value_service import extract_file_ids
from attach_files.types import FieldMapping, FormValues

logger = logging.getLogger(__name__)


class AttachFilesToRecordFinisher:
    """Create file references for upload elements and store per-field counts."""

    identifier = FinisherIdentifier.ATTACH_FILES_TO_RECORD.value

    def __init__(self, options: Mapping[str, Any], store: RecordStore):
        self.options = dict(options)
        self.store = store
        self.attached: FieldMapping = {}

    def execute(self, context: FinisherContext) -> str | None:
        """Run against the submission in ``context``; never interrupts the pipeline."""
        options = AttachFilesToRecordOptions.model_validate(
            context.resolve_options(self.options)
        )
        element_kinds = resolve_element_kinds(context.form_definition, options.elements)
        self.attached = self.run(options, element_kinds, context.form_values)
        return None

    def run(
        self,
        options: AttachFilesToRecordOptions,
        element_kinds: Mapping[str, ElementKind],
        form_values: FormValues,
    ) -> FieldMapping:
        """
        Attach the configured elements' files and return what was written.

        Returns an empty mapping when the options do not apply (no table or
        no positive record id) or no element yielded any file.
        """
        table = options.table
        record_id = options.record_id
        if record_id <= 0 or not table:
            logger.debug(
                "attach_files_not_applicable",
                extra=build_log_context(
                    finisher=self.identifier, table=table or None, record_id=record_id
                ),
            )
            return {}

        mappings: FieldMapping = {}
        for element_id in options.elements:
            kind = element_kinds.get(element_id, ElementKind.OTHER)
            if not is_upload_element(kind):
                logger.debug(
                    "attach_files_element_skipped",
                    extra=build_log_context(finisher=self.identifier, element_id=element_id),
                )
                continue

            value = form_values.get(element_id)
            if value is None:
                continue

            file_ids = extract_file_ids(value)
            if file_ids:
                # A later element mapped onto the same column replaces the earlier one.
                mappings[options.target_column(element_id)] = file_ids

        if mappings:
            create_file_references(
                self.store, table, record_id, options.storage_pid, mappings
            )
            update_file_counts(self.store, table, record_id, mappings)
            logger.info(
                "attach_files_completed fields=%s",
                ",".join(mappings),
                extra=build_log_context(
                    finisher=self.identifier, table=table, record_id=record_id
                ),
            )

        return mappings
