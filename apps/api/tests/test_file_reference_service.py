import logging
from datetime import datetime, timezone

import pytest

from attach_files.core.config import settings
from attach_files.services.file_reference_service import (
    create_file_references,
    update_file_counts,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def test_create_file_references_inserts_ordered_rows(store):
    inserted = create_file_references(
        store,
        "tx_items",
        42,
        3,
        {"images": [10, 11], "files": [20]},
        now=NOW,
    )

    assert inserted == 3
    assert [table for table, _ in store.inserts] == [settings.FILE_REFERENCE_TABLE] * 3
    assert [row for _, row in store.inserts] == [
        {
            "storage_pid": 3,
            "created_at": NOW,
            "updated_at": NOW,
            "file_id": 10,
            "table_name": "tx_items",
            "record_id": 42,
            "field_name": "images",
            "sorting": 0,
        },
        {
            "storage_pid": 3,
            "created_at": NOW,
            "updated_at": NOW,
            "file_id": 11,
            "table_name": "tx_items",
            "record_id": 42,
            "field_name": "images",
            "sorting": 1,
        },
        {
            "storage_pid": 3,
            "created_at": NOW,
            "updated_at": NOW,
            "file_id": 20,
            "table_name": "tx_items",
            "record_id": 42,
            "field_name": "files",
            "sorting": 0,
        },
    ]


def test_create_file_references_stamps_created_and_updated_alike(store):
    create_file_references(store, "tx_items", 42, 0, {"images": [10]})

    row = store.inserts[0][1]
    assert row["created_at"] == row["updated_at"]
    assert row["created_at"].tzinfo is not None


def test_create_file_references_with_empty_mapping_inserts_nothing(store):
    assert create_file_references(store, "tx_items", 42, 0, {}) == 0
    assert store.inserts == []


def test_insert_failure_propagates_and_keeps_earlier_rows(make_store):
    store = make_store(fail_on_insert=1)

    with pytest.raises(RuntimeError, match="insert rejected"):
        create_file_references(store, "tx_items", 42, 0, {"images": [10, 11, 12]})

    assert [row["file_id"] for _, row in store.inserts] == [10]


def test_update_file_counts_issues_single_update(store):
    update_file_counts(store, "tx_items", 42, {"images": [10, 11], "files": [20]})

    assert store.updates == [("tx_items", {"images": 2, "files": 1}, {"id": 42})]


def test_update_file_counts_with_empty_mapping_is_skipped(store):
    update_file_counts(store, "tx_items", 42, {})

    assert store.updates == []


def test_update_file_counts_warns_when_record_is_missing(make_store, caplog):
    store = make_store(update_matches=0)

    with caplog.at_level(logging.WARNING, logger="attach_files.services.file_reference_service"):
        update_file_counts(store, "tx_items", 404, {"images": [10]})

    assert "file_count_update_matched_no_record" in caplog.text
    assert caplog.records[0].record_id == 404
