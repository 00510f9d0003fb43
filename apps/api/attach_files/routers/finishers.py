"""Finisher endpoints run by the form submission pipeline."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from attach_files.core.deps import get_db
from attach_files.core.structured_logging import build_log_context
from attach_files.db.models import StoredFile
from attach_files.finishers.context import FinisherContext
from attach_files.finishers.registry import get_finisher
from attach_files.schemas.finishers import AttachFilesRequest, AttachFilesResponse
from attach_files.schemas.forms import FormDefinition
from attach_files.services.record_store import SqlRecordStore
from attach_files.services.upload_value_service import (
    UploadedFile,
    UploadedFileCollection,
)
from attach_files.types import FormValues

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/finishers", tags=["finishers"])


# =============================================================================
# Helpers
# =============================================================================

def _load_stored_files(db: Session, file_ids: set[int]) -> dict[int, StoredFile]:
    if not file_ids:
        return {}
    rows = db.query(StoredFile).filter(StoredFile.id.in_(file_ids)).all()
    return {row.id: row for row in rows}


def _build_form_values(
    db: Session, values: dict[str, int | list[int] | None]
) -> FormValues:
    """Turn submitted stored-file ids into uploaded-file values."""
    requested: set[int] = set()
    for value in values.values():
        if isinstance(value, list):
            requested.update(value)
        elif value is not None:
            requested.add(value)
    stored = _load_stored_files(db, requested)

    form_values: FormValues = {}
    for element_id, value in values.items():
        if value is None:
            form_values[element_id] = None
        elif isinstance(value, list):
            form_values[element_id] = UploadedFileCollection(
                tuple(UploadedFile(stored.get(file_id)) for file_id in value)
            )
        else:
            form_values[element_id] = UploadedFile(stored.get(value))
    return form_values


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/{identifier}/execute", response_model=AttachFilesResponse)
def execute_finisher(
    identifier: str,
    payload: AttachFilesRequest,
    db: Session = Depends(get_db),
):
    """
    Execute a finisher for an accepted submission.

    ``finisher_results`` carries the output of earlier stages, e.g.
    ``{"SaveToDatabase": {"insertedUids": [42]}}``.
    """
    try:
        finisher = get_finisher(identifier, payload.options, SqlRecordStore(db))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    context = FinisherContext(
        form_definition=FormDefinition(elements=payload.elements),
        form_values=_build_form_values(db, payload.values),
        finisher_results=payload.finisher_results,
    )

    try:
        finisher.execute(context)
        db.commit()
    except ValidationError as e:
        db.rollback()
        raise HTTPException(status_code=422, detail=e.errors(include_url=False))
    except SQLAlchemyError:
        db.rollback()
        logger.exception(
            "finisher_storage_failed",
            extra=build_log_context(finisher=identifier),
        )
        raise

    return AttachFilesResponse(
        attached=finisher.attached,
        reference_count=sum(len(file_ids) for file_ids in finisher.attached.values()),
    )
