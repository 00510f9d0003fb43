"""CLI tools for attaching stored files to records."""

import click

from attach_files.db.enums import FormElementType
from attach_files.db.models import StoredFile
from attach_files.db.session import SessionLocal
from attach_files.finishers.attach_files_to_record import AttachFilesToRecordFinisher
from attach_files.finishers.context import FinisherContext
from attach_files.schemas.forms import FormDefinition, FormElement
from attach_files.services.record_store import SqlRecordStore
from attach_files.services.upload_value_service import UploadedFile, UploadedFileCollection


def _parse_element(raw: str) -> tuple[str, str]:
    element_id, _, column = raw.partition(":")
    return element_id.strip(), (column.strip() or element_id.strip())


def _parse_value(raw: str) -> tuple[str, list[int]]:
    element_id, sep, ids = raw.partition("=")
    if not sep:
        raise click.BadParameter(f"Expected ELEMENT=ID[,ID...], got '{raw}'")
    try:
        file_ids = [int(part) for part in ids.split(",") if part.strip()]
    except ValueError as exc:
        raise click.BadParameter(f"File ids must be integers: '{ids}'") from exc
    return element_id.strip(), file_ids


@click.group()
def cli():
    """Attach-files CLI tools."""
    pass


@cli.command()
@click.option("--table", required=True, help="Table of the record receiving the files")
@click.option("--record-uid", required=True, type=int, help="Id of the record")
@click.option("--storage-pid", default=0, type=int, help="Storage location of the references")
@click.option(
    "--element",
    "elements",
    multiple=True,
    required=True,
    help="Upload element as ELEMENT[:COLUMN]; COLUMN defaults to ELEMENT",
)
@click.option(
    "--value",
    "values",
    multiple=True,
    help="Submitted files as ELEMENT=ID[,ID...]",
)
def attach(
    table: str,
    record_uid: int,
    storage_pid: int,
    elements: tuple[str, ...],
    values: tuple[str, ...],
):
    """
    Attach stored files to an existing record.

    Example:
        python -m attach_files.cli attach --table tx_items --record-uid 42 \\
            --element images --element docs:files --value images=10,11 --value docs=20
    """
    element_columns = dict(_parse_element(raw) for raw in elements)
    submitted = dict(_parse_value(raw) for raw in values)

    db = SessionLocal()
    try:
        stored = {
            row.id: row
            for row in db.query(StoredFile)
            .filter(StoredFile.id.in_({i for ids in submitted.values() for i in ids}))
            .all()
        }
        context = FinisherContext(
            form_definition=FormDefinition(
                elements=[
                    FormElement(
                        identifier=element_id,
                        type=FormElementType.MULTI_FILE_UPLOAD.value,
                    )
                    for element_id in element_columns
                ]
            ),
            form_values={
                element_id: UploadedFileCollection(
                    tuple(UploadedFile(stored.get(file_id)) for file_id in file_ids)
                )
                for element_id, file_ids in submitted.items()
            },
        )
        finisher = AttachFilesToRecordFinisher(
            {
                "table": table,
                "recordUid": record_uid,
                "storagePid": storage_pid,
                "elements": {
                    element_id: {"mapOnDatabaseColumn": column}
                    for element_id, column in element_columns.items()
                },
            },
            SqlRecordStore(db),
        )
        finisher.execute(context)
        db.commit()

        if not finisher.attached:
            click.echo("Nothing attached")
            return
        for column, file_ids in finisher.attached.items():
            click.echo(f"✓ {table}.{column}: {len(file_ids)} file(s) {file_ids}")

    except Exception as e:
        db.rollback()
        click.echo(f"❌ Error: {e}")
        raise SystemExit(1)
    finally:
        db.close()


if __name__ == "__main__":
    cli()
