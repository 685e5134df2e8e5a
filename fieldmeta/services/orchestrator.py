from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..archive.writer import MetadataArchive, build_entry_path
from ..config.loader import GeneratorConfig
from ..logging.error_log import ErrorLogBuffer
from ..metadata.generator import UnsupportedTypeError, generate_field_xml
from ..models.archive_entry import ArchiveEntry
from ..models.error_record import UNSUPPORTED_TYPE, ErrorRecord
from ..models.field_record import FIELD_NAME_COLUMN, FieldRecord
from ..models.generation_result import GenerationResult, RecordOutcome, RecordStatus
from ..tabular.decoder import decode, read_csv_text
from .progress import ProgressTracker

"""Service orchestration for the CSV -> field-meta.xml generator.

Coordinates one run: read the CSV, decode rows, generate one document per row,
accumulate documents in the archive and write the ZIP once.

- Row level problems (missing identifiers, unsupported Type) never abort the run
- File read / ZIP write failures propagate to the caller (no retry)
- Nothing generated -> the archive is never written
"""

__all__ = [
    "InputMissingError",
    "ProcessingError",
    "generate_archive",
    "load_records",
    "process_record",
    "resolve_input",
]

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Base exception for processing errors."""
    pass


class InputMissingError(ProcessingError):
    """No CSV file was given, or the given path is not a file."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path
        detail = "no file selected" if path is None else f"file not found: {path}"
        super().__init__(f"Please choose a CSV file first. ({detail})")


def resolve_input(csv_path: Path | str | None) -> Path:
    """Validate the input selection.

    Raises:
        InputMissingError: csv_path is None/blank or does not point to a file
    """
    if csv_path is None or str(csv_path).strip() == "":
        raise InputMissingError(None)
    path = Path(csv_path)
    if not path.is_file():
        raise InputMissingError(path)
    return path


def load_records(path: Path, encoding: str = "utf-8") -> list[FieldRecord]:
    """Read and decode a CSV file into FieldRecords (row_number 1 = first data row)."""
    text = read_csv_text(path, encoding=encoding)
    return [FieldRecord(row_number=i, values=values) for i, values in enumerate(decode(text), start=1)]


def process_record(
    record: FieldRecord,
    archive: MetadataArchive,
    error_log: ErrorLogBuffer,
    source_name: str,
) -> RecordOutcome:
    """Generate one record into the archive and report what happened to it."""
    object_name = record.object_name
    field_name = record.field_name

    if not record.has_identifiers:
        # 空行扱い: エラーログには残さない
        logger.info("Skipping a row due to missing ObjectName or FieldName.")
        return RecordOutcome(
            row_number=record.row_number,
            object_name=object_name,
            field_name=field_name,
            status=RecordStatus.SKIPPED,
        )

    try:
        xml = generate_field_xml(record.values)
    except UnsupportedTypeError as e:
        # 行単位の失敗: ログのみ残して次の行へ
        logger.error("on FieldName=%s: %s", record.values.get(FIELD_NAME_COLUMN, ""), e)
        error_log.append(
            ErrorRecord.create(
                file=source_name,
                row=record.row_number,
                field_name=field_name,
                error_type=UNSUPPORTED_TYPE,
                message=str(e),
            )
        )
        return RecordOutcome(
            row_number=record.row_number,
            object_name=object_name,
            field_name=field_name,
            status=RecordStatus.FAILED,
            error=str(e),
        )

    entry = ArchiveEntry(path=build_entry_path(archive.base_dir, object_name, field_name), content=xml)
    archive.add(entry)
    logger.info("Added: %s", entry.path)
    return RecordOutcome(
        row_number=record.row_number,
        object_name=object_name,
        field_name=field_name,
        status=RecordStatus.CREATED,
        path=entry.path,
    )


def _flush_error_log(error_log: ErrorLogBuffer) -> None:
    try:
        path = error_log.flush()
    except OSError as e:
        # Don't fail the entire run if the error log cannot be written
        logger.warning("failed to write error log: %s", e)
        return
    if path is not None:
        logger.info("Row errors written to: %s", path)


def generate_archive(
    csv_path: Path | str | None,
    config: GeneratorConfig | None = None,
    output_dir: Path | None = None,
) -> GenerationResult:
    """Run one CSV -> ZIP generation.

    Args:
        csv_path: Input CSV (None -> InputMissingError)
        config: Generator settings (defaults when None)
        output_dir: Where the ZIP is written (defaults to config.output_directory)

    Returns:
        GenerationResult; archive_path is None when no document was generated

    Raises:
        InputMissingError: no input file
        ArchiveWriteError: ZIP could not be written
    """
    cfg = config or GeneratorConfig()
    start_time = datetime.now(UTC)

    path = resolve_input(csv_path)
    target_dir = output_dir if output_dir is not None else Path(cfg.output_directory)

    logger.info("Reading: %s", path.name)
    records = load_records(path, encoding=cfg.encoding)

    def _result(
        created: int = 0,
        skipped: int = 0,
        failed: int = 0,
        duplicates: int = 0,
        archive_path: Path | None = None,
        outcomes: list[RecordOutcome] | None = None,
    ) -> GenerationResult:
        end_time = datetime.now(UTC)
        return GenerationResult(
            source_name=path.name,
            total_rows=len(records),
            created=created,
            skipped=skipped,
            failed=failed,
            duplicates=duplicates,
            start_time=start_time,
            end_time=end_time,
            elapsed_seconds=(end_time - start_time).total_seconds(),
            archive_path=archive_path,
            outcomes=outcomes if outcomes is not None else [],
        )

    if not records:
        logger.info("No rows found. Check the CSV format.")
        return _result()

    logger.info("Parsed %d data rows.", len(records))

    archive = MetadataArchive(cfg.output_base_dir)
    error_log = ErrorLogBuffer(Path(cfg.error_log_directory))
    outcomes: list[RecordOutcome] = []

    with ProgressTracker(len(records)) as progress:
        for record in records:
            outcome = process_record(record, archive, error_log, path.name)
            outcomes.append(outcome)
            progress.advance(outcome)

    _flush_error_log(error_log)

    created = progress.count(RecordStatus.CREATED)
    skipped = progress.count(RecordStatus.SKIPPED)
    failed = progress.count(RecordStatus.FAILED)
    if created == 0:
        logger.info("No files were generated (all rows skipped or errored).")
        return _result(skipped=skipped, failed=failed, outcomes=outcomes)

    logger.info("Generating ZIP (%d files)...", len(archive))
    zip_path = archive.write(target_dir)
    logger.info("Done. Wrote: %s", zip_path)

    return _result(
        created=created,
        skipped=skipped,
        failed=failed,
        duplicates=archive.overwrites,
        archive_path=zip_path,
        outcomes=outcomes,
    )
