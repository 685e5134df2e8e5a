"""Domain models for the CSV -> field-meta.xml generator.

This package contains the model classes used throughout the application:
decoded rows, archive entries, per-row error records and run results.
"""

from .archive_entry import ArchiveEntry
from .error_record import ErrorRecord
from .field_record import FieldRecord
from .generation_result import GenerationResult, RecordOutcome, RecordStatus

__all__ = [
    # Input / output units
    "FieldRecord",
    "ArchiveEntry",
    # Result models
    "ErrorRecord",
    "GenerationResult",
    "RecordOutcome",
    "RecordStatus",
]
