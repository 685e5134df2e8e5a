from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

"""Generation result models.

This module defines the models for aggregating per-row outcomes and run metrics
returned by fieldmeta.services.orchestrator.generate_archive().
"""

__all__ = [
    "RecordStatus",
    "RecordOutcome",
    "GenerationResult",
]


class RecordStatus(Enum):
    """Outcome of a single field record.

    - CREATED: document generated and added to the archive
    - SKIPPED: ObjectName or FieldName blank (not an error)
    - FAILED: generation failed (unsupported Type)
    """
    CREATED = "created"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class RecordOutcome:
    row_number: int  # データ行番号 (ヘッダ除く, 1 始まり)
    object_name: str
    field_name: str
    status: RecordStatus
    path: str | None = None  # archive path when CREATED
    error: str | None = None  # failure reason when FAILED


@dataclass(frozen=True)
class GenerationResult:
    """Aggregated results of one run (SUMMARY line source)."""
    source_name: str  # CSV file name
    total_rows: int  # decoded data rows
    created: int  # documents added (duplicates counted per add)
    skipped: int  # rows without ObjectName/FieldName
    failed: int  # unsupported Type rows
    duplicates: int  # archive paths replaced (last wins)
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    archive_path: Path | None = None  # None when nothing was generated
    outcomes: list[RecordOutcome] | None = None

    @property
    def entries(self) -> int:
        """Distinct entries in the archive."""
        return self.created - self.duplicates

    @property
    def all_succeeded(self) -> bool:
        """Skipped rows (blank ObjectName/FieldName) do not count as failures."""
        return self.failed == 0
