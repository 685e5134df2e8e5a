from __future__ import annotations

import sys
from collections import Counter
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

from ..models.generation_result import RecordOutcome, RecordStatus

"""Per-record progress for one generation run.

The tracker is fed one RecordOutcome per decoded row and keeps the
created / skipped / failed tallies the orchestrator reports. The tqdm bar is
drawn only when stdout is a TTY; the tallies are kept either way.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """Return True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class ProgressTracker:
    """Record tally with an optional tqdm bar (`Generating fields [Score__c] 3/10`)."""

    def __init__(self, total_records: int, *, description: str = "Generating fields") -> None:
        self.total_records = total_records
        self.description = description
        self.counts: Counter[RecordStatus] = Counter()

        self.pbar: TqdmType[Any] | None = None
        if is_tty_enabled():
            self.pbar = tqdm(
                total=total_records,
                desc=description,
                unit="field",
                leave=True,
                ncols=80,
                ascii=True,
            )

    @property
    def processed(self) -> int:
        return sum(self.counts.values())

    def count(self, status: RecordStatus) -> int:
        return self.counts[status]

    def advance(self, outcome: RecordOutcome) -> None:
        """Count one finished record and move the bar by one."""
        self.counts[outcome.status] += 1
        if self.pbar is None:
            return
        label = outcome.field_name or f"row {outcome.row_number}"
        self.pbar.set_description(f"{self.description} [{label}]", refresh=False)
        self.pbar.set_postfix(
            created=self.count(RecordStatus.CREATED),
            skipped=self.count(RecordStatus.SKIPPED),
            failed=self.count(RecordStatus.FAILED),
            refresh=False,
        )
        self.pbar.update(1)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.set_description(self.description, refresh=False)
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
