from __future__ import annotations

from ..models.generation_result import GenerationResult

"""Summary line rendering service.

Format:
SUMMARY rows={rows} created={created} skipped={skipped} failed={failed}
duplicates={duplicates} elapsed_sec={elapsed} archive={zip name or "-"}
"""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # Format very small numbers to avoid scientific notation
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(result: GenerationResult) -> str:
    """Render the SUMMARY line for a GenerationResult.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = GenerationResult(
        ...     source_name="fields.csv", total_rows=3, created=2, skipped=1, failed=0,
        ...     duplicates=0, start_time=start, end_time=end, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY rows=3 created=2 skipped=1 failed=0 duplicates=0 elapsed_sec=2 archive=-'
    """
    archive = result.archive_path.name if result.archive_path is not None else "-"
    return (
        f"SUMMARY rows={result.total_rows} "
        f"created={result.created} "
        f"skipped={result.skipped} "
        f"failed={result.failed} "
        f"duplicates={result.duplicates} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)} "
        f"archive={archive}"
    )
