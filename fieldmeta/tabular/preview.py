from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

"""Tabular preview helpers for --inspect-data.

Decoded records are shown through a DataFrame (all columns str) so that
headers and the first rows can be printed in aligned form.
"""

__all__ = [
    "records_to_frame",
    "render_preview",
]


def records_to_frame(records: Sequence[dict[str, str]]) -> pd.DataFrame:
    """Build a str-typed DataFrame keeping header order of the first record."""
    if not records:
        return pd.DataFrame()
    columns = list(records[0].keys())
    return pd.DataFrame.from_records(list(records), columns=columns).astype(str)


def render_preview(records: Sequence[dict[str, str]], limit: int = 3) -> str:
    df = records_to_frame(records)
    if df.empty:
        return "(no rows)"
    return df.head(limit).to_string(index=False)
