#!/usr/bin/env python3
"""Dataset generation script for sample / performance CSV files.

Generates synthetic field-definition CSV files accepted by the fieldmeta CLI:
- Row 1: Header row (ObjectName, FieldName, Type, FieldLabel, ...)
- Row 2+: One field definition per row, every supported Type represented

Optionally a share of rows is made invalid (unsupported Type, blank FieldName)
so that skip / failure paths can be exercised.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

COLUMNS = [
    "ObjectName",
    "FieldName",
    "Type",
    "FieldLabel",
    "Description",
    "Length",
    "VisibleLines",
    "Precision",
    "Scale",
    "PicklistValues",
    "ReferenceTo",
    "RelationshipLabel",
    "ChildRelationshipName",
    "DeleteConstraint",
]

FIELD_TYPES = [
    "Text",
    "TextArea(Long)",
    "Number",
    "Currency",
    "Percent",
    "Checkbox",
    "Picklist",
    "Date",
    "Time",
    "Lookup",
]

OBJECTS = ["Account", "Contact", "Opportunity", "Case", "Invoice__c", "Project__c"]


def _row_for_type(field_type: str, obj: str, idx: int) -> dict[str, Any]:
    name = f"Field_{idx}__c"
    row: dict[str, Any] = {c: "" for c in COLUMNS}
    row.update(
        ObjectName=obj,
        FieldName=name,
        Type=field_type,
        FieldLabel=f"Field {idx}",
    )
    if idx % 4 == 0:
        row["Description"] = f"Generated field {idx}, used for \"sample\" data"
    if field_type == "Text":
        row["Length"] = str(np.random.randint(10, 255))
    elif field_type in ("Number", "Currency", "Percent") and idx % 2 == 0:
        row["Precision"] = str(np.random.randint(3, 18))
        row["Scale"] = str(np.random.randint(0, 3))
    elif field_type == "Picklist":
        count = np.random.randint(2, 6)
        row["PicklistValues"] = ", ".join(f"Option {chr(65 + k)}" for k in range(count))
    elif field_type == "Lookup":
        row["ReferenceTo"] = np.random.choice([o for o in OBJECTS if o != obj])
    return row


def generate_field_definitions(rows: int, invalid_ratio: float = 0.0, seed: int = 42) -> pd.DataFrame:
    """Generate synthetic field definitions.

    Args:
        rows: Number of data rows to generate
        invalid_ratio: Share of rows made invalid (half unsupported Type, half blank FieldName)
        seed: Random seed for reproducible data

    Returns:
        DataFrame with COLUMNS, all values str
    """
    np.random.seed(seed)

    records = []
    for idx in range(1, rows + 1):
        field_type = FIELD_TYPES[(idx - 1) % len(FIELD_TYPES)]
        obj = str(np.random.choice(OBJECTS))
        records.append(_row_for_type(field_type, obj, idx))

    invalid_count = int(rows * invalid_ratio)
    if invalid_count:
        invalid_idx = np.random.choice(rows, invalid_count, replace=False)
        for n, i in enumerate(invalid_idx):
            if n % 2 == 0:
                records[i]["Type"] = "Widget"
            else:
                records[i]["FieldName"] = ""

    return pd.DataFrame(records, columns=COLUMNS).astype(str)


def create_csv_file(output_path: Path, rows: int, invalid_ratio: float = 0.0, seed: int = 42) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df = generate_field_definitions(rows, invalid_ratio, seed)
    df.to_csv(output_path, index=False, encoding="utf-8")

    print(f"Created CSV file: {output_path}")
    print(f"  Rows: {rows} (+ 1 header row)")
    print(f"  Invalid rows: {int(rows * invalid_ratio)}")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate synthetic field-definition CSV files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate default 1,000 rows
  %(prog)s fields.csv

  # Generate 50k rows with 5% invalid rows
  %(prog)s large_fields.csv --rows 50000 --invalid-ratio 0.05
        """,
    )
    parser.add_argument("output", type=Path, help="Output CSV file path")
    parser.add_argument("--rows", type=int, default=1_000, help="Number of data rows (default: 1,000)")
    parser.add_argument(
        "--invalid-ratio",
        type=float,
        default=0.0,
        help="Share of invalid rows between 0 and 1 (default: 0)",
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if not 0.0 <= args.invalid_ratio <= 1.0:
        print("Error: --invalid-ratio must be between 0 and 1", file=sys.stderr)
        return 1

    try:
        create_csv_file(args.output, args.rows, args.invalid_ratio, args.seed)
    except OSError as e:
        print(f"\nError generating dataset: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
