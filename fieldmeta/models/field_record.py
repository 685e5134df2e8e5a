from __future__ import annotations

from dataclasses import dataclass

"""FieldRecord model.

FieldRecord represents a single decoded CSV data row (1-based, header excluded)
together with the trimmed identifiers used for the archive path.
"""

__all__ = [
    "FieldRecord",
    "OBJECT_NAME_COLUMN",
    "FIELD_NAME_COLUMN",
]

OBJECT_NAME_COLUMN = "ObjectName"
FIELD_NAME_COLUMN = "FieldName"


@dataclass(frozen=True)
class FieldRecord:
    """Logical representation of one field definition row.

    The row_number refers to the data row index (1st row after the header = 1).
    """
    row_number: int
    values: dict[str, str]  # Column name -> raw cell text (header order)

    @property
    def object_name(self) -> str:
        return (self.values.get(OBJECT_NAME_COLUMN) or "").strip()

    @property
    def field_name(self) -> str:
        return (self.values.get(FIELD_NAME_COLUMN) or "").strip()

    @property
    def has_identifiers(self) -> bool:
        """Both ObjectName and FieldName are non-blank (archive path computable)."""
        return bool(self.object_name and self.field_name)
