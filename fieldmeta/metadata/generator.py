from __future__ import annotations

from collections.abc import Mapping
from enum import Enum

"""CustomField metadata (field-meta.xml) generator.

One field record (CSV 1 行) -> one XML document. The generator is pure: no I/O,
no dependency on other records. Type is selected by the `Type` column
(case-insensitive, surrounding whitespace ignored).

Element order inside each type block is fixed (length -> visibleLines,
precision -> scale, ...) so that generated files stay byte-for-byte stable.
"""

__all__ = [
    "FieldType",
    "UnsupportedTypeError",
    "escape_xml",
    "generate_field_xml",
    "parse_picklist_values",
    "resolve_with_default",
]

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
METADATA_NAMESPACE = "http://soap.sforce.com/2006/04/metadata"
OPEN_TAG = f'<CustomField xmlns="{METADATA_NAMESPACE}">'
CLOSE_TAG = "</CustomField>"

DEFAULT_LONG_TEXT_LENGTH = "32768"
DEFAULT_VISIBLE_LINES = "3"
DEFAULT_PRECISION = "18"
DEFAULT_SCALE = "2"
DEFAULT_DELETE_CONSTRAINT = "SetNull"

# & を最初に置換すること (後段で生成される実体参照を二重エスケープしない)
_XML_ESCAPES: tuple[tuple[str, str], ...] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


class UnsupportedTypeError(Exception):
    """Raised when the `Type` column matches none of the known field types."""

    def __init__(self, raw_type: str | None) -> None:
        self.raw_type = "" if raw_type is None else raw_type
        super().__init__(f"Unsupported field type: {self.raw_type}")


class FieldType(Enum):
    """Closed set of supported field types.

    Value = tag as written in the CSV (lowercase); `metadata_type` = <type> element.
    """
    TEXT = "text"
    LONG_TEXT_AREA = "textarea(long)"
    NUMBER = "number"
    CURRENCY = "currency"
    PERCENT = "percent"
    CHECKBOX = "checkbox"
    PICKLIST = "picklist"
    DATE = "date"
    TIME = "time"
    LOOKUP = "lookup"

    @property
    def metadata_type(self) -> str:
        return _METADATA_TYPES[self]

    @classmethod
    def parse(cls, raw: str | None) -> FieldType:
        """Resolve a raw `Type` cell. Raises UnsupportedTypeError with the raw value."""
        tag = ("" if raw is None else str(raw)).strip().lower()
        try:
            return cls(tag)
        except ValueError:
            raise UnsupportedTypeError(raw) from None


_METADATA_TYPES: dict[FieldType, str] = {
    FieldType.TEXT: "Text",
    FieldType.LONG_TEXT_AREA: "LongTextArea",
    FieldType.NUMBER: "Number",
    FieldType.CURRENCY: "Currency",
    FieldType.PERCENT: "Percent",
    FieldType.CHECKBOX: "Checkbox",
    FieldType.PICKLIST: "Picklist",
    FieldType.DATE: "Date",
    FieldType.TIME: "Time",
    FieldType.LOOKUP: "Lookup",
}

_NUMERIC_TYPES = frozenset({FieldType.NUMBER, FieldType.CURRENCY, FieldType.PERCENT})


def escape_xml(value: object) -> str:
    """Minimal XML escaping for text nodes. None -> ""."""
    text = "" if value is None else str(value)
    for raw, entity in _XML_ESCAPES:
        text = text.replace(raw, entity)
    return text


def _is_blank(value: str | None) -> bool:
    return value is None or str(value).strip() == ""


def resolve_with_default(raw: str | None, default: str) -> str:
    """Return `raw` untouched when it has non-whitespace content, else `default`."""
    if _is_blank(raw):
        return default
    return str(raw)


def parse_picklist_values(raw: str | None) -> list[str]:
    """Split a comma separated picklist cell; entries trimmed, empties dropped."""
    if raw is None:
        return []
    return [v.strip() for v in str(raw).split(",") if v.strip()]


def _element(name: str, value: object, indent: int = 2) -> str:
    return f"{' ' * indent}<{name}>{escape_xml(value)}</{name}>"


def _picklist_lines(record: Mapping[str, str]) -> list[str]:
    lines = [
        "  <valueSet>",
        "    <valueSetDefinition>",
        "      <sorted>false</sorted>",
    ]
    for val in parse_picklist_values(record.get("PicklistValues")):
        lines.append("      <value>")
        lines.append(_element("fullName", val, indent=8))
        lines.append("        <default>false</default>")
        lines.append(_element("label", val, indent=8))
        lines.append("      </value>")
    lines.append("    </valueSetDefinition>")
    lines.append("  </valueSet>")
    return lines


def _lookup_lines(record: Mapping[str, str]) -> list[str]:
    relationship_label = resolve_with_default(
        record.get("RelationshipLabel"), record.get("FieldLabel", "")
    )
    relationship_name = resolve_with_default(
        record.get("ChildRelationshipName"), record.get("FieldName", "")
    )
    delete_constraint = resolve_with_default(
        record.get("DeleteConstraint"), DEFAULT_DELETE_CONSTRAINT
    )
    return [
        _element("referenceTo", record.get("ReferenceTo")),
        _element("relationshipLabel", relationship_label),
        _element("relationshipName", relationship_name),
        _element("deleteConstraint", delete_constraint),
    ]


def _type_lines(field_type: FieldType, record: Mapping[str, str]) -> list[str]:
    lines = [_element("type", field_type.metadata_type)]

    if field_type is FieldType.TEXT:
        # Text は既定値なし: 空欄でもそのまま出力
        lines.append(_element("length", record.get("Length")))
    elif field_type is FieldType.LONG_TEXT_AREA:
        lines.append(_element("length", resolve_with_default(record.get("Length"), DEFAULT_LONG_TEXT_LENGTH)))
        lines.append(
            _element("visibleLines", resolve_with_default(record.get("VisibleLines"), DEFAULT_VISIBLE_LINES))
        )
    elif field_type in _NUMERIC_TYPES:
        lines.append(_element("precision", resolve_with_default(record.get("Precision"), DEFAULT_PRECISION)))
        lines.append(_element("scale", resolve_with_default(record.get("Scale"), DEFAULT_SCALE)))
    elif field_type is FieldType.CHECKBOX:
        lines.append("  <defaultValue>false</defaultValue>")
    elif field_type is FieldType.PICKLIST:
        lines.extend(_picklist_lines(record))
    elif field_type is FieldType.LOOKUP:
        lines.extend(_lookup_lines(record))
    # DATE / TIME: <type> only
    return lines


def generate_field_xml(record: Mapping[str, str]) -> str:
    """Generate the field-meta.xml document for one field record.

    Args:
        record: column name -> raw cell value (missing columns are treated as "")

    Returns:
        XML text, lines joined with "\\n" and no trailing newline

    Raises:
        UnsupportedTypeError: `Type` is not one of the FieldType tags
    """
    field_type = FieldType.parse(record.get("Type"))

    parts = [
        XML_DECLARATION,
        OPEN_TAG,
        _element("fullName", record.get("FieldName")),
        _element("label", record.get("FieldLabel")),
    ]
    description = record.get("Description")
    if not _is_blank(description):
        parts.append(_element("description", description))

    parts.extend(_type_lines(field_type, record))
    parts.append(CLOSE_TAG)
    return "\n".join(parts)
