from .generator import FieldType, UnsupportedTypeError, escape_xml, generate_field_xml

__all__ = [
    "FieldType",
    "UnsupportedTypeError",
    "escape_xml",
    "generate_field_xml",
]
