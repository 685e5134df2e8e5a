from .decoder import decode, parse_rows, read_csv_text, strip_bom

__all__ = [
    "decode",
    "parse_rows",
    "read_csv_text",
    "strip_bom",
]
