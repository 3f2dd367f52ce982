"""
app/parsers package marker.
"""

from app.parsers.file_parser import (
    SUPPORTED_EXTENSIONS,
    file_extension,
    parse_csv,
    parse_json,
    parse_upload,
    read_file_as_text,
)

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "file_extension",
    "parse_csv",
    "parse_json",
    "parse_upload",
    "read_file_as_text",
]
