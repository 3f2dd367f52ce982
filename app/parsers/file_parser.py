"""
app/parsers/file_parser.py

Shape normalization of uploaded CSV/JSON text into raw records.

No validation happens here: every CSV value stays a string and JSON values
keep whatever type the document gave them.
"""

from __future__ import annotations

import csv
import io
import json
from typing import Any

from app.domain.errors import FileFormatError, FileReadError, UnsupportedFormatError

CSV_EXTENSION = "csv"
JSON_EXTENSION = "json"
SUPPORTED_EXTENSIONS: tuple[str, ...] = (CSV_EXTENSION, JSON_EXTENSION)


def read_file_as_text(content: bytes | str) -> str:
    """
    Decode raw upload bytes as UTF-8, tolerating a byte-order mark.
    """

    if isinstance(content, str):
        return content
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise FileReadError("Failed to read file") from exc


def file_extension(file_name: str) -> str:
    """
    Lower-cased text after the final dot, or the whole name if there is none.
    """

    return file_name.rsplit(".", 1)[-1].strip().lower()


def parse_upload(file_name: str, text: str) -> list[dict[str, Any]]:
    """
    Dispatch to the CSV or JSON parser by file extension.
    """

    extension = file_extension(file_name)
    if extension == CSV_EXTENSION:
        return parse_csv(text)
    if extension == JSON_EXTENSION:
        return parse_json(text)
    raise UnsupportedFormatError(extension)


def parse_csv(text: str) -> list[dict[str, str]]:
    """
    Parse comma-delimited text whose first non-blank row is the header.

    Header cells are trimmed, lower-cased and stripped of quote characters.
    Data rows are zipped positionally against the header: short rows are
    padded with empty strings and surplus cells are dropped. Quoted cells may
    contain commas.
    """

    try:
        rows = [row for row in csv.reader(io.StringIO(text)) if not _is_blank_row(row)]
    except csv.Error as exc:
        raise FileFormatError(f"Invalid CSV format: {exc}") from exc

    if len(rows) < 2:
        return []

    headers = [cell.strip().replace('"', "").lower() for cell in rows[0]]
    records: list[dict[str, str]] = []
    for row in rows[1:]:
        values = [cell.strip() for cell in row]
        records.append(
            {
                header: values[position] if position < len(values) else ""
                for position, header in enumerate(headers)
            }
        )
    return records


def parse_json(text: str) -> list[dict[str, Any]]:
    """
    Parse a JSON object or an array of JSON objects.
    """

    try:
        data = json.loads(text)
    except (json.JSONDecodeError, ValueError) as exc:
        raise FileFormatError("Invalid JSON format") from exc

    items = data if isinstance(data, list) else [data]
    for position, item in enumerate(items):
        if not isinstance(item, dict):
            raise FileFormatError(
                f"Invalid JSON format: element {position} is not an object."
            )
    return items


def _is_blank_row(row: list[str]) -> bool:
    return not row or (len(row) == 1 and row[0].strip() == "")
