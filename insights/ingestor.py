"""
insights/ingestor.py

Decode uploaded tabular bytes into an immutable Dataset.

Supported formats
-----------------
.csv    UTF-8 delimited text (BOM tolerated), read with the ``csv`` module.
.xlsx   Excel workbook, first sheet only, read by pandas via openpyxl.
.xls    Legacy Excel workbook, first sheet only, read by pandas via xlrd.

Header handling
---------------
The first row supplies header names verbatim. Blank header cells are named
``Unnamed: <index>`` (and dropped when the whole column is blank). Duplicate
names keep the first occurrence untouched and suffix later ones with
``_1``, ``_2`` ... so the first occurrence stays authoritative for column
resolution.

Failure contract
----------------
- Unknown extension        -> UnsupportedExtensionError (nothing is decoded)
- Undecodable bytes        -> ParseFailureError (a zero-byte workbook included)
- No data rows after decode -> EmptyDatasetError
"""

from __future__ import annotations

import csv
import io
import logging
import math
import zipfile
from datetime import date, datetime, time
from typing import Any, Sequence

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException
from xlrd import XLRDError
from xlrd.compdoc import CompDocError

from insights.dataset import Cell, Dataset
from insights.errors import EmptyDatasetError, ParseFailureError, UnsupportedExtensionError

logger = logging.getLogger(__name__)

_EXCEL_ENGINES: dict[str, str] = {
    "xlsx": "openpyxl",
    "xls": "xlrd",
}

SUPPORTED_EXTENSIONS: tuple[str, ...] = (".csv", ".xlsx", ".xls")

_WORKBOOK_ERRORS = (
    ValueError,
    KeyError,
    OSError,
    EOFError,
    zipfile.BadZipFile,
    InvalidFileException,
    XLRDError,
    CompDocError,
)


def normalize_extension(extension: str) -> str:
    """
    Return a lowercase extension without the leading dot (``".XLSX"`` -> ``"xlsx"``).
    """

    return (extension or "").strip().lower().lstrip(".")


def extension_from_filename(filename: str) -> str:
    name = (filename or "").strip()
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1].lower()


def is_supported_extension(extension: str) -> bool:
    return f".{normalize_extension(extension)}" in SUPPORTED_EXTENSIONS


def ingest(content: bytes, extension: str) -> Dataset:
    """
    Decode *content* as a table in the format named by *extension*.

    Raises
    ------
    UnsupportedExtensionError
        *extension* is not ``csv``, ``xlsx`` or ``xls``.
    ParseFailureError
        The bytes are not a valid table in that format.
    EmptyDatasetError
        The table has no data rows.
    """

    source_format = normalize_extension(extension)
    if not is_supported_extension(source_format):
        raise UnsupportedExtensionError(
            f"Unsupported file extension '{extension}'. "
            f"Allowed: {', '.join(SUPPORTED_EXTENSIONS)}."
        )

    if source_format == "csv":
        raw_rows = _read_csv_rows(content)
    else:
        raw_rows = _read_workbook_rows(content, source_format)

    dataset = _build_dataset(raw_rows, source_format=source_format)
    logger.info(
        "Ingested dataset format=%s rows=%d columns=%d",
        source_format,
        dataset.row_count,
        dataset.column_count,
    )
    return dataset


# ---------------------------------------------------------------------------
# Decoders
# ---------------------------------------------------------------------------


def _read_csv_rows(content: bytes) -> list[list[Cell]]:
    text_stream: io.TextIOWrapper | None = None
    try:
        text_stream = io.TextIOWrapper(io.BytesIO(content), encoding="utf-8-sig", newline="")
        reader = csv.reader(text_stream)
        return [[cell if cell != "" else None for cell in record] for record in reader]
    except UnicodeDecodeError as exc:
        logger.warning("CSV decode failed: %s", exc)
        raise ParseFailureError("CSV must be UTF-8 encoded.") from exc
    except csv.Error as exc:
        logger.warning("CSV parse failed: %s", exc)
        raise ParseFailureError(f"Invalid CSV format: {exc}") from exc
    finally:
        if text_stream is not None:
            try:
                text_stream.detach()
            except ValueError:
                pass


def _read_workbook_rows(content: bytes, source_format: str) -> list[list[Cell]]:
    if not content:
        raise ParseFailureError(f"The .{source_format} file is empty.")
    try:
        frame = pd.read_excel(
            io.BytesIO(content),
            sheet_name=0,
            header=None,
            dtype=object,
            engine=_EXCEL_ENGINES[source_format],
        )
    except _WORKBOOK_ERRORS as exc:
        logger.warning("Workbook parse failed format=%s: %s", source_format, exc)
        raise ParseFailureError(
            f"Failed to read the file as an .{source_format} workbook."
        ) from exc

    return [
        [_workbook_cell(value) for value in record]
        for record in frame.itertuples(index=False, name=None)
    ]


def _workbook_cell(value: Any) -> Cell:
    """
    Convert one decoder value into a Cell: numbers stay numeric, blanks become None.
    """

    if value is None:
        return None
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, str):
        return value if value != "" else None
    if isinstance(value, (datetime, date, time)):
        if pd.isna(value):
            return None
        return value.isoformat()
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float) or hasattr(value, "__float__"):
        try:
            number = float(value)
        except (TypeError, ValueError):
            return str(value)
        if math.isnan(number):
            return None
        if number.is_integer() and math.isfinite(number):
            return int(number)
        return number
    return str(value)


# ---------------------------------------------------------------------------
# Dataset assembly
# ---------------------------------------------------------------------------


def _is_blank(cell: Cell) -> bool:
    return cell is None or (isinstance(cell, str) and not cell.strip())


def _header_text(cell: Cell) -> str:
    if cell is None:
        return ""
    if isinstance(cell, float) and cell.is_integer():
        return str(int(cell))
    return str(cell)


def _unique_headers(raw_headers: Sequence[str]) -> list[str]:
    """
    Disambiguate duplicate header names by suffixing later occurrences.
    """

    taken = set(raw_headers)
    seen: set[str] = set()
    headers: list[str] = []
    for name in raw_headers:
        if name not in seen:
            seen.add(name)
            headers.append(name)
            continue
        suffix = 1
        while f"{name}_{suffix}" in taken:
            suffix += 1
        candidate = f"{name}_{suffix}"
        taken.add(candidate)
        seen.add(candidate)
        headers.append(candidate)
        logger.debug("Duplicate header %r renamed to %r", name, candidate)
    return headers


def _build_dataset(raw_rows: list[list[Cell]], *, source_format: str) -> Dataset:
    if not raw_rows:
        raise EmptyDatasetError("The uploaded file contains no data rows.")

    header_cells = raw_rows[0]
    width = len(header_cells)
    data_rows = [
        list(record[:width]) + [None] * (width - len(record))
        for record in raw_rows[1:]
        if not all(_is_blank(cell) for cell in record[:width])
    ]
    if not data_rows:
        raise EmptyDatasetError("The uploaded file contains no data rows.")

    kept_positions: list[int] = []
    raw_headers: list[str] = []
    for position, cell in enumerate(header_cells):
        name = _header_text(cell)
        if not name.strip():
            if all(_is_blank(record[position]) for record in data_rows):
                continue
            name = f"Unnamed: {position}"
        kept_positions.append(position)
        raw_headers.append(name)

    headers = _unique_headers(raw_headers)
    return Dataset.from_records(
        headers,
        ([record[position] for position in kept_positions] for record in data_rows),
        source_format=source_format,
    )
