"""
insights/dataset.py

Immutable tabular dataset produced by ingestion.

A dataset is an ordered tuple of unique header names plus an ordered tuple
of rows. Every row maps exactly the dataset headers to a cell; a cell is
text, a number, or ``None`` for an empty value.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence, Union

Cell = Union[str, int, float, None]
Row = Mapping[str, Cell]


def make_row(headers: Sequence[str], values: Sequence[Cell]) -> Row:
    """
    Build a read-only row, padding missing trailing cells with ``None``.
    """

    padded = list(values[: len(headers)])
    padded.extend([None] * (len(headers) - len(padded)))
    return MappingProxyType(dict(zip(headers, padded)))


@dataclass(frozen=True)
class Dataset:
    """
    Decoded table: ordered headers and rows.

    ``source_format`` records the decoder that produced the table
    (``"csv"``, ``"xlsx"`` or ``"xls"``).
    """

    headers: tuple[str, ...]
    rows: tuple[Row, ...]
    source_format: str = "csv"

    def __post_init__(self) -> None:
        if len(set(self.headers)) != len(self.headers):
            raise ValueError("Dataset headers must be unique.")
        expected = set(self.headers)
        for index, row in enumerate(self.rows):
            if set(row.keys()) != expected:
                raise ValueError(f"Row {index} does not match the dataset headers.")

    @classmethod
    def from_records(
        cls,
        headers: Sequence[str],
        records: Iterable[Sequence[Cell]],
        *,
        source_format: str = "csv",
    ) -> "Dataset":
        header_tuple = tuple(headers)
        return cls(
            headers=header_tuple,
            rows=tuple(make_row(header_tuple, record) for record in records),
            source_format=source_format,
        )

    @classmethod
    def from_dicts(
        cls,
        rows: Sequence[Mapping[str, Cell]],
        *,
        headers: Sequence[str] | None = None,
        source_format: str = "csv",
    ) -> "Dataset":
        """
        Build a dataset from plain dicts; headers default to first-seen key order.
        """

        if headers is None:
            seen: dict[str, None] = {}
            for row in rows:
                for key in row:
                    seen.setdefault(key, None)
            headers = list(seen)
        return cls.from_records(
            headers,
            ([row.get(header) for header in headers] for row in rows),
            source_format=source_format,
        )

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.headers)

    def preview(self, limit: int = 100) -> tuple[Row, ...]:
        """Return the first *limit* rows for verbatim table display."""
        return self.rows[: max(0, limit)]
