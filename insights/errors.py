"""
insights/errors.py

Error taxonomy for the insights pipeline.

Ingestion failures are raised and abort the pipeline. An unresolved column
is not an exception: it is recorded on the report result and the affected
card or breakdown degrades to a zero/empty value.
"""

from __future__ import annotations

from dataclasses import dataclass


class IngestionError(ValueError):
    """
    Base exception for failures that prevent a dataset from being built.
    """

    code = "ingestion_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


class UnsupportedExtensionError(IngestionError):
    """Raised when the file extension is not a recognised tabular format."""

    code = "unsupported_extension"


class ParseFailureError(IngestionError):
    """Raised when bytes cannot be decoded as a table in the declared format."""

    code = "parse_failure"


class EmptyDatasetError(IngestionError):
    """Raised when decoding succeeds but yields zero data rows."""

    code = "empty_dataset"


@dataclass(frozen=True)
class UnresolvedColumn:
    """
    A semantic column that no header matched.
    """

    role: str
    keywords: tuple[str, ...]

    def to_dict(self) -> dict[str, object]:
        return {"role": self.role, "keywords": list(self.keywords)}
