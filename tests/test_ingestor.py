"""
tests/test_ingestor.py

Ingestion of CSV and workbook bytes into a Dataset.

Workbook fixtures are built in memory with openpyxl; no file system access.
"""

from __future__ import annotations

import io

import pytest
from openpyxl import Workbook

from insights.errors import EmptyDatasetError, ParseFailureError, UnsupportedExtensionError
from insights.ingestor import extension_from_filename, ingest, normalize_extension


def _xlsx_bytes(*sheets: list[list[object]]) -> bytes:
    workbook = Workbook()
    first = workbook.active
    for index, rows in enumerate(sheets):
        sheet = first if index == 0 else workbook.create_sheet(f"Sheet{index + 1}")
        for row in rows:
            sheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


# ---------------------------------------------------------------------------
# Extensions
# ---------------------------------------------------------------------------


class TestExtensions:
    def test_txt_is_rejected_before_reading(self) -> None:
        with pytest.raises(UnsupportedExtensionError) as ctx:
            ingest(b"not even looked at", ".txt")
        assert ctx.value.code == "unsupported_extension"

    @pytest.mark.parametrize("extension", ["", "json", ".pdf", "xlsm"])
    def test_other_extensions_are_rejected(self, extension: str) -> None:
        with pytest.raises(UnsupportedExtensionError):
            ingest(b"a,b\n1,2\n", extension)

    @pytest.mark.parametrize("extension", [".CSV", "csv", " .Csv "])
    def test_extension_is_case_and_dot_insensitive(self, extension: str) -> None:
        dataset = ingest(b"a,b\n1,2\n", extension)
        assert dataset.source_format == "csv"

    def test_extension_from_filename(self) -> None:
        assert extension_from_filename("Q3 Report.final.XLSX") == "xlsx"
        assert extension_from_filename("README") == ""
        assert normalize_extension(".Xls") == "xls"


# ---------------------------------------------------------------------------
# CSV
# ---------------------------------------------------------------------------


class TestCSV:
    def test_headers_and_rows_in_source_order(self) -> None:
        dataset = ingest(b"Name,City,Total\nAna,Austin,10.5\nBo,Boston,3\n", ".csv")

        assert dataset.headers == ("Name", "City", "Total")
        assert dataset.row_count == 2
        assert dict(dataset.rows[0]) == {"Name": "Ana", "City": "Austin", "Total": "10.5"}

    def test_utf8_bom_is_stripped_from_first_header(self) -> None:
        dataset = ingest("\ufeffCity,Total\nLyon,1\n".encode("utf-8"), ".csv")
        assert dataset.headers[0] == "City"

    def test_blank_cells_become_none_and_short_rows_are_padded(self) -> None:
        dataset = ingest(b"a,b,c\n1,,3\n4\n", ".csv")

        assert dict(dataset.rows[0]) == {"a": "1", "b": None, "c": "3"}
        assert dict(dataset.rows[1]) == {"a": "4", "b": None, "c": None}

    def test_cells_beyond_header_width_are_dropped(self) -> None:
        dataset = ingest(b"a,b\n1,2,3\n", ".csv")
        assert dict(dataset.rows[0]) == {"a": "1", "b": "2"}

    def test_values_are_kept_verbatim(self) -> None:
        dataset = ingest(b"Name,Total\n  Bob ,$1,000\n", ".csv")
        assert dataset.rows[0]["Name"] == "  Bob "

    def test_fully_blank_rows_are_skipped(self) -> None:
        dataset = ingest(b"a,b\n1,2\n,\n\n3,4\n", ".csv")
        assert dataset.row_count == 2

    def test_duplicate_headers_are_suffixed_after_first_occurrence(self) -> None:
        dataset = ingest(b"Name,Name,Name_1,Name\nA,B,C,D\n", ".csv")

        assert dataset.headers == ("Name", "Name_2", "Name_1", "Name_3")
        assert dataset.rows[0]["Name"] == "A"
        assert dataset.rows[0]["Name_2"] == "B"

    def test_blank_header_is_named_when_column_has_data(self) -> None:
        dataset = ingest(b"a,,c\n1,2,3\n", ".csv")
        assert dataset.headers == ("a", "Unnamed: 1", "c")

    def test_blank_header_with_blank_column_is_dropped(self) -> None:
        dataset = ingest(b"a,b,\n1,2,\n", ".csv")
        assert dataset.headers == ("a", "b")

    def test_every_row_has_exactly_the_headers(self) -> None:
        dataset = ingest(b"x,y,z\n1\n1,2\n1,2,3\n", ".csv")
        for row in dataset.rows:
            assert tuple(row.keys()) == dataset.headers

    def test_non_utf8_bytes_fail_to_parse(self) -> None:
        with pytest.raises(ParseFailureError):
            ingest(b"name,city\n\xff\xfe\xfa,Paris\n", ".csv")

    def test_rows_are_read_only(self) -> None:
        dataset = ingest(b"a\n1\n", ".csv")
        with pytest.raises(TypeError):
            dataset.rows[0]["a"] = "2"  # type: ignore[index]


class TestEmptyDataset:
    @pytest.mark.parametrize(
        "content",
        [b"", b"\n\n", b"Name,City\n", b"Name,City\n,\n , \n"],
    )
    def test_zero_data_rows_raise_empty_dataset(self, content: bytes) -> None:
        with pytest.raises(EmptyDatasetError) as ctx:
            ingest(content, ".csv")
        assert ctx.value.to_dict()["code"] == "empty_dataset"

    def test_empty_workbook_raises_empty_dataset(self) -> None:
        with pytest.raises(EmptyDatasetError):
            ingest(_xlsx_bytes([["Name", "City"]]), ".xlsx")


# ---------------------------------------------------------------------------
# Workbooks
# ---------------------------------------------------------------------------


class TestWorkbook:
    def test_numbers_stay_numeric_and_blanks_are_none(self) -> None:
        content = _xlsx_bytes(
            [
                ["Customer", "Total", "Tier"],
                ["Ana", 120, "Gold"],
                ["Bo", 12.5, None],
            ]
        )

        dataset = ingest(content, ".xlsx")

        assert dataset.source_format == "xlsx"
        assert dataset.headers == ("Customer", "Total", "Tier")
        assert dataset.rows[0]["Total"] == 120
        assert isinstance(dataset.rows[0]["Total"], int)
        assert dataset.rows[1]["Total"] == pytest.approx(12.5)
        assert dataset.rows[1]["Tier"] is None

    def test_only_first_sheet_is_read(self) -> None:
        content = _xlsx_bytes(
            [["City"], ["Austin"]],
            [["Other"], ["ignored"], ["ignored"]],
        )

        dataset = ingest(content, "xlsx")

        assert dataset.headers == ("City",)
        assert dataset.row_count == 1

    def test_booleans_become_text(self) -> None:
        content = _xlsx_bytes([["Active"], [True], [False]])
        dataset = ingest(content, ".xlsx")
        assert [row["Active"] for row in dataset.rows] == ["TRUE", "FALSE"]

    def test_numeric_header_is_stringified(self) -> None:
        content = _xlsx_bytes([[2024, "City"], [1, "Austin"]])
        dataset = ingest(content, ".xlsx")
        assert dataset.headers == ("2024", "City")

    @pytest.mark.parametrize("extension", [".xlsx", ".xls"])
    def test_garbage_bytes_fail_to_parse(self, extension: str) -> None:
        with pytest.raises(ParseFailureError) as ctx:
            ingest(b"this is not a workbook at all", extension)
        assert ctx.value.code == "parse_failure"

    @pytest.mark.parametrize("extension", [".xlsx", ".xls"])
    def test_zero_byte_workbook_fails_to_parse(self, extension: str) -> None:
        with pytest.raises(ParseFailureError):
            ingest(b"", extension)
