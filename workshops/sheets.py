"""Workbook access and header-based column resolution."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any, BinaryIO, Iterable, Union

from openpyxl import Workbook, load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from .errors import DataLoaderError, MissingColumnError, MissingSheetError, WorkbookImportError
from .schema import ColumnSpec, ExactColumn, PatternColumn

WorkbookSource = Union[bytes, bytearray, str, Path, BinaryIO]

HEADER_ROW = 1
FIRST_DATA_ROW = 2


def _read_bytes(source: WorkbookSource) -> tuple[bytes, str]:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source), "<workbook>"
    if isinstance(source, (str, Path)):
        path = Path(source)
        return path.read_bytes(), str(path)
    if hasattr(source, "seek"):
        source.seek(0)
    return source.read(), getattr(source, "name", "<workbook>")


def open_workbook(source: WorkbookSource) -> Workbook:
    """Load a workbook from a private in-memory copy of ``source``."""
    try:
        data, label = _read_bytes(source)
    except OSError as exc:
        raise WorkbookImportError(f"Could not read workbook: {exc}") from exc

    if not data:
        raise WorkbookImportError(f"Workbook '{label}' is empty")

    try:
        workbook = load_workbook(io.BytesIO(data), data_only=True)
    except Exception as exc:
        raise WorkbookImportError(
            f"Failed to open workbook '{label}'. Please verify it is a valid .xlsx file."
        ) from exc

    if not workbook.worksheets:
        raise WorkbookImportError(f"Workbook '{label}' contains no worksheets")
    return workbook


def find_sheet(workbook: Workbook, sheet_name: str) -> Worksheet | None:
    if sheet_name in workbook.sheetnames:
        return workbook[sheet_name]
    return None


def require_sheet(workbook: Workbook, sheet_name: str) -> Worksheet:
    sheet = find_sheet(workbook, sheet_name)
    if sheet is None:
        raise MissingSheetError(sheet_name, workbook.sheetnames)
    return sheet


def is_empty_sheet(sheet: Worksheet) -> bool:
    return sheet.max_row == 1 and sheet.max_column == 1 and sheet.cell(row=1, column=1).value is None


def cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class SheetReader:
    """Reads cells of one worksheet by header name or header pattern."""

    def __init__(self, sheet: Worksheet) -> None:
        self.sheet = sheet
        self._headers: list[tuple[int, str]] | None = None
        self._resolved: dict[ColumnSpec, int] = {}

    @property
    def name(self) -> str:
        return self.sheet.title

    @property
    def is_empty(self) -> bool:
        return is_empty_sheet(self.sheet)

    def data_rows(self) -> range:
        if self.is_empty:
            return range(0)
        return range(FIRST_DATA_ROW, self.sheet.max_row + 1)

    @property
    def headers(self) -> list[str]:
        return [text for _, text in self._header_cells()]

    def _header_cells(self) -> list[tuple[int, str]]:
        if self._headers is None:
            available = self.sheet.parent.sheetnames if self.sheet.parent is not None else [self.name]
            if self.is_empty:
                raise MissingSheetError(self.name, available, reason="is empty")
            headers = []
            for column in range(1, self.sheet.max_column + 1):
                text = cell_text(self.sheet.cell(row=HEADER_ROW, column=column).value)
                if text.strip():
                    headers.append((column, text))
            if not headers:
                raise MissingSheetError(self.name, available, reason="has no header row")
            self._headers = headers
        return self._headers

    def column_index(self, spec: ColumnSpec) -> int:
        if spec in self._resolved:
            return self._resolved[spec]

        headers = self._header_cells()
        if isinstance(spec, ExactColumn):
            match = next((column for column, text in headers if text == spec.name), None)
        elif isinstance(spec, PatternColumn):
            match = next((column for column, text in headers if spec.pattern in text), None)
        else:
            raise DataLoaderError(f"Unsupported column lookup: {spec!r}", sheet_name=self.name)

        if match is None:
            raise MissingColumnError(self.name, spec.describe(), [text for _, text in headers])
        self._resolved[spec] = match
        return match

    def resolve_columns(self, specs: Iterable[ColumnSpec | None]) -> None:
        """Resolve every configured column before any row is read."""
        for spec in specs:
            if spec is not None:
                self.column_index(spec)

    def value(self, row: int, spec: ColumnSpec | None) -> str:
        """Return the text of ``row`` in the column ``spec`` points at.

        A ``None`` spec means the schema does not configure this column, which
        reads as blank. Blank cells read as ``""``; only an unresolvable header
        raises.
        """
        if spec is None:
            return ""
        column = self.column_index(spec)
        return cell_text(self.sheet.cell(row=row, column=column).value)

    def cell_value(self, row: int, column_name: str) -> str:
        return self.value(row, ExactColumn(column_name)) if column_name else ""

    def cell_value_by_pattern(self, row: int, pattern: str) -> str:
        return self.value(row, PatternColumn(pattern)) if pattern else ""
