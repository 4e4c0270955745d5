"""Exceptions raised while importing a registration workbook."""

from __future__ import annotations

from typing import Sequence


class DataLoaderError(RuntimeError):
    """Raised when the workbook or its schema cannot be parsed correctly."""

    def __init__(
        self,
        message: str,
        *,
        sheet_name: str | None = None,
        row: int | None = None,
        column: str | None = None,
    ) -> None:
        super().__init__(message)
        self.sheet_name = sheet_name
        self.row = row
        self.column = column


class WorkbookImportError(DataLoaderError):
    """The workbook could not be read at all."""


class MissingSheetError(DataLoaderError):
    def __init__(self, sheet_name: str, available_sheets: Sequence[str], *, reason: str | None = None) -> None:
        self.available_sheets = list(available_sheets)
        detail = reason or "not found in workbook"
        super().__init__(
            f"Sheet '{sheet_name}' {detail}. Available sheets: {', '.join(self.available_sheets) or '(none)'}",
            sheet_name=sheet_name,
        )


class MissingColumnError(DataLoaderError):
    def __init__(self, sheet_name: str, expected: str, available_columns: Sequence[str]) -> None:
        self.expected = expected
        self.available_columns = list(available_columns)
        super().__init__(
            f"Column '{expected}' not found in sheet '{sheet_name}'. "
            f"Available columns: {', '.join(self.available_columns) or '(none)'}",
            sheet_name=sheet_name,
            column=expected,
        )


class InvalidWorkshopFormatError(DataLoaderError):
    def __init__(self, cell_value: str, expected_format: str = "WorkshopName (LeaderName)", **kwargs) -> None:
        self.cell_value = cell_value
        self.expected_format = expected_format
        super().__init__(
            f"Workshop cell '{cell_value}' does not match the format '{expected_format}'",
            **kwargs,
        )


class SchemaValidationError(DataLoaderError):
    def __init__(self, schema_name: str, reason: str) -> None:
        self.schema_name = schema_name
        self.reason = reason
        super().__init__(f"Invalid event schema '{schema_name}': {reason}")


class MissingResourceError(DataLoaderError):
    def __init__(self, resource_name: str) -> None:
        self.resource_name = resource_name
        super().__init__(f"Could not find bundled resource: {resource_name}")
