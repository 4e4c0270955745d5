"""Structural dump of a workbook, used when onboarding a new spreadsheet layout."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .sheets import FIRST_DATA_ROW, HEADER_ROW, WorkbookSource, cell_text, is_empty_sheet, open_workbook

_logger = logging.getLogger(__name__)


def _row_cells(sheet, row: int) -> list[dict[str, object]]:
    cells = []
    for column in range(1, sheet.max_column + 1):
        value = sheet.cell(row=row, column=column).value
        cells.append({"column": column, "value": cell_text(value) if value is not None else None})
    return cells


def dump_workbook_structure(source: WorkbookSource) -> dict[str, object]:
    workbook = open_workbook(source)
    worksheets = []
    for sheet in workbook.worksheets:
        if is_empty_sheet(sheet):
            worksheets.append(
                {
                    "name": sheet.title,
                    "dimensions": None,
                    "row_count": None,
                    "column_count": None,
                    "headers": [],
                    "sample_row": [],
                }
            )
            continue

        row_count = sheet.max_row
        column_count = sheet.max_column
        worksheets.append(
            {
                "name": sheet.title,
                "dimensions": sheet.dimensions,
                "row_count": row_count,
                "column_count": column_count,
                "headers": _row_cells(sheet, HEADER_ROW),
                "sample_row": _row_cells(sheet, FIRST_DATA_ROW) if row_count >= FIRST_DATA_ROW else [],
            }
        )
    return {"worksheet_count": len(worksheets), "worksheets": worksheets}


def dump_workbook_structure_json(
    source: WorkbookSource,
    output_path: str | Path | None = None,
    *,
    logger: logging.Logger | None = None,
) -> str:
    text = json.dumps(dump_workbook_structure(source), indent=2, ensure_ascii=False)
    if output_path is not None:
        Path(output_path).write_text(text, encoding="utf-8")
        (logger or _logger).info("Workbook structure written to: %s", output_path)
    return text
