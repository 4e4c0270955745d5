"""Builders for in-memory registration workbooks used across the tests."""

from __future__ import annotations

import io
from typing import Sequence

from openpyxl import Workbook

ROSTER_HEADERS = ["ClassSelection_Id", "Name_First", "Name_Last", "Email", "Age"]
PERIOD_HEADERS = [
    "ClassSelection_Id",
    "AttendeeName_First",
    "AttendeeName_Last",
    "AttendeeName",
    "2024WinterAdventureClassRegist_Id",
    "_4dayClasses",
    "ChoiceNumber",
    "_2dayClassesFirst2Days",
    "_2dayClassesSecond2Days",
]

PERIOD_COLUMNS = {
    "selectionId": {"pattern": "ClassSelection_Id"},
    "firstName": "AttendeeName_First",
    "lastName": "AttendeeName_Last",
    "fullName": "AttendeeName",
    "registrationId": {"pattern": "ClassRegist_Id"},
    "choiceNumber": "ChoiceNumber",
}
WORKSHOP_COLUMNS = [
    {"columnName": "_4dayClasses", "startDay": 1, "endDay": 4},
    {"columnName": "_2dayClassesFirst2Days", "startDay": 1, "endDay": 2},
    {"columnName": "_2dayClassesSecond2Days", "startDay": 3, "endDay": 4},
]

SCHEMA_DOCUMENT = {
    "eventName": "Test Adventure",
    "totalDays": 4,
    "classSelectionSheet": {
        "sheetName": "ClassSelection",
        "columns": {
            "selectionId": {"pattern": "ClassSelection_Id"},
            "firstName": "Name_First",
            "lastName": "Name_Last",
            "email": "Email",
            "age": "Age",
        },
    },
    "periodSheets": [
        {
            "sheetName": "MorningFirstPeriod",
            "displayName": "Morning First Period",
            "columns": PERIOD_COLUMNS,
            "workshopColumns": WORKSHOP_COLUMNS,
        },
        {
            "sheetName": "AfternoonPeriod",
            "displayName": "",
            "columns": PERIOD_COLUMNS,
            "workshopColumns": WORKSHOP_COLUMNS,
        },
    ],
    "workshopFormat": {"pattern": "WorkshopName (LeaderName)", "description": "Name then leader"},
}


def build_workbook(sheets: dict[str, Sequence[Sequence[object]]]) -> bytes:
    """Create an .xlsx file whose sheets hold the given rows, header first."""
    workbook = Workbook()
    workbook.remove(workbook.active)
    for name, rows in sheets.items():
        sheet = workbook.create_sheet(name)
        for row in rows:
            sheet.append(list(row))
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def period_row(
    *,
    selection_id: str = "",
    first: str = "",
    last: str = "",
    full: str = "",
    registration_id: object = None,
    four_day: str = "",
    choice: object = None,
    first_two: str = "",
    second_two: str = "",
) -> list[object]:
    return [selection_id, first, last, full, registration_id, four_day, choice, first_two, second_two]
