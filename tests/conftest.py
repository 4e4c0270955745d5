"""
Shared fixtures for the workshop import tests.

Workbooks are built in memory with openpyxl and handed to the engine as
bytes, the same way the front-end passes uploaded files.
"""

from __future__ import annotations

import json

import pytest

from tests.helpers import PERIOD_HEADERS, ROSTER_HEADERS, SCHEMA_DOCUMENT, build_workbook, period_row
from workshops.schema import EventSchema, load_schema


@pytest.fixture
def schema_document() -> dict:
    return json.loads(json.dumps(SCHEMA_DOCUMENT))


@pytest.fixture
def schema(schema_document) -> EventSchema:
    return load_schema(json.dumps(schema_document).encode("utf-8"), name="test-schema.json")


@pytest.fixture
def sample_workbook() -> bytes:
    """Roster with one fallback-id attendee plus a morning sheet covering common cases."""
    return build_workbook(
        {
            "ClassSelection": [
                ROSTER_HEADERS,
                ["", "Jane", "Doe", "jane@example.com", "30"],
                ["S2", "John", "Smith", "john@example.com", "12-14"],
            ],
            "MorningFirstPeriod": [
                PERIOD_HEADERS,
                period_row(first="Jane", last="Doe", registration_id=1002, four_day="Pottery (Maria Lopez)"),
                period_row(
                    selection_id="S2",
                    first="John",
                    last="Smith",
                    registration_id=1001,
                    four_day="Pottery (Maria Lopez)",
                    choice=1,
                ),
                period_row(
                    selection_id="S2",
                    first="John",
                    last="Smith",
                    registration_id=1001,
                    first_two="Knots (Advanced) (Ann Lee)",
                    choice=2,
                ),
            ],
        }
    )
