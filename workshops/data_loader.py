"""Load the attendee roster from the registration workbook."""

from __future__ import annotations

import logging

from openpyxl import Workbook

from .errors import DataLoaderError
from .models import Attendee
from .parsing import fallback_identifier
from .schema import EventSchema
from .sheets import SheetReader, require_sheet

__all__ = ["DataLoaderError", "load_attendees"]

_logger = logging.getLogger(__name__)


def load_attendees(
    workbook: Workbook,
    schema: EventSchema,
    *,
    logger: logging.Logger | None = None,
) -> dict[str, Attendee]:
    """Map each selection id on the roster sheet to its attendee.

    Rows with neither a first nor a last name are skipped. A missing
    selection id is replaced by the attendee's name with whitespace
    removed; a repeated id keeps the last row.
    """
    log = logger or _logger
    config = schema.roster_sheet
    sheet = require_sheet(workbook, config.sheet_name)
    reader = SheetReader(sheet)

    attendees: dict[str, Attendee] = {}
    if reader.is_empty:
        log.warning("Roster sheet '%s' is empty", config.sheet_name)
        return attendees

    reader.resolve_columns(config.columns.values())
    first_name_column = config.column("firstName")
    last_name_column = config.column("lastName")
    for row in reader.data_rows():
        first_name = reader.value(row, first_name_column).strip()
        last_name = reader.value(row, last_name_column).strip()
        if not first_name and not last_name:
            continue

        selection_id = reader.value(row, config.column("selectionId")).strip()
        if not selection_id:
            selection_id = fallback_identifier(first_name, last_name)
            log.debug("Generated fallback id for attendee %s %s -> %s", first_name, last_name, selection_id)

        attendees[selection_id] = Attendee(
            selection_id=selection_id,
            first_name=first_name,
            last_name=last_name,
            email=reader.value(row, config.column("email")).strip(),
            age=reader.value(row, config.column("age")).strip(),
        )

    return attendees
