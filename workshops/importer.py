"""Entry point turning a registration workbook into workshops."""

from __future__ import annotations

import logging

from .collector import collect_workshops
from .data_loader import load_attendees
from .errors import DataLoaderError, WorkbookImportError
from .models import Workshop
from .schema import EventSchema, load_default_schema
from .sheets import WorkbookSource, open_workbook

_logger = logging.getLogger(__name__)


def import_workshops(
    source: WorkbookSource,
    schema: EventSchema | None = None,
    *,
    logger: logging.Logger | None = None,
    strict_format: bool = False,
) -> list[Workshop]:
    """Parse ``source`` into workshops using ``schema`` (the bundled one by default).

    Sheet and column mismatches raise the matching :class:`DataLoaderError`
    subclass; any other failure is wrapped in :class:`WorkbookImportError`.
    """
    log = logger or _logger
    try:
        if schema is None:
            schema = load_default_schema(logger=log)

        workbook = open_workbook(source)
        log.info("Importing workbook for %s with %d worksheets", schema.event_name, len(workbook.worksheets))

        attendees = load_attendees(workbook, schema, logger=log)
        log.info("Loaded %d attendees from %s", len(attendees), schema.roster_sheet.sheet_name)
        if not attendees:
            log.warning("No attendees found in %s, workshop parsing may be incomplete", schema.roster_sheet.sheet_name)

        workshops = collect_workshops(workbook, schema, attendees, logger=log, strict_format=strict_format)
    except DataLoaderError:
        raise
    except Exception as exc:
        log.exception("Failed to import workbook")
        raise WorkbookImportError(
            "Failed to import workbook. Please verify the file structure matches the event schema."
        ) from exc

    log.info("Total workshops parsed: %d", len(workshops))
    return workshops
