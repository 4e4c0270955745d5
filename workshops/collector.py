"""Aggregate period-sheet selections into workshops."""

from __future__ import annotations

import logging
from typing import Mapping

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from .models import Attendee, Period, Workshop, WorkshopDuration, WorkshopKey, WorkshopSelection
from .parsing import fallback_identifier, parse_workshop_cell, split_full_name
from .schema import DEFAULT_WORKSHOP_FORMAT, EventSchema, ExactColumn, PeriodSheetConfig
from .sheets import SheetReader, find_sheet

_logger = logging.getLogger(__name__)

DEFAULT_CHOICE_NUMBER = 1
DEFAULT_REGISTRATION_ID = 0


def _parse_int(raw: str, default: int) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        return default


class WorkshopCollector:
    """Builds workshops for one import, one period sheet at a time."""

    def __init__(
        self,
        attendees: Mapping[str, Attendee],
        *,
        logger: logging.Logger | None = None,
        strict_format: bool = False,
        workshop_format: str = DEFAULT_WORKSHOP_FORMAT,
    ) -> None:
        self.attendees = attendees
        self.log = logger or _logger
        self.strict_format = strict_format
        self.workshop_format = workshop_format
        self._workshops: dict[WorkshopKey, Workshop] = {}

    def _resolve_attendee(self, reader: SheetReader, row: int, config: PeriodSheetConfig, selection_id: str) -> Attendee:
        if selection_id and selection_id in self.attendees:
            return self.attendees[selection_id]

        first_name = reader.value(row, config.column("firstName")).strip()
        last_name = reader.value(row, config.column("lastName")).strip()
        if not first_name and not last_name:
            first_name, last_name = split_full_name(reader.value(row, config.column("fullName")))

        identifier = selection_id or fallback_identifier(first_name, last_name)
        if identifier in self.attendees:
            return self.attendees[identifier]

        self.log.debug("Attendee %s not on roster, using row %d of %s", identifier, row, reader.name)
        return Attendee(selection_id=identifier, first_name=first_name, last_name=last_name)

    def add_selection(
        self,
        *,
        period: Period,
        name: str,
        leader: str,
        duration: WorkshopDuration,
        selection: WorkshopSelection,
    ) -> Workshop:
        key = WorkshopKey(period.sheet_name, name, leader, duration.start_day, duration.end_day)
        workshop = self._workshops.get(key)
        if workshop is None:
            workshop = Workshop(name=name, leader=leader, period=period, duration=duration)
            self._workshops[key] = workshop
        workshop.selections.append(selection)
        return workshop

    def collect_period(self, sheet: Worksheet, config: PeriodSheetConfig) -> list[Workshop]:
        """Collect the workshops of one period sheet in first-seen order."""
        reader = SheetReader(sheet)
        if reader.is_empty:
            self.log.debug("Sheet %s has no data", reader.name)
            return []

        reader.resolve_columns(
            [*config.columns.values(), *(ExactColumn(column.column_name) for column in config.workshop_columns)]
        )
        period = Period.from_sheet_name(config.sheet_name, config.display_name)
        seen: dict[WorkshopKey, Workshop] = {}

        for row in reader.data_rows():
            selection_id = reader.value(row, config.column("selectionId")).strip()
            choice_number = _parse_int(reader.value(row, config.column("choiceNumber")), DEFAULT_CHOICE_NUMBER)
            if choice_number < 1:
                choice_number = DEFAULT_CHOICE_NUMBER
            registration_id = _parse_int(
                reader.value(row, config.column("registrationId")), DEFAULT_REGISTRATION_ID
            )

            for workshop_column in config.workshop_columns:
                cell = reader.cell_value(row, workshop_column.column_name)
                if not cell.strip():
                    continue

                parsed = parse_workshop_cell(
                    cell, strict=self.strict_format, expected_format=self.workshop_format
                )
                if not parsed.name:
                    self.log.debug("Skipping empty workshop name at row %d, column %s", row, workshop_column.column_name)
                    continue
                if not parsed.well_formed:
                    self.log.warning(
                        "Workshop '%s' at row %d, column %s of %s has no leader in parentheses",
                        cell,
                        row,
                        workshop_column.column_name,
                        reader.name,
                    )

                attendee = self._resolve_attendee(reader, row, config, selection_id)
                duration = WorkshopDuration(workshop_column.start_day, workshop_column.end_day)
                workshop = self.add_selection(
                    period=period,
                    name=parsed.name,
                    leader=parsed.leader,
                    duration=duration,
                    selection=WorkshopSelection(
                        selection_id=attendee.selection_id,
                        workshop_name=parsed.name,
                        first_name=attendee.first_name,
                        last_name=attendee.last_name,
                        full_name=attendee.full_name,
                        choice_number=choice_number,
                        duration=duration,
                        registration_id=registration_id,
                    ),
                )
                seen.setdefault(workshop.key, workshop)

        return list(seen.values())


def collect_workshops(
    workbook: Workbook,
    schema: EventSchema,
    attendees: Mapping[str, Attendee],
    *,
    logger: logging.Logger | None = None,
    strict_format: bool = False,
) -> list[Workshop]:
    """Collect workshops from every period sheet, in schema order.

    Period sheets missing from the workbook are skipped with a warning.
    """
    log = logger or _logger
    collector = WorkshopCollector(
        attendees,
        logger=log,
        strict_format=strict_format,
        workshop_format=schema.workshop_format.pattern,
    )
    workshops: list[Workshop] = []
    for config in schema.period_sheets:
        sheet = find_sheet(workbook, config.sheet_name)
        if sheet is None:
            log.warning("Could not find period sheet: %s", config.sheet_name)
            continue

        log.debug("Processing period sheet: %s", config.sheet_name)
        period_workshops = collector.collect_period(sheet, config)
        log.debug("Found %d workshops in %s", len(period_workshops), config.sheet_name)
        workshops.extend(period_workshops)
    return workshops
