"""Event schema describing where the registration data lives in the workbook."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, BinaryIO, Mapping, TextIO, Union

from .errors import MissingResourceError, SchemaValidationError

_logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_RESOURCE = "winter_adventure.json"
DEFAULT_WORKSHOP_FORMAT = "WorkshopName (LeaderName)"

SchemaSource = Union[bytes, str, Path, BinaryIO, TextIO]


@dataclass(frozen=True)
class ExactColumn:
    name: str

    def describe(self) -> str:
        return self.name


@dataclass(frozen=True)
class PatternColumn:
    pattern: str

    def describe(self) -> str:
        return self.pattern


ColumnSpec = Union[ExactColumn, PatternColumn]


class _ColumnLookup:
    columns: Mapping[str, ColumnSpec]

    def column(self, key: str) -> ColumnSpec | None:
        return self.columns.get(key)

    def column_name(self, key: str) -> str:
        spec = self.columns.get(key)
        return spec.describe() if spec is not None else ""


@dataclass(frozen=True)
class WorkshopColumn:
    column_name: str
    start_day: int
    end_day: int


@dataclass(frozen=True)
class RosterSheetConfig(_ColumnLookup):
    sheet_name: str
    columns: Mapping[str, ColumnSpec] = field(default_factory=dict)


@dataclass(frozen=True)
class PeriodSheetConfig(_ColumnLookup):
    sheet_name: str
    display_name: str = ""
    columns: Mapping[str, ColumnSpec] = field(default_factory=dict)
    workshop_columns: tuple[WorkshopColumn, ...] = ()


@dataclass(frozen=True)
class WorkshopFormat:
    pattern: str = DEFAULT_WORKSHOP_FORMAT
    description: str = ""


@dataclass(frozen=True)
class EventSchema:
    event_name: str
    total_days: int
    roster_sheet: RosterSheetConfig
    period_sheets: tuple[PeriodSheetConfig, ...]
    workshop_format: WorkshopFormat = WorkshopFormat()


def _read_source(source: SchemaSource) -> tuple[str, str]:
    if isinstance(source, bytes):
        return source.decode("utf-8-sig"), "<schema>"
    if isinstance(source, (str, Path)):
        path = Path(source)
        return path.read_text(encoding="utf-8-sig"), str(path)
    if hasattr(source, "seek"):
        source.seek(0)
    content = source.read()
    if isinstance(content, bytes):
        content = content.decode("utf-8-sig")
    return content, getattr(source, "name", "<schema>")


def _require(mapping: Mapping[str, Any], key: str, where: str, schema_name: str) -> Any:
    if not isinstance(mapping, Mapping):
        raise SchemaValidationError(schema_name, f"'{where}' must be an object")
    value = mapping.get(key)
    if value is None or value == "":
        raise SchemaValidationError(schema_name, f"missing required field '{where}.{key}'")
    return value


def _parse_columns(raw: Any, where: str, schema_name: str) -> dict[str, ColumnSpec]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise SchemaValidationError(schema_name, f"'{where}.columns' must be an object")
    columns: dict[str, ColumnSpec] = {}
    for key, value in raw.items():
        if isinstance(value, str):
            columns[key] = ExactColumn(value)
        elif isinstance(value, Mapping) and isinstance(value.get("pattern"), str):
            columns[key] = PatternColumn(value["pattern"])
        else:
            raise SchemaValidationError(
                schema_name,
                f"column '{where}.columns.{key}' must be a string or an object with a 'pattern' string",
            )
    return columns


def _parse_int(value: Any, where: str, schema_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SchemaValidationError(schema_name, f"'{where}' must be an integer")
    return value


def _parse_workshop_columns(raw: Any, where: str, schema_name: str) -> tuple[WorkshopColumn, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise SchemaValidationError(schema_name, f"'{where}.workshopColumns' must be a list")
    workshop_columns = []
    for index, entry in enumerate(raw):
        entry_where = f"{where}.workshopColumns[{index}]"
        column_name = _require(entry, "columnName", entry_where, schema_name)
        start_day = _parse_int(_require(entry, "startDay", entry_where, schema_name), f"{entry_where}.startDay", schema_name)
        end_day = _parse_int(_require(entry, "endDay", entry_where, schema_name), f"{entry_where}.endDay", schema_name)
        if start_day < 1 or end_day < start_day:
            raise SchemaValidationError(
                schema_name, f"'{entry_where}' has an invalid day range {start_day}-{end_day}"
            )
        workshop_columns.append(WorkshopColumn(column_name=str(column_name), start_day=start_day, end_day=end_day))
    return tuple(workshop_columns)


def parse_schema(document: Mapping[str, Any], *, name: str = "<schema>") -> EventSchema:
    """Convert an already-decoded schema document into an :class:`EventSchema`."""
    if not isinstance(document, Mapping):
        raise SchemaValidationError(name, "the document root must be an object")

    roster_raw = _require(document, "classSelectionSheet", "schema", name)
    roster_sheet = RosterSheetConfig(
        sheet_name=str(_require(roster_raw, "sheetName", "classSelectionSheet", name)),
        columns=_parse_columns(roster_raw.get("columns"), "classSelectionSheet", name),
    )

    periods_raw = document.get("periodSheets")
    if not isinstance(periods_raw, list):
        raise SchemaValidationError(name, "missing required list 'periodSheets'")
    period_sheets: list[PeriodSheetConfig] = []
    for index, period_raw in enumerate(periods_raw):
        where = f"periodSheets[{index}]"
        sheet_name = str(_require(period_raw, "sheetName", where, name))
        if any(existing.sheet_name == sheet_name for existing in period_sheets):
            raise SchemaValidationError(name, f"period sheet '{sheet_name}' is listed more than once")
        period_sheets.append(
            PeriodSheetConfig(
                sheet_name=sheet_name,
                display_name=str(period_raw.get("displayName") or ""),
                columns=_parse_columns(period_raw.get("columns"), where, name),
                workshop_columns=_parse_workshop_columns(period_raw.get("workshopColumns"), where, name),
            )
        )

    format_raw = document.get("workshopFormat") or {}
    if not isinstance(format_raw, Mapping):
        raise SchemaValidationError(name, "'workshopFormat' must be an object")

    total_days = document.get("totalDays", 0)
    return EventSchema(
        event_name=str(document.get("eventName") or ""),
        total_days=_parse_int(total_days, "totalDays", name),
        roster_sheet=roster_sheet,
        period_sheets=tuple(period_sheets),
        workshop_format=WorkshopFormat(
            pattern=str(format_raw.get("pattern") or DEFAULT_WORKSHOP_FORMAT),
            description=str(format_raw.get("description") or ""),
        ),
    )


def load_schema(
    source: SchemaSource,
    *,
    name: str | None = None,
    logger: logging.Logger | None = None,
) -> EventSchema:
    log = logger or _logger
    try:
        text, label = _read_source(source)
    except (OSError, UnicodeDecodeError) as exc:
        raise SchemaValidationError(name or str(source), f"could not be read: {exc}") from exc
    label = name or label

    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaValidationError(label, f"invalid JSON at line {exc.lineno}: {exc.msg}") from exc

    schema = parse_schema(document, name=label)
    log.info("Loaded schema for event: %s (%d period sheets)", schema.event_name, len(schema.period_sheets))
    return schema


def load_default_schema(*, logger: logging.Logger | None = None) -> EventSchema:
    resource = resources.files(__package__).joinpath("schemas", DEFAULT_SCHEMA_RESOURCE)
    try:
        data = resource.read_bytes()
    except (FileNotFoundError, IsADirectoryError) as exc:
        raise MissingResourceError(f"schemas/{DEFAULT_SCHEMA_RESOURCE}") from exc
    return load_schema(data, name=DEFAULT_SCHEMA_RESOURCE, logger=logger)
