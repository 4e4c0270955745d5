"""Import workshop registrations from an event spreadsheet."""

from . import data_loader
from .errors import (
    DataLoaderError,
    InvalidWorkshopFormatError,
    MissingColumnError,
    MissingResourceError,
    MissingSheetError,
    SchemaValidationError,
    WorkbookImportError,
)
from .importer import import_workshops
from .models import Attendee, Period, Workshop, WorkshopDuration, WorkshopKey, WorkshopSelection
from .schema import EventSchema, load_default_schema, load_schema

__all__ = [
    "data_loader",
    "import_workshops",
    "load_schema",
    "load_default_schema",
    "EventSchema",
    "Attendee",
    "Period",
    "Workshop",
    "WorkshopDuration",
    "WorkshopKey",
    "WorkshopSelection",
    "DataLoaderError",
    "InvalidWorkshopFormatError",
    "MissingColumnError",
    "MissingResourceError",
    "MissingSheetError",
    "SchemaValidationError",
    "WorkbookImportError",
]
