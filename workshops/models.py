from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field

_CAPITAL_RE = re.compile(r"(?<!^)([A-Z])")


@dataclass(frozen=True)
class Attendee:
    selection_id: str
    first_name: str
    last_name: str
    email: str = ""
    age: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class WorkshopDuration:
    start_day: int
    end_day: int

    @property
    def number_of_days(self) -> int:
        return self.end_day - self.start_day + 1

    @property
    def description(self) -> str:
        if self.number_of_days == 1:
            return f"Day {self.start_day}"
        return f"Days {self.start_day}-{self.end_day}"


@dataclass(frozen=True)
class Period:
    sheet_name: str
    display_name: str

    @classmethod
    def from_sheet_name(cls, sheet_name: str, display_name: str = "") -> "Period":
        """Build a period, spacing out the CamelCase sheet name when no display name is set."""
        return cls(sheet_name=sheet_name, display_name=display_name or _CAPITAL_RE.sub(r" \1", sheet_name))


@dataclass(frozen=True)
class WorkshopSelection:
    selection_id: str
    workshop_name: str
    first_name: str
    last_name: str
    full_name: str
    choice_number: int
    duration: WorkshopDuration
    registration_id: int = 0


@dataclass(frozen=True)
class WorkshopKey:
    period: str
    name: str
    leader: str
    start_day: int
    end_day: int


@dataclass
class Workshop:
    name: str
    leader: str
    period: Period
    duration: WorkshopDuration
    selections: list[WorkshopSelection] = field(default_factory=list)

    @property
    def key(self) -> WorkshopKey:
        return WorkshopKey(
            period=self.period.sheet_name,
            name=self.name,
            leader=self.leader,
            start_day=self.duration.start_day,
            end_day=self.duration.end_day,
        )

    @property
    def first_choices(self) -> list[WorkshopSelection]:
        return [selection for selection in self.selections if selection.choice_number == 1]

    @property
    def backups(self) -> list[WorkshopSelection]:
        return [selection for selection in self.selections if selection.choice_number > 1]

    def as_dict(self) -> dict:
        data = asdict(self)
        data["duration"]["description"] = self.duration.description
        return data
