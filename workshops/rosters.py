"""Tabular views of imported workshops for the front-end and exports."""

from __future__ import annotations

from typing import Iterable

from .models import Period, Workshop, WorkshopSelection

WORKSHOP_COLUMNS = ["Period", "Workshop", "Leader", "Days", "Enrolled", "Backups"]
ROSTER_COLUMNS = ["Name", "Choice", "Registration", "Selection ID"]


def first_choice_roster(workshop: Workshop) -> list[WorkshopSelection]:
    return sorted(workshop.first_choices, key=lambda s: (s.last_name, s.first_name))


def backup_roster(workshop: Workshop) -> list[WorkshopSelection]:
    return sorted(workshop.backups, key=lambda s: (s.last_name, s.first_name, s.choice_number))


def registration_order(workshop: Workshop) -> list[WorkshopSelection]:
    return sorted(workshop.selections, key=lambda s: s.registration_id)


def periods_in_order(workshops: Iterable[Workshop]) -> list[Period]:
    ordered: list[Period] = []
    for workshop in workshops:
        if workshop.period not in ordered:
            ordered.append(workshop.period)
    return ordered


def workshops_for_period(workshops: Iterable[Workshop], period: Period) -> list[Workshop]:
    selected = [workshop for workshop in workshops if workshop.period == period]
    selected.sort(key=lambda w: (w.name.lower(), w.duration.start_day, w.duration.end_day, w.leader))
    return selected


def workshop_rows(workshops: Iterable[Workshop]) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for workshop in workshops:
        rows.append(
            {
                "Period": workshop.period.display_name,
                "Workshop": workshop.name,
                "Leader": workshop.leader,
                "Days": workshop.duration.description,
                "Enrolled": str(len(workshop.first_choices)),
                "Backups": str(len(workshop.backups)),
            }
        )
    return rows


def _selection_row(selection: WorkshopSelection) -> dict[str, str]:
    return {
        "Name": selection.full_name,
        "Choice": "Enrolled" if selection.choice_number == 1 else f"Choice #{selection.choice_number}",
        "Registration": str(selection.registration_id),
        "Selection ID": selection.selection_id,
    }


def roster_rows(workshop: Workshop) -> list[dict[str, str]]:
    """Enrolled attendees first, then backups with their choice number."""
    return [_selection_row(selection) for selection in [*first_choice_roster(workshop), *backup_roster(workshop)]]


def registration_rows(workshop: Workshop) -> list[dict[str, str]]:
    return [_selection_row(selection) for selection in registration_order(workshop)]


def workshop_label(workshop: Workshop) -> str:
    label = workshop.name
    if workshop.leader:
        label = f"{label} ({workshop.leader})"
    return f"{label} · {workshop.duration.description}"
