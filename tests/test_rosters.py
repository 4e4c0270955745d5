from workshops.models import Period, Workshop, WorkshopDuration, WorkshopSelection
from workshops.rosters import (
    backup_roster,
    first_choice_roster,
    periods_in_order,
    registration_order,
    registration_rows,
    roster_rows,
    workshop_label,
    workshop_rows,
    workshops_for_period,
)

MORNING = Period.from_sheet_name("MorningFirstPeriod")
AFTERNOON = Period.from_sheet_name("AfternoonPeriod")


def _selection(first, last, choice, registration_id):
    return WorkshopSelection(
        selection_id=f"{first}{last}",
        workshop_name="Pottery",
        first_name=first,
        last_name=last,
        full_name=f"{first} {last}",
        choice_number=choice,
        duration=WorkshopDuration(1, 4),
        registration_id=registration_id,
    )


def _pottery() -> Workshop:
    return Workshop(
        name="Pottery",
        leader="Maria Lopez",
        period=MORNING,
        duration=WorkshopDuration(1, 4),
        selections=[
            _selection("Zoe", "Young", 1, 5),
            _selection("Amy", "Brown", 3, 1),
            _selection("Ben", "Adams", 1, 9),
            _selection("Cal", "Brown", 2, 3),
        ],
    )


def test_first_choices_sorted_by_last_then_first_name():
    assert [s.full_name for s in first_choice_roster(_pottery())] == ["Ben Adams", "Zoe Young"]


def test_backups_sorted_by_name_then_choice():
    assert [s.full_name for s in backup_roster(_pottery())] == ["Amy Brown", "Cal Brown"]


def test_registration_order():
    assert [s.registration_id for s in registration_order(_pottery())] == [1, 3, 5, 9]


def test_registration_rows_follow_registration_id():
    rows = registration_rows(_pottery())

    assert [row["Name"] for row in rows] == ["Amy Brown", "Cal Brown", "Zoe Young", "Ben Adams"]
    assert [row["Choice"] for row in rows] == ["Choice #3", "Choice #2", "Enrolled", "Enrolled"]


def test_roster_rows_list_enrolled_before_backups():
    rows = roster_rows(_pottery())

    assert [row["Name"] for row in rows] == ["Ben Adams", "Zoe Young", "Amy Brown", "Cal Brown"]
    assert rows[0]["Choice"] == "Enrolled"
    assert rows[2]["Choice"] == "Choice #3"
    assert rows[0]["Registration"] == "9"


def test_workshop_rows_and_label():
    pottery = _pottery()

    assert workshop_rows([pottery]) == [
        {
            "Period": "Morning First Period",
            "Workshop": "Pottery",
            "Leader": "Maria Lopez",
            "Days": "Days 1-4",
            "Enrolled": "2",
            "Backups": "2",
        }
    ]
    assert workshop_label(pottery) == "Pottery (Maria Lopez) · Days 1-4"


def test_period_grouping_keeps_import_order():
    archery = Workshop("Archery", "Kim", AFTERNOON, WorkshopDuration(3, 4))
    weaving = Workshop("weaving", "", MORNING, WorkshopDuration(1, 2))
    pottery = _pottery()
    workshops = [pottery, archery, weaving]

    assert periods_in_order(workshops) == [MORNING, AFTERNOON]
    assert [w.name for w in workshops_for_period(workshops, MORNING)] == ["Pottery", "weaving"]
    assert workshop_label(weaving) == "weaving · Days 1-2"
