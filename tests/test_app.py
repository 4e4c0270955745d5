import io
import json
import zipfile

from PIL import Image

from app import (
    build_roster_archive,
    build_table_html,
    compute_signature,
    roster_to_image_bytes,
    rows_to_csv,
    safe_filename,
    workshops_to_json,
)
from workshops.models import Period, Workshop, WorkshopDuration, WorkshopSelection
from workshops.rosters import ROSTER_COLUMNS, roster_rows

ROWS = [{"Name": "Ada <Lovelace>", "Choice": "Enrolled", "Registration": "7", "Selection ID": "S1"}]


def _workshop() -> Workshop:
    selection = WorkshopSelection("S1", "Pottery", "Ada", "Lovelace", "Ada Lovelace", 1, WorkshopDuration(1, 4), 7)
    return Workshop(
        "Pottery", "Maria", Period.from_sheet_name("MorningFirstPeriod"), WorkshopDuration(1, 4), [selection]
    )


def test_safe_filename():
    assert safe_filename("Morning: Pottery/Clay 1-4") == "Morning__Pottery_Clay_1-4"
    assert safe_filename("///") == "___"
    assert safe_filename("  ") == "unnamed"


def test_table_html_escapes_cell_text():
    html = build_table_html(ROWS, ROSTER_COLUMNS)

    assert "<th>Selection ID</th>" in html
    assert "Ada &lt;Lovelace&gt;" in html


def test_rows_to_csv_follows_column_order():
    text = rows_to_csv(ROWS, ROSTER_COLUMNS).decode("utf-8").splitlines()

    assert text[0] == "Name,Choice,Registration,Selection ID"
    assert text[1] == "Ada <Lovelace>,Enrolled,7,S1"


def test_signature_changes_with_schema():
    assert compute_signature(b"book") != compute_signature(b"book", b"schema")


def test_roster_image_is_png():
    data = roster_to_image_bytes("Pottery (Maria)", ROWS, ROSTER_COLUMNS)

    image = Image.open(io.BytesIO(data))
    assert image.format == "PNG"
    assert image.width > 0 and image.height > 0


def test_roster_archive_holds_one_csv_per_workshop():
    workshop = _workshop()

    with zipfile.ZipFile(io.BytesIO(build_roster_archive([workshop]))) as archive:
        names = archive.namelist()
        content = archive.read(names[0])

    assert names == ["MorningFirstPeriod_Pottery_Days_1-4.csv"]
    assert content == rows_to_csv(roster_rows(workshop), ROSTER_COLUMNS)


def test_workshops_json_export():
    exported = json.loads(workshops_to_json([_workshop()]))

    assert len(exported) == 1
    pottery = exported[0]
    assert (pottery["name"], pottery["leader"]) == ("Pottery", "Maria")
    assert pottery["period"] == {"sheet_name": "MorningFirstPeriod", "display_name": "Morning First Period"}
    assert pottery["duration"]["description"] == "Days 1-4"
    assert pottery["selections"][0]["registration_id"] == 7
