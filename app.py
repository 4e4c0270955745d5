"""Streamlit front-end for the workshop registration importer."""

from __future__ import annotations

import csv
import hashlib
import io
import json
import logging
import zipfile
from html import escape

import streamlit as st
from PIL import Image, ImageDraw, ImageFont

from workshops import import_workshops, load_default_schema, load_schema
from workshops.data_loader import DataLoaderError
from workshops.debug import dump_workbook_structure_json
from workshops.models import Workshop
from workshops.rosters import (
    ROSTER_COLUMNS,
    WORKSHOP_COLUMNS,
    periods_in_order,
    registration_rows,
    roster_rows,
    workshop_label,
    workshop_rows,
    workshops_for_period,
)

logger = logging.getLogger("workshops.app")


def safe_filename(name: str) -> str:
    cleaned = "".join(ch if ch.isalnum() or ch in " _-" else "_" for ch in name).strip()
    cleaned = cleaned.replace(" ", "_")
    return cleaned or "unnamed"


def build_table_html(rows: list[dict[str, str]], columns: list[str]) -> str:
    header_html = "".join(f"<th>{escape(column)}</th>" for column in columns)
    body_rows = []
    for row in rows:
        cells = [row.get(column, "") for column in columns]
        cell_html = "".join(f"<td>{escape(str(value))}</td>" for value in cells)
        body_rows.append(f"<tr>{cell_html}</tr>")
    return (
        "<table class='workshop-table'>"
        f"<thead><tr>{header_html}</tr></thead>"
        f"<tbody>{''.join(body_rows)}</tbody>"
        "</table>"
    )


def rows_to_csv(rows: list[dict[str, str]], columns: list[str]) -> bytes:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=columns, extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return buffer.getvalue().encode("utf-8")


def compute_signature(*datasets: bytes) -> str:
    hasher = hashlib.sha256()
    for data in datasets:
        hasher.update(data)
    return hasher.hexdigest()


def roster_to_image_bytes(title: str, rows: list[dict[str, str]], columns: list[str]) -> bytes:
    font = ImageFont.load_default()
    padding_x = 12
    padding_y = 8
    gutter = 2

    measure_image = Image.new("RGB", (1, 1), "white")
    draw = ImageDraw.Draw(measure_image)

    def text_size(text: str) -> tuple[int, int]:
        bbox = draw.multiline_textbbox((0, 0), text or " ", font=font, spacing=4)
        return bbox[2] - bbox[0], bbox[3] - bbox[1]

    column_widths = []
    for column in columns:
        width = max([text_size(column)[0], *(text_size(row.get(column, ""))[0] for row in rows)])
        column_widths.append(width + 2 * padding_x)
    row_height = text_size("Ag")[1] + 2 * padding_y
    title_height = text_size(title)[1] + 2 * padding_y

    table_width = sum(column_widths) + gutter * (len(columns) + 1)
    width = max(table_width, text_size(title)[0] + 2 * padding_x)
    height = title_height + row_height * (len(rows) + 1) + gutter * (len(rows) + 2)

    image = Image.new("RGB", (width, height), "white")
    draw = ImageDraw.Draw(image)
    draw.text((padding_x, padding_y), title, font=font, fill="black")

    def draw_cell(x: int, y: int, w: int, text: str, *, header: bool = False) -> None:
        draw.rectangle([x, y, x + w, y + row_height], fill="#f6f7fb" if header else "white", outline="#cdd0d5")
        draw.text((x + padding_x, y + padding_y), text, font=font, fill="black")

    y = title_height + gutter
    for index, row in enumerate([dict(zip(columns, columns)), *rows]):
        x = gutter
        for width_value, column in zip(column_widths, columns):
            draw_cell(x, y, width_value, row.get(column, ""), header=index == 0)
            x += width_value + gutter
        y += row_height + gutter

    output = io.BytesIO()
    image.save(output, format="PNG")
    return output.getvalue()


def get_upload_bytes(state_key: str, label: str, *, file_type: str) -> bytes | None:
    uploaded = st.file_uploader(label, type=file_type, key=f"{state_key}_uploader")
    if uploaded is not None:
        st.session_state[state_key] = uploaded.getvalue()
    return st.session_state.get(state_key)


def workshops_to_json(workshops: list[Workshop]) -> bytes:
    return json.dumps([workshop.as_dict() for workshop in workshops], indent=2, ensure_ascii=False).encode("utf-8")


def build_roster_archive(workshops: list[Workshop]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, mode="w", compression=zipfile.ZIP_DEFLATED) as archive:
        for workshop in workshops:
            filename = safe_filename(
                f"{workshop.period.sheet_name}_{workshop.name}_{workshop.duration.description}"
            )
            archive.writestr(f"{filename}.csv", rows_to_csv(roster_rows(workshop), ROSTER_COLUMNS))
    return buffer.getvalue()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    st.set_page_config(page_title="Workshop Rosters", layout="wide")

    st.title("Workshop Rosters")
    st.caption("Import a registration workbook and review who signed up for each workshop.")
    st.markdown(
        """
        <style>
        .workshop-table {width: 100%; border-collapse: collapse;}
        .workshop-table th, .workshop-table td {
            border: 1px solid #d9d9d9;
            padding: 0.5rem;
            text-align: left;
        }
        .workshop-table thead tr {background-color: #f8f9fa;}
        .sidebar-hint {font-size: 0.75rem; color: #6c757d;}
        </style>
        """,
        unsafe_allow_html=True,
    )

    with st.sidebar:
        st.header("Data")
        workbook_bytes = get_upload_bytes("workbook_xlsx", "Registration workbook (XLSX)", file_type="xlsx")
        schema_bytes = get_upload_bytes("schema_json", "Event schema (JSON, optional)", file_type="json")
        st.markdown(
            "<p class='sidebar-hint'>Uploaded files are kept only for the current session.</p>",
            unsafe_allow_html=True,
        )

        if st.button("Reset uploaded data"):
            for key in ("workbook_xlsx", "schema_json", "import_signature", "workshops"):
                st.session_state.pop(key, None)
            st.rerun()

    try:
        schema = load_schema(schema_bytes, name="uploaded schema") if schema_bytes else load_default_schema()
    except DataLoaderError as exc:
        st.error(f"Error loading the event schema: {exc}")
        st.stop()

    if workbook_bytes is None:
        st.info("Upload a registration workbook to get started.")
        st.stop()

    signature = compute_signature(workbook_bytes, schema_bytes or b"")
    if st.session_state.get("import_signature") != signature:
        try:
            st.session_state.workshops = import_workshops(workbook_bytes, schema, logger=logger)
        except DataLoaderError as exc:
            st.error(f"Error importing the workbook: {exc}")
            st.stop()
        st.session_state.import_signature = signature

    workshops: list[Workshop] = st.session_state.workshops
    if not workshops:
        st.warning("No workshops were found in this workbook.")

    st.subheader(schema.event_name or "Workshops")
    periods = periods_in_order(workshops)
    if periods:
        tabs = st.tabs([period.display_name for period in periods])
        for tab, period in zip(tabs, periods):
            with tab:
                period_workshops = workshops_for_period(workshops, period)
                st.markdown(
                    build_table_html(workshop_rows(period_workshops), WORKSHOP_COLUMNS),
                    unsafe_allow_html=True,
                )

                selected_index = st.selectbox(
                    "Workshop",
                    options=list(range(len(period_workshops))),
                    format_func=lambda index, items=period_workshops: workshop_label(items[index]),
                    key=f"workshop_selection_{period.sheet_name}",
                )
                workshop = period_workshops[selected_index]
                rows = roster_rows(workshop)
                st.markdown(build_table_html(rows, ROSTER_COLUMNS), unsafe_allow_html=True)
                with st.expander("Registration order"):
                    st.markdown(
                        build_table_html(registration_rows(workshop), ROSTER_COLUMNS),
                        unsafe_allow_html=True,
                    )

                download_name = safe_filename(f"{period.sheet_name}_{workshop.name}_{workshop.duration.description}")
                st.download_button(
                    "Download roster as CSV",
                    data=rows_to_csv(rows, ROSTER_COLUMNS),
                    file_name=f"{download_name}.csv",
                    mime="text/csv",
                    key=f"roster_csv_{period.sheet_name}",
                )
                st.download_button(
                    "Download roster as image",
                    data=roster_to_image_bytes(workshop_label(workshop), rows, ROSTER_COLUMNS),
                    file_name=f"{download_name}.png",
                    mime="image/png",
                    key=f"roster_png_{period.sheet_name}",
                )

    st.divider()
    st.download_button(
        "Download workshop summary (CSV)",
        data=rows_to_csv(workshop_rows(workshops), WORKSHOP_COLUMNS),
        file_name="workshops.csv",
        mime="text/csv",
    )
    st.download_button(
        "Download all rosters (ZIP)",
        data=build_roster_archive(workshops),
        file_name="workshop_rosters.zip",
        mime="application/zip",
    )
    st.download_button(
        "Download workshops (JSON)",
        data=workshops_to_json(workshops),
        file_name="workshops.json",
        mime="application/json",
    )

    with st.expander("Workbook structure"):
        st.caption("Sheet names, headers and a sample row, for adapting the event schema to a new layout.")
        st.download_button(
            "Download structure (JSON)",
            data=dump_workbook_structure_json(workbook_bytes).encode("utf-8"),
            file_name="workbook_structure.json",
            mime="application/json",
        )


if __name__ == "__main__":
    main()
