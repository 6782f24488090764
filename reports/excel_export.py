"""
reports.excel_export - Styled .xlsx workbooks for the report pages.

Every report sheet follows the same shape:

    row 1        title, Aptos 18, centred, merged across the table
    row 2        57pt high; the logo (96x96) sits in the top-left corner
    rows 3..n    filter lines (Aptos 14), one per selected filter
    header row   bold, yellow fill, thin borders
    data rows    thin borders

Column widths are fitted to the longest cell, clamped to
EXPORT_WIDTH_MIN..EXPORT_WIDTH_MAX.  Workbooks are returned as an
in-memory BytesIO ready for ``send_file``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from io import BytesIO
from pathlib import Path

from openpyxl import Workbook
from openpyxl.drawing.image import Image as XLImage
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

import config
from reports.formatting import (
    column_header, format_date_dd_mmm_yyyy, format_export_cell,
)

logger = logging.getLogger(__name__)

FONT_NAME = "Aptos"
TITLE_SIZE = 18
INFO_SIZE = 14
LOGO_SIZE = 96
LOGO_ROW_HEIGHT = 57
# filter lines that list equipment types run far to the right
WIDE_MERGE = 702

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_THIN = Side(style="thin")
BORDER = Border(top=_THIN, left=_THIN, bottom=_THIN, right=_THIN)
HEADER_FILL = PatternFill(fill_type="solid", fgColor="FFFFFF00")


@dataclass
class InfoLine:
    row: int
    text: str
    merge_to: int | None = None     # None = the sheet's title merge width


@dataclass
class SheetLayout:
    title: str
    sheet_name: str
    header_row: int
    font_size: int = 11
    merge_end: int = 8
    info: list[InfoLine] = field(default_factory=list)
    title_in_width: bool = False    # first column width also fits the title


# ── Workbook writer ────────────────────────────────────────────────────

def column_widths(table: list[list], title: str | None = None) -> list[int]:
    """Longest cell per column + 1, clamped to the export width limits."""
    if not table:
        return []
    col_count = max(len(r) for r in table)
    widths = []
    for c in range(col_count):
        longest = max(len("" if c >= len(r) or r[c] is None else str(r[c])) for r in table)
        if c == 0 and title:
            longest = max(longest, len(title))
        widths.append(min(config.EXPORT_WIDTH_MAX, max(config.EXPORT_WIDTH_MIN, longest + 1)))
    return widths


def _add_logo(ws) -> None:
    logo = Path(config.LOGO_PATH)
    if not logo.is_file():
        logger.debug("No logo at %s, exporting without it", logo)
        return
    img = XLImage(str(logo))
    img.width = LOGO_SIZE
    img.height = LOGO_SIZE
    ws.add_image(img, "A1")


def write_sheet(table: list[list], layout: SheetLayout) -> BytesIO:
    """
    Write *table* (header row first, then data rows) under *layout*'s
    title block and return the saved workbook.
    """
    header = table[0] if table else []
    data_rows = table[1:]
    col_count = max(len(header), 1)

    wb = Workbook()
    ws = wb.active
    ws.title = layout.sheet_name[:31]

    title_cell = ws.cell(row=1, column=1, value=layout.title)
    title_cell.font = Font(name=FONT_NAME, size=TITLE_SIZE)
    title_cell.alignment = Alignment(horizontal="center", vertical="center")
    ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=layout.merge_end)
    ws.row_dimensions[2].height = LOGO_ROW_HEIGHT

    for line in layout.info:
        cell = ws.cell(row=line.row, column=1, value=line.text)
        cell.font = Font(name=FONT_NAME, size=INFO_SIZE)
        ws.merge_cells(start_row=line.row, start_column=1, end_row=line.row,
                       end_column=line.merge_to or layout.merge_end)

    widths = column_widths(table, layout.title if layout.title_in_width else None)
    for c, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(c)].width = width

    for c in range(1, col_count + 1):
        cell = ws.cell(row=layout.header_row, column=c,
                       value=header[c - 1] if c - 1 < len(header) else "")
        cell.font = Font(name=FONT_NAME, size=layout.font_size, bold=True)
        cell.fill = HEADER_FILL
        cell.border = BORDER

    body_font = Font(name=FONT_NAME, size=layout.font_size)
    for r, values in enumerate(data_rows, start=layout.header_row + 1):
        for c in range(1, col_count + 1):
            value = values[c - 1] if c - 1 < len(values) else ""
            cell = ws.cell(row=r, column=c, value="" if value is None else value)
            cell.font = body_font
            cell.border = BORDER

    _add_logo(ws)

    buf = BytesIO()
    wb.save(buf)
    buf.seek(0)
    return buf


# ── Report layouts ─────────────────────────────────────────────────────

def _from_to(labels: dict) -> str:
    return (f"From  {format_date_dd_mmm_yyyy(labels.get('from_date'))}"
            f"  To  {format_date_dd_mmm_yyyy(labels.get('to_date'))}")


def _types_text(labels: dict) -> str:
    return ", ".join(labels.get("equipment_types") or [])


def _location_lines(labels: dict, first_row: int) -> list[InfoLine]:
    names = (("Mine", "mine"), ("Shaft", "shaft"), ("Section", "section"), ("Gang", "gang"))
    return [InfoLine(first_row + i, f"{caption}: {labels.get(key) or ''}")
            for i, (caption, key) in enumerate(names)]


def services_done_layout(labels: dict, col_count: int) -> SheetLayout:
    return SheetLayout(
        title="Services Done", sheet_name="Services Done", header_row=10,
        merge_end=max(col_count, 13),
        info=[InfoLine(3, _from_to(labels))]
        + _location_lines(labels, 4)
        + [InfoLine(8, f"Equipment Types: {_types_text(labels)}", WIDE_MERGE)],
    )


def job_count_layout(labels: dict, col_count: int) -> SheetLayout:
    return SheetLayout(
        title="Job Count per Equipment Item", sheet_name="Job Count per Item",
        header_row=5, font_size=8,
        info=[InfoLine(3, _from_to(labels))],
    )


def no_recent_jobs_layout(labels: dict, col_count: int,
                          today: date | None = None) -> SheetLayout:
    today = today or date.today()
    return SheetLayout(
        title="No Recent Jobs", sheet_name="No Recent Jobs", header_row=11,
        info=[
            InfoLine(3, f"Report Date: {format_date_dd_mmm_yyyy(today)}"),
            InfoLine(4, f"No Jobs Since {labels.get('days', '')} Days ago"),
        ]
        + _location_lines(labels, 5)
        + [InfoLine(9, f"Equipment Types: {_types_text(labels)}", WIDE_MERGE)],
    )


def indiv_history_layout(labels: dict, col_count: int) -> SheetLayout:
    return SheetLayout(
        title="Individual Item History", sheet_name="Individual Item History",
        header_row=7, font_size=8,
        info=[
            InfoLine(3, f"Equipment Type: {labels.get('equipment_type') or ''}"),
            InfoLine(4, f"Serial No: {labels.get('serial_no') or ''}"),
            InfoLine(5, _from_to(labels)),
        ],
    )


def jobs_per_technician_layout(labels: dict, col_count: int) -> SheetLayout:
    return SheetLayout(
        title="Jobs per Technician", sheet_name="Jobs per Technician",
        header_row=5, font_size=8,
        info=[InfoLine(3, _from_to(labels))],
    )


def equipment_list_layout(labels: dict, col_count: int) -> SheetLayout:
    return SheetLayout(
        title="Equipment List", sheet_name="Equipment List", header_row=9,
        merge_end=9,
        info=_location_lines(labels, 3)
        + [InfoLine(7, f"Equipment Types: {_types_text(labels)}", WIDE_MERGE)],
    )


def service_list_layout(labels: dict, col_count: int,
                        title: str = "Service List") -> SheetLayout:
    """
    With a from date the filter block fills rows 3-8 and the header lands
    on row 10; without one the header follows the title directly.
    """
    merge_end = max(col_count, 8)
    if not labels.get("from_date"):
        return SheetLayout(title=title, sheet_name="Service List", header_row=2,
                           merge_end=merge_end, title_in_width=True)
    types = labels.get("equipment_types") or []
    return SheetLayout(
        title=title, sheet_name="Service List", header_row=10,
        merge_end=merge_end, title_in_width=True,
        info=[
            InfoLine(3, f"From {format_date_dd_mmm_yyyy(labels.get('from_date'))}"
                        f"   To {format_date_dd_mmm_yyyy(labels.get('to_date'))}", 7),
            InfoLine(4, f"Mine:  {labels.get('mine') or ''}", 7),
            InfoLine(5, f"Shaft:  {labels.get('shaft') or ''}", 7),
            InfoLine(6, f"Section:  {labels.get('section') or ''}", 7),
            InfoLine(7, f"Gang:  {labels.get('gang') or ''}", 7),
            InfoLine(8, "Equipment types" + (", " + ", ".join(types) if types else ""), 100),
        ],
    )


def plain_layout(title: str, col_count: int) -> SheetLayout:
    """Title and logo only; for reports without a filter block."""
    return SheetLayout(title=title, sheet_name=title, header_row=3,
                       merge_end=max(col_count, 8), title_in_width=True)


def table_from_rows(rows: list) -> list[list]:
    """Header + cell text for a list of dicts; lists of rows pass through."""
    if not rows:
        return []
    if isinstance(rows[0], dict):
        keys = list(rows[0].keys())
        return ([[column_header(k) for k in keys]]
                + [[format_export_cell(r.get(k)) for k in keys] for r in rows])
    return [list(r) for r in rows]


def export_rows(rows: list, title: str) -> BytesIO:
    """Single plain sheet for arbitrary rows (dicts or lists)."""
    table = table_from_rows(rows)
    return write_sheet(table, plain_layout(title, len(table[0]) if table else 0))


LAYOUTS = {
    "services_done": services_done_layout,
    "full_service_history": services_done_layout,
    "job_count": job_count_layout,
    "no_recent_jobs": no_recent_jobs_layout,
    "indiv_history": indiv_history_layout,
    "jobs_per_technician": jobs_per_technician_layout,
    "equipment_list": equipment_list_layout,
    "service_list": service_list_layout,
}


def export_report(report: str, table: list[list], labels: dict,
                  title: str | None = None) -> BytesIO:
    """Workbook for *report* using its registered layout (plain when unknown)."""
    col_count = len(table[0]) if table else 0
    factory = LAYOUTS.get(report)
    if factory is None:
        layout = plain_layout(title or report, col_count)
    else:
        layout = factory(labels, col_count)
        if title:
            layout.title = title
    logger.info("Excel export %s: %d data rows", report, max(len(table) - 1, 0))
    return write_sheet(table, layout)
