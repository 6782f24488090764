"""
reports.pdf_export - Landscape PDF table for report rows.

A plain grid of text: optional 14pt title, bold header row, 8pt body,
columns spread evenly across the page.  Rows that do not fit start a
new page.
"""

from __future__ import annotations

from io import BytesIO

from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from reports.formatting import format_export_cell

PDF_MIMETYPE = "application/pdf"

FONT_NAME = "Helvetica"
FONT_SIZE = 8
TITLE_SIZE = 14
MARGIN = 10 * mm
ROW_HEIGHT = 6 * mm


def export_pdf_table(rows: list[dict], title: str | None = None,
                     columns: list[str] | None = None) -> BytesIO:
    """
    Draw *rows* (dicts; keys of the first row are the columns unless
    *columns* is given) as a table and return the PDF bytes.
    """
    if columns is None:
        columns = list(rows[0].keys()) if rows else []
    page_w, page_h = landscape(A4)
    usable = page_w - 2 * MARGIN
    col_w = usable / len(columns) if columns else usable

    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=landscape(A4))
    c.setTitle(title or "Export")

    # reportlab's origin is bottom-left; y below counts down from the top
    y = MARGIN
    if title and str(title).strip():
        c.setFont(FONT_NAME, TITLE_SIZE)
        c.drawString(MARGIN, page_h - (y + 6 * mm), str(title).strip())
        y += 12 * mm

    def draw_row(cells: list, bold: bool = False):
        nonlocal y
        if y + ROW_HEIGHT > page_h - MARGIN:
            c.showPage()
            y = MARGIN
        c.setFont(FONT_NAME + "-Bold" if bold else FONT_NAME, FONT_SIZE)
        x = MARGIN
        for value in cells:
            c.drawString(x + 1 * mm, page_h - (y + 4 * mm), format_export_cell(value))
            x += col_w
        y += ROW_HEIGHT

    draw_row(columns, bold=True)
    for row in rows:
        draw_row([row.get(k) for k in columns])

    c.save()
    buf.seek(0)
    return buf
