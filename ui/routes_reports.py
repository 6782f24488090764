"""
ui.routes_reports - Report pages and their Excel / PDF downloads.

Every report in reports.registry gets:

    GET /reports/<slug>               filter form + grid
    GET /reports/<slug>/export.xlsx   styled workbook
    GET /reports/<slug>/export.pdf    landscape table
"""

from __future__ import annotations

import logging

from flask import abort, flash, redirect, render_template, request, send_file, url_for

import config
from db import get_session
from reports.excel_export import XLSX_MIMETYPE, export_report
from reports.filters import ReportFilter
from reports.pdf_export import PDF_MIMETYPE, export_pdf_table
from reports.registry import REPORTS, ReportDef, get_report
from services.actions import run_action
from services.lookup_service import LookupService
from ui import ui_bp
from ui.helpers import dropdowns

logger = logging.getLogger(__name__)


def _labels(f: ReportFilter) -> dict:
    session = get_session()
    try:
        return f.labels(session)
    finally:
        session.close()


def _cascade_options(f: ReportFilter) -> dict:
    """Child lists for the currently selected mine / shaft / section."""
    session = get_session()
    try:
        return {
            "shafts": LookupService.shafts_by_mine(session, f.mine_id) if f.mine_id else [],
            "sections": LookupService.sections_by_shaft(session, f.shaft_id) if f.shaft_id else [],
            "gangs": LookupService.gangs_by_section(session, f.section_id) if f.section_id else [],
        }
    finally:
        session.close()


def _render_report(report: ReportDef):
    f = ReportFilter.from_args(request.args)
    submitted = "run" in request.args or not report.filters
    rows, error = [], None
    if submitted:
        result = run_action(report.fetch, f, default=[])
        rows, error = result.data, result.error

    rows, truncated = report.limit(rows)
    grid = report.grid(rows) if rows else None
    secondary = report.secondary(rows) if (rows and report.secondary) else None
    return render_template(
        "report.html", report=report, criteria=f, submitted=submitted,
        grid=grid, secondary=secondary, error=error, truncated=truncated,
        max_rows=config.JOBCOUNT_MAX_ROWS, export_args=f.query_args(), labels=_labels(f),
        **dropdowns("mines", "types"), **_cascade_options(f),
    )


def _make_view(report: ReportDef):
    def view():
        return _render_report(report)
    view.__name__ = f"report_{report.slug}"
    return view


for _report in REPORTS.values():
    ui_bp.add_url_rule(f"/reports/{_report.slug}", endpoint=f"report_{_report.slug}",
                       view_func=_make_view(_report))


def _fetch_for_export(report: ReportDef):
    """(filter, rows, None) or (None, None, redirect back to the page)."""
    f = ReportFilter.from_args(request.args)
    result = run_action(report.fetch, f, default=[])
    if not result.ok:
        flash(result.error, "danger")
        back = url_for(f"ui.report_{report.slug}", **request.args.to_dict(flat=False))
        return None, None, redirect(back)
    rows, truncated = report.limit(result.data)
    if truncated:
        logger.warning("%s export cut to %d rows", report.slug, config.JOBCOUNT_MAX_ROWS)
    return f, rows, None


@ui_bp.route("/reports/<slug>/export.xlsx")
def report_export_xlsx(slug: str):
    report = get_report(slug) or abort(404)
    f, rows, failed = _fetch_for_export(report)
    if failed:
        return failed
    buf = export_report(report.slug, report.export_table(rows), _labels(f),
                        title=report.title)
    return send_file(buf, mimetype=XLSX_MIMETYPE, as_attachment=True,
                     download_name=report.excel_name)


@ui_bp.route("/reports/<slug>/export.pdf")
def report_export_pdf(slug: str):
    report = get_report(slug) or abort(404)
    _f, rows, failed = _fetch_for_export(report)
    if failed:
        return failed
    logger.info("PDF export %s: %d rows", report.slug, len(rows))
    buf = export_pdf_table(rows, title=report.title)
    return send_file(buf, mimetype=PDF_MIMETYPE, as_attachment=True,
                     download_name=report.pdf_name or f"{report.slug}.pdf")
