"""
api.routes_reports - Raw report rows as JSON.

    GET /api/v1/reports/<slug>?<report filter>

Same filter query string as the report pages (see reports.filters).
"""

from flask import abort, jsonify, request

from api import api_bp
from reports.filters import ReportFilter
from reports.registry import REPORTS, get_report
from services.actions import run_action


@api_bp.route("/reports")
def list_reports():
    return jsonify({
        "data": [{"slug": r.slug, "title": r.title, "filters": list(r.filters)}
                 for r in REPORTS.values()],
        "error": None,
    })


@api_bp.route("/reports/<slug>")
def report_rows(slug: str):
    report = get_report(slug) or abort(404)
    result = run_action(report.fetch, ReportFilter.from_args(request.args), default=[])
    if result.ok:
        result.data, _truncated = report.limit(result.data)
    return jsonify(result.to_dict())
