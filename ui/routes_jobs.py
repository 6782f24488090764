"""
ui.routes_jobs - Add-job page.

Picking an equipment type loads its items and the parts that fit it;
the job is saved with one part line per part given a quantity.
"""

from __future__ import annotations

from flask import redirect, render_template, request, url_for

from services.actions import run_action
from services.jobs_service import JobsService
from ui import ui_bp
from ui.helpers import dropdowns, flash_result


def _part_lines() -> list[dict]:
    """``part_id`` list plus ``qty_<id>`` / ``unitcost_<id>`` / ``isdamaged_<id>`` inputs."""
    lines = []
    for part_id in request.form.getlist("part_id"):
        lines.append({
            "part_id": part_id,
            "qty": request.form.get(f"qty_{part_id}", ""),
            "unitcost": request.form.get(f"unitcost_{part_id}", ""),
            "isdamaged": f"isdamaged_{part_id}" in request.form,
        })
    return lines


@ui_bp.route("/jobs/add", methods=["GET", "POST"])
def add_job():
    if request.method == "POST":
        form = request.form
        result = run_action(
            JobsService.save_job,
            form.get("equipmentitems_id"), form.get("technician_id"),
            form.get("datein"), form.get("dateout"), form.get("comments", "").strip(),
            _part_lines(),
        )
        flash_result(result, "Job saved.")
        return redirect(url_for("ui.add_job", type_id=form.get("type_id", "")))

    type_id = request.args.get("type_id", "")
    items = parts = None
    error = None
    if type_id:
        items = run_action(JobsService.items_for_type, type_id, default=[])
        parts = run_action(JobsService.parts_for_type, type_id, default=[])
        error = items.error or parts.error
    return render_template(
        "add_job.html", type_id=type_id,
        items=items.data if items else [], parts=parts.data if parts else [],
        error=error, **dropdowns("types", "technicians"),
    )
