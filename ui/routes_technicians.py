"""
ui.routes_technicians - Technician master list.
"""

from __future__ import annotations

from flask import redirect, request, url_for

from services.actions import run_action
from services.technicians_service import TechniciansService
from ui import ui_bp
from ui.admin_pages import Field, render_admin
from ui.helpers import flash_result, form_flag


@ui_bp.route("/technicians", methods=["GET", "POST"])
def technicians():
    if request.method == "POST":
        result = run_action(TechniciansService.insert_technician,
                            request.form.get("descr"), form_flag("isactive"))
        flash_result(result, "Technician added.")
        return redirect(url_for("ui.technicians"))

    result = run_action(TechniciansService.all_technicians, default=[])
    return render_admin(
        "Technicians", "ui.technicians", result.data,
        columns=[("id", "ID"), ("descr", "Technician"), ("isactive", "Active")],
        fields=[Field("descr", "Technician", required=True),
                Field("isactive", "Active", kind="checkbox")],
        error=result.error,
    )


@ui_bp.route("/technicians/<int:row_id>", methods=["POST"])
def technicians_edit(row_id: int):
    result = run_action(TechniciansService.update_technician, row_id,
                        descr=request.form.get("descr"), isactive=form_flag("isactive"))
    flash_result(result, "Technician saved.")
    return redirect(url_for("ui.technicians"))
