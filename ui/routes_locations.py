"""
ui.routes_locations - Mines, shafts, sections and gangs.

Shafts / sections / gangs are listed through their RPC views, whose
column set is whatever the database function returns.
"""

from __future__ import annotations

from flask import redirect, request, url_for

from services.actions import run_action
from services.location_service import LocationService
from ui import ui_bp
from ui.admin_pages import Field, render_admin
from ui.helpers import dropdowns, flash_result, form_flag

ACTIVE = Field("isactive", "Active", kind="checkbox")


# ── Mines ──────────────────────────────────────────────────────────────

@ui_bp.route("/mines", methods=["GET", "POST"])
def mines():
    if request.method == "POST":
        result = run_action(LocationService.insert_mine,
                            request.form.get("descr"), form_flag("isactive"))
        flash_result(result, "Mine added.")
        return redirect(url_for("ui.mines"))

    result = run_action(LocationService.all_mines, default=[])
    return render_admin(
        "Mines", "ui.mines", result.data,
        columns=[("id", "ID"), ("descr", "Mine"), ("isactive", "Active")],
        fields=[Field("descr", "Mine", required=True), ACTIVE],
        error=result.error,
    )


@ui_bp.route("/mines/<int:row_id>", methods=["POST"])
def mines_edit(row_id: int):
    result = run_action(LocationService.update_mine, row_id,
                        descr=request.form.get("descr"), isactive=form_flag("isactive"))
    flash_result(result, "Mine saved.")
    return redirect(url_for("ui.mines"))


# ── Shafts ─────────────────────────────────────────────────────────────

@ui_bp.route("/shafts", methods=["GET", "POST"])
def shafts():
    if request.method == "POST":
        result = run_action(LocationService.insert_shaft, request.form.get("mine_id"),
                            request.form.get("descr"), form_flag("isactive"))
        flash_result(result, "Shaft added.")
        return redirect(url_for("ui.shafts"))

    result = run_action(LocationService.all_shafts, default=[])
    return render_admin(
        "Shafts", "ui.shafts", result.data, columns=None,
        fields=[Field("mine_id", "Mine", kind="select", options="mines"),
                Field("descr", "Shaft", required=True), ACTIVE],
        options=dropdowns("mines"), error=result.error,
    )


@ui_bp.route("/shafts/<int:row_id>", methods=["POST"])
def shafts_edit(row_id: int):
    result = run_action(LocationService.update_shaft, row_id,
                        mine_id=request.form.get("mine_id") or None,
                        descr=request.form.get("descr"), isactive=form_flag("isactive"))
    flash_result(result, "Shaft saved.")
    return redirect(url_for("ui.shafts"))


# ── Sections ───────────────────────────────────────────────────────────

@ui_bp.route("/sections", methods=["GET", "POST"])
def sections():
    if request.method == "POST":
        result = run_action(LocationService.insert_section, request.form.get("shaft_id"),
                            request.form.get("descr"), request.form.get("costcode"),
                            form_flag("isactive"))
        flash_result(result, "Section added.")
        return redirect(url_for("ui.sections"))

    result = run_action(LocationService.all_sections, default=[])
    return render_admin(
        "Sections", "ui.sections", result.data, columns=None,
        fields=[Field("mine_id", "Mine", kind="select", options="mines"),
                Field("shaft_id", "Shaft", kind="select", options="shafts"),
                Field("descr", "Section", required=True),
                Field("costcode", "Cost Code"), ACTIVE],
        options={**dropdowns("mines"), "shafts": []}, error=result.error,
    )


@ui_bp.route("/sections/<int:row_id>", methods=["POST"])
def sections_edit(row_id: int):
    result = run_action(LocationService.update_section, row_id,
                        shaft_id=request.form.get("shaft_id") or None,
                        descr=request.form.get("descr"),
                        costcode=request.form.get("costcode"),
                        isactive=form_flag("isactive"))
    flash_result(result, "Section saved.")
    return redirect(url_for("ui.sections"))


# ── Gangs ──────────────────────────────────────────────────────────────

@ui_bp.route("/gangs", methods=["GET", "POST"])
def gangs():
    if request.method == "POST":
        result = run_action(LocationService.insert_gang, request.form.get("section_id"),
                            request.form.get("descr"), form_flag("isactive"))
        flash_result(result, "Gang added.")
        return redirect(url_for("ui.gangs"))

    result = run_action(LocationService.all_gangs, default=[])
    return render_admin(
        "Gangs", "ui.gangs", result.data, columns=None,
        fields=[Field("mine_id", "Mine", kind="select", options="mines"),
                Field("shaft_id", "Shaft", kind="select", options="shafts"),
                Field("section_id", "Section", kind="select", options="sections"),
                Field("descr", "Gang", required=True), ACTIVE],
        options={**dropdowns("mines"), "shafts": [], "sections": []},
        error=result.error,
    )


@ui_bp.route("/gangs/<int:row_id>", methods=["POST"])
def gangs_edit(row_id: int):
    result = run_action(LocationService.update_gang, row_id,
                        section_id=request.form.get("section_id") or None,
                        descr=request.form.get("descr"), isactive=form_flag("isactive"))
    flash_result(result, "Gang saved.")
    return redirect(url_for("ui.gangs"))
