"""
ui.routes_parts - Part search, add / edit, and the equipment types a
part fits.
"""

from __future__ import annotations

from flask import abort, redirect, render_template, request, url_for

from services.actions import run_action
from services.parts_service import NUMERIC_FIELDS, TEXT_FIELDS, PartsService
from ui import ui_bp
from ui.helpers import dropdowns, flash_result, form_flag


def _part_form() -> dict:
    data = {name: request.form.get(name, "") for name in TEXT_FIELDS + NUMERIC_FIELDS}
    data["isactive"] = form_flag("isactive")
    return data


def _create_with_types(session, data: dict, type_ids: list) -> dict:
    created = PartsService.create(session, data)
    PartsService.insert_types_for_part(session, created["id"], type_ids)
    return created


def _update_with_types(session, part_id, data: dict, type_ids: list) -> dict:
    updated = PartsService.update(session, part_id, data)
    PartsService.replace_types_for_part(session, part_id, type_ids)
    return updated


# ── Search / add ───────────────────────────────────────────────────────

@ui_bp.route("/parts", methods=["GET", "POST"])
def parts():
    if request.method == "POST":
        result = run_action(_create_with_types, _part_form(),
                            request.form.getlist("type_ids"))
        if flash_result(result, "Part added."):
            return redirect(url_for("ui.part_edit", part_id=result.data["id"]))
        return render_template("parts.html", part=_part_form(), part_types=[],
                               results=[], **dropdowns("types"))

    stockcode = request.args.get("stockcode", "")
    descr = request.args.get("descr", "")
    if stockcode:
        result = run_action(PartsService.search_by_stockcode, stockcode, default=[])
    elif descr:
        result = run_action(PartsService.search_by_description, descr, default=[])
    else:
        result = None
    return render_template(
        "parts.html", stockcode=stockcode, descr=descr, part=None, part_types=[],
        results=result.data if result else [], error=result.error if result else None,
        **dropdowns("types"),
    )


# ── Edit ───────────────────────────────────────────────────────────────

@ui_bp.route("/parts/<int:part_id>", methods=["GET", "POST"])
def part_edit(part_id: int):
    if request.method == "POST":
        result = run_action(_update_with_types, part_id, _part_form(),
                            request.form.getlist("type_ids"))
        flash_result(result, "Part saved.")
        return redirect(url_for("ui.part_edit", part_id=part_id))

    part = run_action(PartsService.get, part_id)
    if part.ok and part.data is None:
        abort(404)
    linked = run_action(PartsService.types_for_part, part_id, default=[])
    return render_template("parts.html", part=part.data, part_types=linked.data,
                           results=[], error=part.error or linked.error,
                           **dropdowns("types"))
