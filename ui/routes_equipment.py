"""
ui.routes_equipment - Equipment categories, types and items.
"""

from __future__ import annotations

from flask import abort, redirect, render_template, request, url_for

from db import get_session
from services.actions import run_action
from services.equipment_service import EquipmentService
from services.lookup_service import LookupService
from ui import ui_bp
from ui.admin_pages import Field, render_admin, sort_rows
from ui.helpers import dropdowns, flash_result, form_flag

ITEM_FIELDS = ("equipmenttypes_id", "mine_id", "shaft_id", "section_id", "gang_id",
               "serialno", "pistonno")


# ── Categories (also the main page) ────────────────────────────────────

@ui_bp.route("/equipment/categories", methods=["GET", "POST"])
def categories():
    if request.method == "POST":
        result = run_action(EquipmentService.insert_category,
                            request.form.get("descr"), form_flag("isactive"))
        flash_result(result, "Equipment category added.")
        return redirect(url_for("ui.categories"))

    result = run_action(EquipmentService.all_categories, default=[])
    rows, sort, order = sort_rows(result.data, ("id", "descr", "isactive"))
    return render_admin(
        "Equipment Categories", "ui.categories", rows,
        columns=[("id", "ID"), ("descr", "Category"), ("isactive", "Active")],
        fields=[Field("descr", "Category", required=True),
                Field("isactive", "Active", kind="checkbox")],
        sortable=("id", "descr", "isactive"), sort=sort, order=order,
        error=result.error,
    )


@ui_bp.route("/equipment/categories/<int:row_id>", methods=["POST"])
def categories_edit(row_id: int):
    result = run_action(EquipmentService.update_category, row_id,
                        descr=request.form.get("descr"), isactive=form_flag("isactive"))
    flash_result(result, "Equipment category saved.")
    return redirect(url_for("ui.categories"))


@ui_bp.route("/main")
def main_page():
    return categories()


# ── Types ──────────────────────────────────────────────────────────────

@ui_bp.route("/equipment/types", methods=["GET", "POST"])
def types():
    if request.method == "POST":
        result = run_action(EquipmentService.insert_type,
                            request.form.get("equipmentcategories_id"),
                            request.form.get("descr"), form_flag("isactive"))
        flash_result(result, "Equipment type added.")
        return redirect(url_for("ui.types"))

    result = run_action(EquipmentService.all_types, default=[])
    return render_admin(
        "Equipment Types", "ui.types", result.data,
        columns=None,
        fields=[Field("equipmentcategories_id", "Category", kind="select",
                      options="categories"),
                Field("descr", "Type", required=True),
                Field("isactive", "Active", kind="checkbox")],
        options=dropdowns("categories"), error=result.error,
    )


@ui_bp.route("/equipment/types/<int:row_id>", methods=["POST"])
def types_edit(row_id: int):
    result = run_action(EquipmentService.update_type, row_id,
                        category_id=request.form.get("equipmentcategories_id"),
                        descr=request.form.get("descr"), isactive=form_flag("isactive"))
    flash_result(result, "Equipment type saved.")
    return redirect(url_for("ui.types"))


# ── Items ──────────────────────────────────────────────────────────────

def _item_form() -> dict:
    return {name: request.form.get(name, "") for name in ITEM_FIELDS}


def _cascade_options(item: dict | None) -> dict:
    """Shaft / section / gang choices for an item's current location."""
    item = item or {}
    session = get_session()
    try:
        out = {}
        for name, fn, parent in (("shafts", LookupService.shafts_by_mine, "mine_id"),
                                 ("sections", LookupService.sections_by_shaft, "shaft_id"),
                                 ("gangs", LookupService.gangs_by_section, "section_id")):
            # no parent selected: empty list rather than "all"
            out[name] = fn(session, item[parent]) if item.get(parent) else []
        return out
    finally:
        session.close()


@ui_bp.route("/equipment/items", methods=["GET", "POST"])
def items():
    if request.method == "POST":
        form = _item_form()
        result = run_action(EquipmentService.insert_item, isactive=form_flag("isactive"),
                            **form)
        if flash_result(result, "Equipment item added."):
            return redirect(url_for("ui.item_edit", item_id=result.data["id"]))
        return render_template("items.html", item=form, results=[],
                               **dropdowns("types", "mines"), **_cascade_options(form))

    q = request.args.get("q", "")
    type_id = request.args.get("type_id") or None
    result = run_action(EquipmentService.search_items_by_serial, q, type_id, default=[])
    return render_template("items.html", q=q, type_id=type_id, item=None,
                           results=result.data, error=result.error,
                           **dropdowns("types", "mines"), **_cascade_options(None))


@ui_bp.route("/equipment/items/<int:item_id>", methods=["GET", "POST"])
def item_edit(item_id: int):
    if request.method == "POST":
        form = _item_form()
        result = run_action(EquipmentService.update_item, item_id,
                            isactive=form_flag("isactive"), **form)
        flash_result(result, "Equipment item saved.")
        return redirect(url_for("ui.item_edit", item_id=item_id))

    result = run_action(EquipmentService.get_item, item_id)
    if result.ok and result.data is None:
        abort(404)
    return render_template("items.html", item=result.data, results=[],
                           error=result.error, **dropdowns("types", "mines"),
                           **_cascade_options(result.data))
