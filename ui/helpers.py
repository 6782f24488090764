"""
ui.helpers - Small glue shared by the page modules.
"""

from __future__ import annotations

from flask import flash, request

from db import get_session
from reports.formatting import format_cell
from services.actions import ActionResult
from services.lookup_service import LookupService
from ui import ui_bp


def flash_result(result: ActionResult, success: str) -> bool:
    """Flash the action outcome; True when it succeeded."""
    if result.ok:
        flash(success, "success")
        return True
    flash(result.error, "danger")
    return False


def form_flag(name: str) -> bool:
    """HTML checkboxes are only submitted when ticked."""
    return name in request.form


def dropdowns(*names: str) -> dict:
    """Active lookup lists for the page's select boxes, keyed by *names*."""
    sources = {
        "categories": LookupService.active_categories,
        "types": LookupService.active_types,
        "mines": LookupService.active_mines,
        "technicians": LookupService.active_technicians,
    }
    session = get_session()
    try:
        return {name: sources[name](session) for name in names}
    finally:
        session.close()


@ui_bp.app_template_filter("cell")
def cell_filter(value) -> str:
    """Grid cell text for raw row values (Yes/No, dates, em dash for NULL)."""
    return format_cell(value)
