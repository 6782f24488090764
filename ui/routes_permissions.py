"""
ui.routes_permissions - Grant application functions to users.
"""

from __future__ import annotations

from flask import redirect, render_template, request, url_for

from services.actions import run_action
from services.permissions_service import PermissionsService
from ui import ui_bp
from ui.helpers import flash_result


@ui_bp.route("/permissions")
def permissions():
    user_id = request.args.get("user_id", "")
    users = run_action(PermissionsService.all_users, default=[])
    functions = run_action(PermissionsService.all_functions, default=[])
    granted = run_action(PermissionsService.functions_for_user, user_id, default=[])
    return render_template(
        "permissions.html", user_id=user_id, users=users.data,
        functions=functions.data, granted={str(f) for f in granted.data},
        error=users.error or functions.error or granted.error,
    )


@ui_bp.route("/permissions/save", methods=["POST"])
def permissions_save():
    user_id = request.form.get("user_id", "")
    result = run_action(PermissionsService.save_user_permissions, user_id,
                        request.form.getlist("function_ids"))
    flash_result(result, "Permissions saved.")
    return redirect(url_for("ui.permissions", user_id=user_id or None))
