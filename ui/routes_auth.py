"""
ui.routes_auth - Sign-in / sign-out, the login guard and the menu tree.
"""

from __future__ import annotations

import logging

from flask import (
    flash, jsonify, redirect, render_template, request, session, url_for,
)

from services import auth_service
from ui import ui_bp

logger = logging.getLogger(__name__)

# Endpoints reachable without a signed-in user
PUBLIC_ENDPOINTS = {"ui.login", "static"}

MENU = [
    ("Admin", [
        ("Equipment Categories", "ui.categories"),
        ("Equipment Types", "ui.types"),
        ("Equipment Items", "ui.items"),
        ("Mines", "ui.mines"),
        ("Shafts", "ui.shafts"),
        ("Sections", "ui.sections"),
        ("Gangs", "ui.gangs"),
        ("Parts", "ui.parts"),
        ("Technicians", "ui.technicians"),
        ("Permissions", "ui.permissions"),
    ]),
    ("Functions", [
        ("Add Job", "ui.add_job"),
        ("Notes", "ui.notes"),
    ]),
    ("Reports", [
        ("Service List", "ui.report_service_list"),
        ("Services Done", "ui.report_services_done"),
        ("Full Service History", "ui.report_full_service_history"),
        ("Individual Item History", "ui.report_indiv_history"),
        ("Jobs per Technician", "ui.report_jobs_per_technician"),
        ("Job Count per Equipment Item", "ui.report_job_count"),
        ("No Recent Jobs", "ui.report_no_recent_jobs"),
        ("Equipment List", "ui.report_equipment_list"),
        ("Service History", "ui.report_service_history"),
    ]),
]


@ui_bp.before_app_request
def require_login():
    """With auth configured every page but the login form needs a user."""
    if not auth_service.auth_enabled():
        return None
    if request.endpoint in PUBLIC_ENDPOINTS or session.get("user"):
        return None
    if request.path.startswith("/api/"):
        return jsonify({"data": None, "error": "not signed in"}), 401
    return redirect(url_for("ui.login", next=request.path))


@ui_bp.app_context_processor
def inject_user():
    return {"current_user": session.get("user"), "menu": MENU}


@ui_bp.route("/login", methods=["GET", "POST"])
def login():
    if request.method == "GET":
        return render_template("login.html", auth_enabled=auth_service.auth_enabled())

    email = request.form.get("email", "").strip()
    password = request.form.get("password", "")
    try:
        user = auth_service.sign_in(email, password)
    except auth_service.AuthError as exc:
        flash(str(exc), "danger")
        return render_template("login.html", email=email,
                               auth_enabled=auth_service.auth_enabled()), 401

    session["user"] = user.to_session()
    logger.info("Signed in: %s", user.email)
    target = request.args.get("next", "")
    # only local paths
    if not target.startswith("/") or target.startswith("//"):
        target = url_for("ui.menu")
    return redirect(target)


@ui_bp.route("/logout", methods=["POST"])
def logout():
    user = session.pop("user", None) or {}
    auth_service.sign_out(user.get("access_token"))
    flash("Signed out.", "info")
    return redirect(url_for("ui.login"))


@ui_bp.route("/")
def index():
    return redirect(url_for("ui.menu"))


@ui_bp.route("/menu")
def menu():
    return render_template("menu.html")
