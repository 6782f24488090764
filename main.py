#!/usr/bin/env python3
"""
MineTrack - Mining Equipment Maintenance Tracker
================================================

Single-command run:  python main.py

See config.py for all environment-variable tunables.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal

from flask import Flask, render_template
from flask.json.provider import DefaultJSONProvider

import config
from db import init_db
from api import api_bp
from ui import ui_bp
from services.auth_service import auth_enabled


class _JSONProvider(DefaultJSONProvider):
    """ISO dates and plain numbers for RPC rows (Flask defaults to HTTP dates)."""

    sort_keys = False

    @staticmethod
    def default(o):
        if isinstance(o, (datetime, date)):
            return o.isoformat()
        if isinstance(o, Decimal):
            return float(o)
        return DefaultJSONProvider.default(o)


def create_app(overrides: dict | None = None) -> Flask:
    """Flask application factory.  *overrides* may set DB_URL and Flask config."""

    overrides = dict(overrides or {})
    db_url = overrides.pop("DB_URL", config.DB_URL)

    app = Flask(
        __name__,
        template_folder=str(config.BASE_DIR / "templates"),
        static_folder=str(config.BASE_DIR / "static"),
    )
    app.json = _JSONProvider(app)
    app.secret_key = config.SECRET
    app.config.update(overrides)

    # ── Initialise database ─────────────────────────────────────────
    init_db(db_url)

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)
    app.register_blueprint(ui_bp)

    # ── Error handlers ──────────────────────────────────────────────
    @app.errorhandler(404)
    def _404(e):
        return render_template("error.html", code=404,
                               message="Page not found"), 404

    @app.errorhandler(500)
    def _500(e):
        return render_template("error.html", code=500,
                               message="Internal server error"), 500

    return app


def main():
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    print("=" * 56)
    print("  MineTrack - Equipment Maintenance")
    print("=" * 56)

    app = create_app()
    print(f"  Database: {config.DB_URL.split('@')[-1]}")
    if not auth_enabled():
        print("  Auth: SUPABASE_URL / SUPABASE_ANON_KEY not set - sign-in disabled")

    print(f"\n  http://{config.HOST}:{config.PORT}")
    print("=" * 56)

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
