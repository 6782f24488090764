"""
api.errors - JSON error handlers for the API blueprint.

Errors use the same envelope as successful calls, with ``data`` null.
"""

from flask import jsonify
from api import api_bp


def _error(message: str, status: int):
    return jsonify({"data": None, "error": message}), status


@api_bp.errorhandler(404)
def api_not_found(_e):
    return _error("not found", 404)


@api_bp.errorhandler(400)
def api_bad_request(_e):
    return _error("bad request", 400)


@api_bp.errorhandler(500)
def api_server_error(_e):
    return _error("internal server error", 500)
