"""
api.routes_parts - /api/v1/parts search and lookup endpoints.
"""

from flask import jsonify, request

from api import api_bp
from services.actions import run_action
from services.parts_service import PartsService


@api_bp.route("/parts")
def list_parts():
    """
    GET /api/v1/parts?stockcode=AB
    GET /api/v1/parts?descr=bear

    Prefix search by stock code (2+ characters) or description
    (3+ characters).  Without either parameter the result is empty.
    """
    stockcode = request.args.get("stockcode", "")
    descr = request.args.get("descr", "")
    if stockcode:
        result = run_action(PartsService.search_by_stockcode, stockcode, default=[])
    elif descr:
        result = run_action(PartsService.search_by_description, descr, default=[])
    else:
        return jsonify({"data": [], "error": None})
    return jsonify(result.to_dict())


@api_bp.route("/parts/<int:part_id>")
def get_part(part_id: int):
    """GET /api/v1/parts/{id}"""
    result = run_action(PartsService.get, part_id)
    if result.ok and result.data is None:
        return jsonify({"data": None, "error": "not found"}), 404
    return jsonify(result.to_dict())


@api_bp.route("/parts/<int:part_id>/types")
def part_types(part_id: int):
    """GET /api/v1/parts/{id}/types - equipment type ids the part fits."""
    return jsonify(run_action(PartsService.types_for_part, part_id, default=[]).to_dict())
