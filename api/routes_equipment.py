"""
api.routes_equipment - Equipment item lookups used by the pickers.
"""

from flask import jsonify, request

from api import api_bp
from services.actions import run_action
from services.equipment_service import EquipmentService
from services.jobs_service import JobsService


@api_bp.route("/equipment/items/search")
def search_items():
    """
    GET /api/v1/equipment/items/search?q=AB1[&type_id=4]

    Substring match on serial number; with a type, a prefix match over
    that type's active items.
    """
    type_id = request.args.get("type_id") or None
    result = run_action(EquipmentService.search_items_by_serial,
                        request.args.get("q", ""), type_id, default=[])
    return jsonify(result.to_dict())


@api_bp.route("/equipment/items/<int:item_id>")
def get_item(item_id: int):
    result = run_action(EquipmentService.get_item, item_id)
    if result.ok and result.data is None:
        return jsonify({"data": None, "error": "not found"}), 404
    return jsonify(result.to_dict())


@api_bp.route("/equipment/types/<type_id>/items")
def items_for_type(type_id: str):
    """GET /api/v1/equipment/types/{id}/items (get_itemspertype)"""
    return jsonify(run_action(JobsService.items_for_type, type_id, default=[]).to_dict())


@api_bp.route("/equipment/types/<type_id>/parts")
def parts_for_type(type_id: str):
    """GET /api/v1/equipment/types/{id}/parts (get_partspertype)"""
    return jsonify(run_action(JobsService.parts_for_type, type_id, default=[]).to_dict())
