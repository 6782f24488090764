"""
api.routes_lookups - Dropdown sources and the location cascade.

    GET /api/v1/lookups/categories
    GET /api/v1/lookups/types
    GET /api/v1/lookups/mines
    GET /api/v1/lookups/technicians
    GET /api/v1/lookups/shafts?mine_id=3[&all=1]
    GET /api/v1/lookups/sections?shaft_id=7[&all=1]
    GET /api/v1/lookups/gangs?section_id=12[&all=1]

``mine_id=0`` (or missing) lists every shaft; ``all=1`` includes
inactive rows.
"""

from flask import jsonify, request

from api import api_bp
from services.actions import run_action
from services.lookup_service import LookupService
from services.values import to_bool

_ACTIVE_LISTS = {
    "categories": LookupService.active_categories,
    "types": LookupService.active_types,
    "mines": LookupService.active_mines,
    "technicians": LookupService.active_technicians,
}

_CASCADE = {
    "shafts": (LookupService.shafts_by_mine, "mine_id"),
    "sections": (LookupService.sections_by_shaft, "shaft_id"),
    "gangs": (LookupService.gangs_by_section, "section_id"),
}


@api_bp.route("/lookups/<name>")
def lookup(name: str):
    if name in _ACTIVE_LISTS:
        result = run_action(_ACTIVE_LISTS[name], default=[])
    elif name in _CASCADE:
        fn, param = _CASCADE[name]
        active_only = not to_bool(request.args.get("all"))
        result = run_action(fn, request.args.get(param, "0"), active_only, default=[])
    else:
        return jsonify({"data": None, "error": f"unknown lookup: {name}"}), 404
    return jsonify(result.to_dict())
