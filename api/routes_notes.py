"""
api.routes_notes - Note listings and comments for the notes page.
"""

from flask import jsonify, request

from api import api_bp
from services.actions import run_action
from services.notes_service import NotesService


@api_bp.route("/notes")
def list_notes():
    """GET /api/v1/notes[?serial=AB1] - all notes, or notes on matching serials."""
    serial = request.args.get("serial", "").strip()
    if serial:
        result = run_action(NotesService.notes_like_serial, serial, default=[])
    else:
        result = run_action(NotesService.all_notes, default=[])
    return jsonify(result.to_dict())


@api_bp.route("/notes/<note_id>/comments")
def note_comments(note_id: str):
    return jsonify(run_action(NotesService.comments_for_note, note_id, default=[]).to_dict())
