"""
ui.routes_notes - Notes against equipment items and their comments.
"""

from __future__ import annotations

from flask import redirect, render_template, request, url_for

from services.actions import run_action
from services.notes_service import NotesService
from ui import ui_bp
from ui.helpers import dropdowns, flash_result, form_flag


def _note_args() -> tuple:
    form = request.form
    return (form.get("equipmentitems_id"), form.get("technicians_id"),
            form.get("description"), form_flag("isfinalised"))


def _back(note_id=None):
    serial = request.values.get("serial", "")
    return redirect(url_for("ui.notes", serial=serial or None, note_id=note_id))


@ui_bp.route("/notes", methods=["GET", "POST"])
def notes():
    if request.method == "POST":
        result = run_action(NotesService.insert_note, *_note_args())
        flash_result(result, "Note added.")
        return _back(result.data["id"] if result.ok else None)

    serial = request.args.get("serial", "").strip()
    note_id = request.args.get("note_id", "")
    if serial:
        listing = run_action(NotesService.notes_like_serial, serial, default=[])
    else:
        listing = run_action(NotesService.all_notes, default=[])
    comments = run_action(NotesService.comments_for_note, note_id, default=[])
    selected = next((n for n in listing.data if str(n.get("id")) == note_id), None)
    return render_template(
        "notes.html", serial=serial, note_id=note_id, notes=listing.data,
        selected=selected, comments=comments.data,
        error=listing.error or comments.error, **dropdowns("technicians"),
    )


@ui_bp.route("/notes/<int:note_id>", methods=["POST"])
def note_edit(note_id: int):
    result = run_action(NotesService.update_note, note_id, *_note_args())
    flash_result(result, "Note saved.")
    return _back(note_id)


@ui_bp.route("/notes/<int:note_id>/delete", methods=["POST"])
def note_delete(note_id: int):
    result = run_action(NotesService.delete_note, note_id)
    if flash_result(result, "Note deleted."):
        return _back()
    return _back(note_id)


# ── Comments ───────────────────────────────────────────────────────────

@ui_bp.route("/notes/<int:note_id>/comments", methods=["POST"])
def comment_add(note_id: int):
    result = run_action(NotesService.insert_comment, request.form.get("technicians_id"),
                        request.form.get("comment"), note_id)
    flash_result(result, "Comment added.")
    return _back(note_id)


@ui_bp.route("/comments/<int:comment_id>/delete", methods=["POST"])
def comment_delete(comment_id: int):
    result = run_action(NotesService.delete_comment, comment_id)
    flash_result(result, "Comment deleted.")
    return _back(request.form.get("note_id") or None)
