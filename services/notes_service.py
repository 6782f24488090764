"""
services.notes_service - Notes against equipment items and their comments.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from db import rpc
from db.models import Note, NoteComment
from services.actions import ValidationError
from services.values import clean_text, selected_id, to_bool

NOTE_HAS_COMMENTS = "Can't delete the Note because there are Comments against it."


def is_comment_fk_violation(message: str) -> bool:
    """True for the FK error Postgres raises when comments still reference a note."""
    return "notecomments" in message and (
        "foreign key" in message or "fk_notes" in message
    )


def _note_values(equipmentitem_id, technicians_id, description, isfinalised) -> dict:
    item_id = selected_id(equipmentitem_id)
    if item_id is None:
        raise ValidationError(
            "Please select an equipment item (search and choose from the list).")
    tech_id = selected_id(technicians_id)
    if tech_id is None:
        raise ValidationError("Please select a technician.")
    return {
        "equipmentitems_id": item_id,
        "technicians_id": tech_id,
        "description": clean_text(description) if isinstance(description, str) else None,
        "isfinalised": to_bool(isfinalised),
    }


class NotesService:

    # ── Listings (RPC) ─────────────────────────────────────────────────

    @staticmethod
    def all_notes(session: Session) -> list[dict]:
        return rpc.call(session, "get_allnotes")

    @staticmethod
    def notes_like_serial(session: Session, serialno) -> list[dict]:
        term = serialno.strip() if isinstance(serialno, str) else ""
        return rpc.call(session, "get_noteslikeserialno", {"p_serialno": term})

    @staticmethod
    def comments_for_note(session: Session, note_id) -> list[dict]:
        nid = selected_id(note_id)
        if nid is None:
            return []
        return rpc.call(session, "get_commentsbynoteid", {"p_note_id": nid})

    # ── Notes ──────────────────────────────────────────────────────────

    @staticmethod
    def insert_note(session: Session, equipmentitem_id, technicians_id,
                    description, isfinalised) -> dict:
        note = Note(**_note_values(equipmentitem_id, technicians_id,
                                   description, isfinalised))
        session.add(note)
        session.flush()
        return {"id": note.id}

    @staticmethod
    def update_note(session: Session, note_id, equipmentitem_id, technicians_id,
                    description, isfinalised) -> dict:
        nid = selected_id(note_id)
        if nid is None:
            raise ValidationError("Invalid note.")
        values = _note_values(equipmentitem_id, technicians_id, description, isfinalised)
        (session.query(Note)
         .filter(Note.id == nid)
         .update(values, synchronize_session=False))
        return {"id": nid}

    @staticmethod
    def delete_note(session: Session, note_id) -> None:
        """Delete a note.  Refused while comments still reference it."""
        nid = selected_id(note_id)
        if nid is None:
            raise ValidationError("Invalid note.")
        if session.query(NoteComment.id).filter(NoteComment.noteid == nid).first():
            raise ValidationError(NOTE_HAS_COMMENTS)
        try:
            session.query(Note).filter(Note.id == nid).delete(synchronize_session=False)
            session.flush()
        except IntegrityError as exc:
            if is_comment_fk_violation(str(exc.orig)):
                raise ValidationError(NOTE_HAS_COMMENTS) from exc
            raise

    # ── Comments ───────────────────────────────────────────────────────

    @staticmethod
    def insert_comment(session: Session, technicians_id, comment, note_id) -> dict:
        tech_id = selected_id(technicians_id)
        if tech_id is None:
            raise ValidationError("Please select a commenting technician.")
        nid = selected_id(note_id)
        if nid is None:
            raise ValidationError(
                "Please select a note (select a row in the grid or from Search Note).")
        row = NoteComment(
            technicians_id=tech_id,
            comment=clean_text(comment) if isinstance(comment, str) else None,
            noteid=nid,
        )
        session.add(row)
        session.flush()
        return {"id": row.id}

    @staticmethod
    def delete_comment(session: Session, comment_id) -> None:
        cid = selected_id(comment_id)
        if cid is None:
            raise ValidationError("No comment selected.")
        (session.query(NoteComment)
         .filter(NoteComment.id == cid)
         .delete(synchronize_session=False))
