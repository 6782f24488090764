"""
services.technicians_service - Technician master list.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from db.models import Technician
from services.actions import ValidationError
from services.location_service import apply_updates, ensure_unique_descr
from services.values import clean_text, selected_id, to_bool


class TechniciansService:

    @staticmethod
    def all_technicians(session: Session) -> list[dict]:
        rows = session.query(Technician).order_by(Technician.id).all()
        return [r.to_dict() for r in rows]

    @staticmethod
    def insert_technician(session: Session, descr, isactive) -> dict:
        text = clean_text(descr)
        if not text:
            raise ValidationError("Technician is required.")
        ensure_unique_descr(session, Technician, text,
                            "A technician with this name already exists.")
        row = Technician(descr=text, isactive=to_bool(isactive))
        session.add(row)
        session.flush()
        return {"id": row.id}

    @staticmethod
    def update_technician(session: Session, technician_id, descr=None, isactive=None) -> dict:
        updates = {}
        if isinstance(descr, str):
            text = descr.strip()
            if text:
                ensure_unique_descr(session, Technician, text,
                                    "A technician with this name already exists.",
                                    exclude_id=selected_id(technician_id))
            updates["descr"] = text or None
        if isinstance(isactive, bool):
            updates["isactive"] = isactive
        return apply_updates(session, Technician, technician_id, updates)
