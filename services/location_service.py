"""
services.location_service - Mines, shafts, sections and gangs.

Descriptions are unique within their parent (mines globally, shafts
per mine, sections per shaft, gangs per section).  The full listings
for shafts / sections / gangs come from RPC functions that join in the
parent descriptions.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from db import rpc
from db.models import Gang, Mine, Section, Shaft
from services.actions import ValidationError
from services.values import clean_text, selected_id, to_bool


def ensure_unique_descr(session: Session, model, descr: str, message: str,
                        parent_col=None, parent_id: int | None = None,
                        exclude_id: int | None = None) -> None:
    """Raise ValidationError(message) if *descr* is already taken."""
    q = session.query(model.id).filter(model.descr == descr)
    if parent_col is not None and parent_id is not None:
        q = q.filter(parent_col == parent_id)
    if exclude_id is not None:
        q = q.filter(model.id != exclude_id)
    if q.first():
        raise ValidationError(message)


def apply_updates(session: Session, model, row_id, updates: dict) -> dict:
    row_id = selected_id(row_id) or 0
    if updates:
        (session.query(model)
         .filter(model.id == row_id)
         .update(updates, synchronize_session=False))
    return {"id": row_id}


def _common_updates(descr, isactive) -> dict:
    updates = {}
    if isinstance(descr, str):
        updates["descr"] = descr.strip() or None
    if isinstance(isactive, bool):
        updates["isactive"] = isactive
    return updates


class LocationService:

    # ── Mines ──────────────────────────────────────────────────────────

    @staticmethod
    def all_mines(session: Session) -> list[dict]:
        return [r.to_dict() for r in session.query(Mine).order_by(Mine.id).all()]

    @staticmethod
    def insert_mine(session: Session, descr, isactive) -> dict:
        text = clean_text(descr)
        if not text:
            raise ValidationError("Mine is required.")
        ensure_unique_descr(session, Mine, text,
                            "A mine with this description already exists.")
        row = Mine(descr=text, isactive=to_bool(isactive))
        session.add(row)
        session.flush()
        return {"id": row.id}

    @staticmethod
    def update_mine(session: Session, mine_id, descr=None, isactive=None) -> dict:
        return apply_updates(session, Mine, mine_id, _common_updates(descr, isactive))

    # ── Shafts ─────────────────────────────────────────────────────────

    @staticmethod
    def all_shafts(session: Session) -> list[dict]:
        return rpc.call(session, "get_allshafts")

    @staticmethod
    def insert_shaft(session: Session, mine_id, descr, isactive) -> dict:
        mid = selected_id(mine_id)
        if mid is None:
            raise ValidationError("Please select a mine.")
        text = clean_text(descr)
        if not text:
            raise ValidationError("Shaft description is required.")
        ensure_unique_descr(session, Shaft, text,
                            "A shaft with this description already exists for this mine.",
                            Shaft.mine_id, mid)
        row = Shaft(mine_id=mid, descr=text, isactive=to_bool(isactive))
        session.add(row)
        session.flush()
        return {"id": row.id}

    @staticmethod
    def update_shaft(session: Session, shaft_id, mine_id=None, descr=None, isactive=None) -> dict:
        updates = _common_updates(descr, isactive)
        if mine_id is not None:
            updates["mine_id"] = selected_id(mine_id)
        return apply_updates(session, Shaft, shaft_id, updates)

    # ── Sections ───────────────────────────────────────────────────────

    @staticmethod
    def all_sections(session: Session) -> list[dict]:
        return rpc.call(session, "get_allsections")

    @staticmethod
    def insert_section(session: Session, shaft_id, descr, costcode, isactive) -> dict:
        sid = selected_id(shaft_id)
        if sid is None:
            raise ValidationError("Please select a shaft.")
        text = clean_text(descr)
        if not text:
            raise ValidationError("Section is required.")
        ensure_unique_descr(session, Section, text,
                            "A section with this description already exists for this shaft.",
                            Section.shaft_id, sid)
        row = Section(shaft_id=sid, descr=text,
                      costcode=clean_text(costcode) if isinstance(costcode, str) else None,
                      isactive=to_bool(isactive))
        session.add(row)
        session.flush()
        return {"id": row.id}

    @staticmethod
    def update_section(session: Session, section_id, shaft_id=None, descr=None,
                       costcode=None, isactive=None) -> dict:
        updates = _common_updates(descr, isactive)
        if shaft_id is not None:
            updates["shaft_id"] = selected_id(shaft_id)
        if isinstance(costcode, str):
            updates["costcode"] = costcode.strip() or None
        return apply_updates(session, Section, section_id, updates)

    # ── Gangs ──────────────────────────────────────────────────────────

    @staticmethod
    def all_gangs(session: Session) -> list[dict]:
        return rpc.call(session, "get_allgangs")

    @staticmethod
    def insert_gang(session: Session, section_id, descr, isactive) -> dict:
        sid = selected_id(section_id)
        if sid is None:
            raise ValidationError("Please select a section.")
        text = clean_text(descr)
        if not text:
            raise ValidationError("Gang is required.")
        ensure_unique_descr(session, Gang, text,
                            "A gang with this description already exists for this section.",
                            Gang.section_id, sid)
        row = Gang(section_id=sid, descr=text, isactive=to_bool(isactive))
        session.add(row)
        session.flush()
        return {"id": row.id}

    @staticmethod
    def update_gang(session: Session, gang_id, section_id=None, descr=None, isactive=None) -> dict:
        """Renames are checked against the other gangs of the same section."""
        gid = selected_id(gang_id) or 0
        text = clean_text(descr) if isinstance(descr, str) else None
        if text:
            sid = selected_id(section_id) if section_id is not None else None
            ensure_unique_descr(session, Gang, text,
                                "A gang with this description already exists for this section.",
                                Gang.section_id, sid, exclude_id=gid)
        updates = _common_updates(descr, isactive)
        if section_id is not None:
            updates["section_id"] = selected_id(section_id)
        return apply_updates(session, Gang, gid, updates)
