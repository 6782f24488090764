"""
services.lookup_service - Dropdown sources and the location cascade.

The cascading filter used by the admin pages and every report narrows
mine -> shaft -> section -> gang.  A parent id of 0 means "all", an
unparsable id yields an empty list.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from db.models import (
    EquipmentCategory, EquipmentType, Gang, Mine, Section, Shaft, Technician,
)
from services.values import is_nan, parse_id


def _pairs(rows, *extra: str) -> list[dict]:
    out = []
    for r in rows:
        d = {"id": r.id, "descr": r.descr}
        for name in extra:
            d[name] = getattr(r, name)
        out.append(d)
    return out


def _children(session: Session, model, parent_col, parent_id, active_only: bool) -> list[dict]:
    n = parse_id(parent_id)
    if is_nan(n):
        return []
    q = session.query(model)
    if n != 0:
        q = q.filter(parent_col == int(n))
    if active_only:
        q = q.filter(model.isactive.is_(True))
    return _pairs(q.order_by(model.descr).all())


class LookupService:

    # ── Active lists ───────────────────────────────────────────────────

    @staticmethod
    def active_categories(session: Session) -> list[dict]:
        rows = (session.query(EquipmentCategory)
                .filter(EquipmentCategory.isactive.is_(True))
                .order_by(EquipmentCategory.descr).all())
        return _pairs(rows)

    @staticmethod
    def active_types(session: Session) -> list[dict]:
        rows = (session.query(EquipmentType)
                .filter(EquipmentType.isactive.is_(True))
                .order_by(EquipmentType.descr).all())
        return _pairs(rows, "equipmentcategories_id")

    @staticmethod
    def active_mines(session: Session) -> list[dict]:
        rows = (session.query(Mine)
                .filter(Mine.isactive.is_(True))
                .order_by(Mine.descr).all())
        return _pairs(rows)

    @staticmethod
    def active_technicians(session: Session) -> list[dict]:
        rows = (session.query(Technician)
                .filter(Technician.isactive.is_(True))
                .order_by(Technician.descr).all())
        return _pairs(rows)

    # ── Cascade ────────────────────────────────────────────────────────

    @staticmethod
    def shafts_by_mine(session: Session, mine_id, active_only: bool = True) -> list[dict]:
        return _children(session, Shaft, Shaft.mine_id, mine_id, active_only)

    @staticmethod
    def sections_by_shaft(session: Session, shaft_id, active_only: bool = True) -> list[dict]:
        return _children(session, Section, Section.shaft_id, shaft_id, active_only)

    @staticmethod
    def gangs_by_section(session: Session, section_id, active_only: bool = True) -> list[dict]:
        return _children(session, Gang, Gang.section_id, section_id, active_only)

    # ── Label lookups for report headers ───────────────────────────────

    @staticmethod
    def describe(session: Session, model, row_id) -> str:
        """Description of one row, "" when not selected or missing."""
        n = parse_id(row_id)
        if is_nan(n) or n <= 0:
            return ""
        row = session.get(model, int(n))
        return (row.descr or "") if row else ""

    @staticmethod
    def type_names(session: Session, type_ids: list[int]) -> list[str]:
        if not type_ids:
            return []
        rows = (session.query(EquipmentType)
                .filter(EquipmentType.id.in_(type_ids))
                .order_by(EquipmentType.descr).all())
        return [r.descr or "" for r in rows]
