"""
services.parts_service - CRUD operations on Part records and the
part <-> equipment-type link table.

All session management is the caller's responsibility (open before,
close/commit after).  This keeps the service testable and allows
the caller to batch multiple operations in one transaction.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

import config
from db.models import Part, PartPerType
from services.actions import ValidationError
from services.values import (
    clean_text, id_list, is_nan, optional_number, parse_id, to_bool,
)

# Columns returned by the part searches, in grid order
PART_COLUMNS = (
    "id", "stockcode", "part", "matcatno", "lastpurchaseprice", "costa",
    "binno", "stocklevel", "reorder", "isactive",
)
TEXT_FIELDS    = ("stockcode", "part", "matcatno", "binno")
NUMERIC_FIELDS = ("lastpurchaseprice", "costa", "stocklevel", "reorder")


def _part_row(p: Part) -> dict:
    return {col: getattr(p, col) for col in PART_COLUMNS}


def _part_id(value) -> int:
    n = parse_id(value)
    if is_nan(n):
        raise ValidationError("Invalid part id.")
    return int(n)


class PartsService:

    # ── Search ─────────────────────────────────────────────────────────

    @staticmethod
    def search_by_stockcode(session: Session, prefix) -> list[dict]:
        term = prefix.strip() if isinstance(prefix, str) else ""
        if len(term) < config.STOCKCODE_SEARCH_MIN_CHARS:
            return []
        rows = (session.query(Part)
                .filter(Part.stockcode.ilike(f"{term}%"))
                .order_by(Part.stockcode).all())
        return [_part_row(p) for p in rows]

    @staticmethod
    def search_by_description(session: Session, prefix) -> list[dict]:
        term = prefix.strip() if isinstance(prefix, str) else ""
        if len(term) < config.PART_DESCR_SEARCH_MIN_CHARS:
            return []
        rows = (session.query(Part)
                .filter(Part.part.ilike(f"{term}%"))
                .order_by(Part.part).all())
        return [_part_row(p) for p in rows]

    @staticmethod
    def get(session: Session, part_id) -> dict | None:
        n = parse_id(part_id)
        if is_nan(n):
            return None
        p = session.get(Part, int(n))
        return _part_row(p) if p else None

    # ── Uniqueness ─────────────────────────────────────────────────────

    @staticmethod
    def _check_unique(session: Session, column, value: str, message: str,
                      exclude_id: int | None = None) -> None:
        q = session.query(Part.id).filter(column == value)
        if exclude_id is not None:
            q = q.filter(Part.id != exclude_id)
        if q.first():
            raise ValidationError(message)

    # ── Create ─────────────────────────────────────────────────────────

    @staticmethod
    def create(session: Session, data: dict) -> dict:
        """
        Create a Part from form values.  Stock code and description are
        required; blank, zero or unparsable numbers are stored as NULL.
        Returns ``{"id": new_id}``.
        """
        stockcode = clean_text(data.get("stockcode"))
        description = clean_text(data.get("part"))
        if not stockcode:
            raise ValidationError("Stock Code is required.")
        if not description:
            raise ValidationError("Description is required.")
        PartsService._check_unique(session, Part.stockcode, stockcode,
                                   "A part with this Stock Code already exists.")
        matcatno = clean_text(data.get("matcatno"))
        if matcatno:
            PartsService._check_unique(session, Part.matcatno, matcatno,
                                       "A part with this Mat Cat Number already exists.")

        part = Part(
            stockcode=stockcode,
            part=description,
            matcatno=matcatno,
            binno=clean_text(data.get("binno")),
            isactive=to_bool(data.get("isactive")),
        )
        for name in NUMERIC_FIELDS:
            setattr(part, name, optional_number(data.get(name)))
        session.add(part)
        session.flush()
        return {"id": part.id}

    # ── Update ─────────────────────────────────────────────────────────

    @staticmethod
    def update(session: Session, part_id, data: dict) -> dict:
        """
        Apply only the keys present in *data*.  Same validation and
        uniqueness rules as create, excluding the part itself.
        """
        pid = _part_id(part_id)

        if "stockcode" in data and not clean_text(data["stockcode"]):
            raise ValidationError("Stock Code is required.")
        if "part" in data and not clean_text(data["part"]):
            raise ValidationError("Description is required.")
        if "stockcode" in data:
            PartsService._check_unique(session, Part.stockcode, clean_text(data["stockcode"]),
                                       "A part with this Stock Code already exists.",
                                       exclude_id=pid)
        if "matcatno" in data:
            matcatno = clean_text(data["matcatno"])
            if matcatno:
                PartsService._check_unique(session, Part.matcatno, matcatno,
                                           "A part with this Mat Cat Number already exists.",
                                           exclude_id=pid)

        updates = {}
        for name in TEXT_FIELDS:
            if name in data:
                updates[name] = clean_text(data[name])
        for name in NUMERIC_FIELDS:
            if name in data:
                updates[name] = optional_number(data[name])
        if "isactive" in data:
            updates["isactive"] = to_bool(data["isactive"])
        if updates:
            (session.query(Part)
             .filter(Part.id == pid)
             .update(updates, synchronize_session=False))
        return {"id": pid}

    # ── Parts per type ─────────────────────────────────────────────────

    @staticmethod
    def types_for_part(session: Session, part_id) -> list[int]:
        n = parse_id(part_id)
        if is_nan(n):
            return []
        rows = (session.query(PartPerType.typeid)
                .filter(PartPerType.partid == int(n)).all())
        return [r.typeid for r in rows]

    @staticmethod
    def delete_types_for_part(session: Session, part_id) -> None:
        pid = _part_id(part_id)
        (session.query(PartPerType)
         .filter(PartPerType.partid == pid)
         .delete(synchronize_session=False))

    @staticmethod
    def insert_types_for_part(session: Session, part_id, type_ids) -> None:
        """Link *part_id* to each positive id in *type_ids*; no ids is a no-op."""
        pid = _part_id(part_id)
        for tid in id_list(type_ids):
            session.add(PartPerType(partid=pid, typeid=tid))
        session.flush()

    @staticmethod
    def replace_types_for_part(session: Session, part_id, type_ids) -> list[int]:
        PartsService.delete_types_for_part(session, part_id)
        PartsService.insert_types_for_part(session, part_id, type_ids)
        return id_list(type_ids)
