"""
services.equipment_service - Equipment categories, types and items.

All session management is the caller's responsibility (see
services.actions.run_action).  Methods raise ValidationError with the
message the user should see; anything else propagates.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

import config
from db import rpc
from db.models import EquipmentCategory, EquipmentItem, EquipmentType
from services.actions import ValidationError
from services.values import (
    clean_text, is_nan, parse_id, selected_id, to_bool,
)


def _location_id(value) -> int | None:
    """0 / blank means "not set" for the location columns."""
    return selected_id(value)


class EquipmentService:

    # ── Categories ─────────────────────────────────────────────────────

    @staticmethod
    def all_categories(session: Session) -> list[dict]:
        rows = session.query(EquipmentCategory).order_by(EquipmentCategory.id).all()
        return [r.to_dict() for r in rows]

    @staticmethod
    def insert_category(session: Session, descr, isactive) -> dict:
        text = clean_text(descr)
        if not text:
            raise ValidationError("Equipment category is required.")
        exists = (session.query(EquipmentCategory.id)
                  .filter(EquipmentCategory.descr == text).first())
        if exists:
            raise ValidationError(
                "An equipment category with this description already exists.")
        row = EquipmentCategory(descr=text, isactive=to_bool(isactive))
        session.add(row)
        session.flush()
        return {"id": row.id}

    @staticmethod
    def update_category(session: Session, category_id, descr=None, isactive=None) -> dict:
        """Update only the supplied fields; a blank description is stored as NULL."""
        updates = {}
        if isinstance(descr, str):
            updates["descr"] = descr.strip() or None
        if isinstance(isactive, bool):
            updates["isactive"] = isactive
        row_id = selected_id(category_id) or 0
        if updates:
            (session.query(EquipmentCategory)
             .filter(EquipmentCategory.id == row_id)
             .update(updates, synchronize_session=False))
        return {"id": row_id}

    # ── Types ──────────────────────────────────────────────────────────

    @staticmethod
    def all_types(session: Session) -> list[dict]:
        """Every type with its category description (get_allequipmenttypes)."""
        return rpc.call(session, "get_allequipmenttypes")

    @staticmethod
    def insert_type(session: Session, category_id, descr, isactive) -> dict:
        row = EquipmentType(
            equipmentcategories_id=selected_id(category_id),
            descr=clean_text(descr),
            isactive=to_bool(isactive),
        )
        session.add(row)
        session.flush()
        return {"id": row.id}

    @staticmethod
    def update_type(session: Session, type_id, category_id=None, descr=None, isactive=None) -> dict:
        updates = {}
        if category_id is not None:
            updates["equipmentcategories_id"] = selected_id(category_id)
        if isinstance(descr, str):
            updates["descr"] = descr.strip() or None
        if isinstance(isactive, bool):
            updates["isactive"] = isactive
        row_id = selected_id(type_id) or 0
        if updates:
            (session.query(EquipmentType)
             .filter(EquipmentType.id == row_id)
             .update(updates, synchronize_session=False))
        return {"id": row_id}

    # ── Items ──────────────────────────────────────────────────────────

    @staticmethod
    def _check_serial_free(session: Session, serialno: str, exclude_id: int | None = None):
        q = session.query(EquipmentItem.id).filter(EquipmentItem.serialno == serialno)
        if exclude_id is not None:
            q = q.filter(EquipmentItem.id != exclude_id)
        if q.first():
            raise ValidationError("Duplicate serial number.")

    @staticmethod
    def insert_item(session: Session, equipmenttypes_id, mine_id, shaft_id,
                    section_id, gang_id, serialno, pistonno, isactive) -> dict:
        if selected_id(equipmenttypes_id) is None:
            raise ValidationError("Please select an equipment type.")
        if selected_id(mine_id) is None:
            raise ValidationError("Please select a Mine.")
        if selected_id(shaft_id) is None:
            raise ValidationError("Please select a Shaft.")
        if selected_id(section_id) is None:
            raise ValidationError("Please select a Section.")
        serial = clean_text(serialno) if isinstance(serialno, str) else None
        if not serial:
            raise ValidationError("Serial Number is required.")
        EquipmentService._check_serial_free(session, serial)

        row = EquipmentItem(
            equipmenttypes_id=selected_id(equipmenttypes_id),
            mine_id=_location_id(mine_id),
            shaft_id=_location_id(shaft_id),
            section_id=_location_id(section_id),
            gang_id=_location_id(gang_id),
            serialno=serial,
            pistonno=clean_text(pistonno) if isinstance(pistonno, str) else None,
            isactive=to_bool(isactive),
        )
        session.add(row)
        session.flush()
        return {"id": row.id}

    @staticmethod
    def update_item(session: Session, item_id, equipmenttypes_id=None, mine_id=None,
                    shaft_id=None, section_id=None, gang_id=None,
                    serialno=None, pistonno=None, isactive=None) -> dict:
        """
        Update the supplied fields of one item.  ``None`` means "leave as
        is"; a location id of 0 clears the column.  Type, mine, shaft and
        section may not be cleared.
        """
        row_id = selected_id(item_id) or 0
        if equipmenttypes_id is not None and selected_id(equipmenttypes_id) is None:
            raise ValidationError("Please select an equipment type.")
        if mine_id is not None and selected_id(mine_id) is None:
            raise ValidationError("Please select a Mine.")
        if shaft_id is not None and selected_id(shaft_id) is None:
            raise ValidationError("Please select a Shaft.")
        if section_id is not None and selected_id(section_id) is None:
            raise ValidationError("Please select a Section.")
        serial = serialno.strip() if isinstance(serialno, str) else ""
        if isinstance(serialno, str) and not serial:
            raise ValidationError("Serial Number is required.")
        if serial:
            EquipmentService._check_serial_free(session, serial, exclude_id=row_id)

        updates = {}
        if equipmenttypes_id is not None:
            updates["equipmenttypes_id"] = selected_id(equipmenttypes_id)
        for name, value in (("mine_id", mine_id), ("shaft_id", shaft_id),
                            ("section_id", section_id), ("gang_id", gang_id)):
            if value is not None:
                updates[name] = _location_id(value)
        if isinstance(serialno, str):
            updates["serialno"] = serial or None
        if isinstance(pistonno, str):
            updates["pistonno"] = pistonno.strip() or None
        if isinstance(isactive, bool):
            updates["isactive"] = isactive
        if updates:
            (session.query(EquipmentItem)
             .filter(EquipmentItem.id == row_id)
             .update(updates, synchronize_session=False))
        return {"id": row_id}

    @staticmethod
    def get_item(session: Session, item_id) -> dict | None:
        n = parse_id(item_id)
        if is_nan(n):
            return None
        row = session.get(EquipmentItem, int(n))
        return row.to_dict() if row else None

    @staticmethod
    def search_items_by_serial(session: Session, search_text, type_id=None) -> list[dict]:
        """
        Serial-number search for the item pickers.

        Without a type: substring match over all items.  With a type:
        prefix match limited to active items of that type.  Fewer than
        two characters returns nothing.
        """
        term = search_text.strip() if isinstance(search_text, str) else ""
        if len(term) < config.SERIAL_SEARCH_MIN_CHARS:
            return []
        q = (session.query(EquipmentItem.id, EquipmentItem.serialno,
                           EquipmentType.descr)
             .outerjoin(EquipmentType,
                        EquipmentType.id == EquipmentItem.equipmenttypes_id))
        if type_id is None:
            q = q.filter(EquipmentItem.serialno.ilike(f"%{term}%"))
        else:
            tid = selected_id(type_id)
            if tid is None:
                return []
            q = q.filter(EquipmentItem.serialno.ilike(f"{term}%"),
                         EquipmentItem.equipmenttypes_id == tid,
                         EquipmentItem.isactive.is_(True))
        rows = q.order_by(EquipmentItem.serialno).all()
        return [
            {"id": r.id, "serialno": r.serialno,
             "equipmenttypes": {"descr": r.descr}}
            for r in rows
        ]
