"""
services.permissions_service - Which application functions each user may use.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from db import rpc
from db.models import Function, User, UserFunction
from services.actions import ValidationError
from services.values import selected_id


def _user_key(user_id) -> str | None:
    if user_id is None:
        return None
    s = str(user_id).strip()
    return s or None


class PermissionsService:

    @staticmethod
    def all_users(session: Session) -> list[dict]:
        rows = session.query(User).order_by(User.email).all()
        return [{"id": u.id, "email": u.email} for u in rows]

    @staticmethod
    def all_functions(session: Session) -> list[dict]:
        rows = session.query(Function).order_by(Function.descr).all()
        return [{"id": f.id, "descr": f.descr} for f in rows]

    @staticmethod
    def functions_for_user(session: Session, user_id) -> list:
        """Granted function ids (get_permissions_by_user)."""
        uid = _user_key(user_id)
        if uid is None:
            return []
        rows = rpc.call(session, "get_permissions_by_user", {"p_user_id": uid})
        ids = []
        for row in rows:
            fid = row.get("id") if row.get("id") is not None else row.get("function_id")
            if fid is not None:
                ids.append(fid)
        return ids

    @staticmethod
    def set_user_function(session: Session, user_id, function_id, add: bool) -> None:
        uid = _user_key(user_id)
        fid = selected_id(function_id)
        if uid is None or fid is None:
            raise ValidationError("Invalid user or function.")
        if add:
            session.add(UserFunction(user_id=uid, function_id=fid))
            session.flush()
        else:
            (session.query(UserFunction)
             .filter(UserFunction.user_id == uid, UserFunction.function_id == fid)
             .delete(synchronize_session=False))

    @staticmethod
    def save_user_permissions(session: Session, user_id, function_ids) -> list[int]:
        """Replace every grant of *user_id* with *function_ids*."""
        uid = _user_key(user_id)
        if uid is None:
            raise ValidationError("Please select a user.")
        (session.query(UserFunction)
         .filter(UserFunction.user_id == uid)
         .delete(synchronize_session=False))
        ids = [selected_id(f) for f in (function_ids or [])]
        ids = [f for f in ids if f is not None]
        for fid in ids:
            session.add(UserFunction(user_id=uid, function_id=fid))
        session.flush()
        return ids
