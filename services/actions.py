"""
services.actions - The {data, error} contract shared by every action.

Service methods take a Session as first argument and either return a
value or raise.  ``run_action`` owns the session around one of them:
it commits on success, rolls back on failure and turns the outcome into
an ``ActionResult``.  Validation failures carry their user-facing
message through untouched; database failures are logged and reported
with the driver's message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from db import get_session
from db.rpc import RpcError

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """User-facing input problem; the message is shown as-is."""


@dataclass
class ActionResult:
    """Outcome of one action: exactly one of data / error is meaningful."""

    data: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {"data": self.data, "error": self.error}


def db_message(exc: Exception) -> str:
    """Driver message without SQLAlchemy's statement/parameter dump."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig).strip()
    return str(exc).split("\n[SQL:", 1)[0].strip()


def run_action(fn: Callable, *args, default: Any = None, **kwargs) -> ActionResult:
    """Run ``fn(session, *args, **kwargs)`` in its own transaction."""
    session = get_session()
    try:
        data = fn(session, *args, **kwargs)
        session.commit()
        return ActionResult(data=data)
    except ValidationError as exc:
        session.rollback()
        return ActionResult(data=default, error=str(exc))
    except (SQLAlchemyError, RpcError) as exc:
        session.rollback()
        logger.exception("Action %s failed", getattr(fn, "__qualname__", fn))
        return ActionResult(data=default, error=db_message(exc))
    finally:
        session.close()
