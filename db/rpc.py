"""
db.rpc - Calls into the Postgres stored functions.

The reporting and job-entry functions (get_allshafts, jobswithparts,
insert_job, ...) live in the database.  They are invoked with named
parameter notation so argument order never matters:

    SELECT * FROM get_servicedlist(p_mine_id => :p_mine_id, ...)

Every row comes back as a plain dict keyed by the function's output
column names.
"""

from __future__ import annotations

import re

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

_NAME_RE = re.compile(r"^[a-z_][a-z0-9_]*$")


class RpcError(Exception):
    """A stored function call failed inside the database."""

    def __init__(self, name: str, message: str):
        super().__init__(message)
        self.name = name


def build_sql(name: str, params: dict, limit: int | None = None) -> str:
    """Render the SELECT for *name*.  Only identifier-safe names pass."""
    if not _NAME_RE.match(name):
        raise ValueError(f"invalid function name: {name!r}")
    for key in params:
        if not _NAME_RE.match(key):
            raise ValueError(f"invalid parameter name: {key!r}")
    args = ", ".join(f"{key} => :{key}" for key in params)
    sql = f"SELECT * FROM {name}({args})"
    if limit is not None:
        sql += f" LIMIT {int(limit)}"
    return sql


def call(session: Session, name: str, params: dict | None = None,
         limit: int | None = None) -> list[dict]:
    """Run a set-returning function and return its rows."""
    params = params or {}
    sql = build_sql(name, params, limit)
    try:
        result = session.execute(text(sql), params)
    except DBAPIError as exc:
        raise RpcError(name, str(exc.orig or exc)) from exc
    return [dict(row) for row in result.mappings()]


def call_scalar(session: Session, name: str, params: dict | None = None):
    """Run a function returning a single value (e.g. a new row id)."""
    rows = call(session, name, params)
    if not rows:
        return None
    row = rows[0]
    if name in row:
        return row[name]
    return next(iter(row.values()), None)
