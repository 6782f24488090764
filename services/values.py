"""
services.values - Coercion of raw form / query-string values.

Ids and numbers arrive as strings ("", "0", "12", "abc").  The helpers
here give them one consistent reading:

* ``parse_number``  - float, ``nan`` when unparsable, 0 for blank/None
* ``parse_id``      - parse_number, nan outside the database integer range
* ``selected_id``   - positive int, or None for "nothing selected"
* ``optional_number`` - float, or None for blank / zero / unparsable
* ``clean_text``    - stripped string, or None when blank
* ``to_bool``       - checkbox / JSON style truthiness
"""

from __future__ import annotations

import math
from datetime import date, datetime

_TRUE_STRINGS = {"1", "true", "on", "yes", "y", "t"}
# BIGINT bounds
DB_INT_MAX = 2**63 - 1


def parse_number(value) -> float:
    if value is None or isinstance(value, bool):
        return float(bool(value))
    if isinstance(value, (int, float)):
        try:
            n = float(value)
        except OverflowError:
            return math.nan
        return n if math.isfinite(n) else math.nan
    s = str(value).strip()
    if not s:
        return 0.0
    try:
        n = float(s)
    except ValueError:
        return math.nan
    return n if math.isfinite(n) else math.nan


def is_nan(value) -> bool:
    return isinstance(value, float) and math.isnan(value)


def parse_id(value) -> float:
    n = parse_number(value)
    if is_nan(n) or abs(n) > DB_INT_MAX:
        return math.nan
    return n


def selected_id(value) -> int | None:
    n = parse_id(value)
    if is_nan(n) or n <= 0:
        return None
    return int(n)


def id_list(values) -> list[int]:
    """Positive ids from a list / comma-separated string, order kept."""
    if values is None:
        return []
    if isinstance(values, str):
        values = values.split(",")
    out: list[int] = []
    for v in values:
        i = selected_id(v)
        if i is not None and i not in out:
            out.append(i)
    return out


def optional_number(value) -> float | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    n = parse_number(value)
    if is_nan(n) or n == 0:
        return None
    return n


def clean_text(value) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def to_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    return str(value).strip().lower() in _TRUE_STRINGS


def parse_date(value) -> date | None:
    """ISO date (``yyyy-mm-dd``, optionally with a time part) or None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = str(value).strip()
    try:
        return datetime.fromisoformat(s[:10]).date()
    except ValueError:
        return None
