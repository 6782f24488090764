"""
reports.formatting - Display formatting shared by grids and exports.

    format_total(1234567.5)      -> "1 234 567.50"
    format_job_count(12345)      -> "12 345"
    format_date_dd_mmm_yyyy("2024-03-05") -> "05 Mar 2024"
"""

from __future__ import annotations

import json
import math
import re
from datetime import date, datetime

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

EMPTY_CELL = "—"


def _as_float(value) -> float | None:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    try:
        n = float(str(value).strip())
    except ValueError:
        return None
    return None if math.isnan(n) else n


def _group_thousands(digits: str) -> str:
    # "1234567" -> "1 234 567"
    out = []
    while len(digits) > 3:
        out.insert(0, digits[-3:])
        digits = digits[:-3]
    out.insert(0, digits)
    return " ".join(out)


def format_total(value) -> str:
    """Two decimals, space as thousands separator; blank counts as zero."""
    if value is None or value == "":
        return "0.00"
    n = _as_float(value)
    if n is None or not math.isfinite(n):
        return str(value)
    fixed = f"{n:.2f}"
    sign = "-" if fixed.startswith("-") else ""
    int_part, dec_part = fixed.lstrip("-").split(".")
    return f"{sign}{_group_thousands(int_part)}.{dec_part}"


def format_job_count(value) -> str:
    """Whole number, space as thousands separator."""
    if value is None or value == "":
        return "0"
    n = _as_float(value)
    if n is None or not math.isfinite(n):
        return str(value)
    digits = _group_thousands(str(int(math.floor(abs(n)))))
    return f"-{digits}" if n < 0 else digits


def to_date(value) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None:
        return None
    s = str(value).strip()
    if not _ISO_DATE_RE.match(s):
        return None
    try:
        return date.fromisoformat(s[:10])
    except ValueError:
        return None


def format_date_dd_mmm_yyyy(value) -> str:
    """``05 Mar 2024``; blank for no value, the raw text when unparsable."""
    if value is None or value == "":
        return ""
    d = to_date(value)
    if d is None:
        return str(value)
    return f"{d.day:02d} {_MONTHS[d.month - 1]} {d.year}"


def _format_datetime_short(value) -> str:
    if isinstance(value, datetime):
        return value.strftime("%d/%m/%Y %H:%M")
    if isinstance(value, date):
        return value.strftime("%d/%m/%Y 00:00")
    s = str(value)
    try:
        parsed = datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        d = to_date(s)
        return d.strftime("%d/%m/%Y 00:00") if d else s
    return parsed.strftime("%d/%m/%Y %H:%M")


def format_cell(value) -> str:
    """Grid cell text: em dash for NULL, Yes/No, short date-time, JSON for objects."""
    if value is None:
        return EMPTY_CELL
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (date, datetime)) or (
            isinstance(value, str) and _ISO_DATE_RE.match(value)):
        return _format_datetime_short(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str)
    return str(value)


def format_export_cell(value) -> str:
    """PDF / plain export text: blank for NULL, Yes/No, JSON for objects."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str)
    return str(value)


def column_header(key: str, overrides: dict[str, str] | None = None) -> str:
    """Header text for a data key: explicit override, else Title Case."""
    normalized = key.lower().replace("_", "")
    if overrides and normalized in overrides:
        return overrides[normalized]
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), key.replace("_", " "))
