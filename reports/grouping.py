"""
reports.grouping - Nested grouping with subtotal rows for report grids.

Report RPCs return flat rows.  The grids show them grouped (for example
mine -> shaft -> section -> type -> serial -> job no), with each group
value printed only on the first row of its group and a subtotal row
closing every group, innermost first.

Column keys differ slightly between database functions (``serialno``
vs ``serial_no`` vs ``serialnumber``) so keys are located by their
normalised name (lower case, underscores removed) with a substring
fallback.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Iterable

NULL_GROUP = "__null"


# ── Key discovery ──────────────────────────────────────────────────────

def normalize_key(key: str) -> str:
    return key.lower().replace("_", "")


def find_key(keys: Iterable[str], exact: tuple[str, ...],
             pattern: str | None = None) -> str | None:
    """
    First key whose normalised form is in *exact*; failing that, the
    first key whose normalised form matches *pattern* (regex search).
    """
    keys = list(keys)
    for k in keys:
        if normalize_key(k) in exact:
            return k
    if pattern:
        rx = re.compile(pattern)
        for k in keys:
            if rx.search(normalize_key(k)):
                return k
    return None


def ordered_keys(rows: list[dict]) -> list[str]:
    return list(rows[0].keys()) if rows else []


# ── Sorting / numbers ──────────────────────────────────────────────────

_CHUNK_RE = re.compile(r"(\d+)")


def natural_sort_key(value: str):
    """Numeric-aware, case-insensitive; the NULL group sorts last."""
    if value == NULL_GROUP:
        return (1, ())
    parts = []
    for chunk in _CHUNK_RE.split(str(value)):
        if not chunk:
            continue
        if chunk.isdigit():
            parts.append((0, int(chunk), ""))
        else:
            parts.append((1, 0, chunk.casefold()))
    return (0, tuple(parts))


def numeric_value(row: dict, key: str | None) -> float:
    """Row value as a number; missing or unparsable counts as 0."""
    if not key or row.get(key) is None:
        return 0.0
    val = row[key]
    if isinstance(val, bool):
        return float(val)
    try:
        n = float(val)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(n) else n


# ── Result items ───────────────────────────────────────────────────────

@dataclass
class Level:
    """One grouping level: a name (``"mine"``), the data key and subtotal label."""

    name: str
    key: str
    label: str


@dataclass
class GridRow:
    row: dict
    show: dict[str, bool] = field(default_factory=dict)
    group_key: str | None = None

    is_subtotal = False

    def shows(self, level_name: str) -> bool:
        return self.show.get(level_name, True)


@dataclass
class Subtotal:
    level: str
    label: str
    values: dict[str, object]
    count: int
    total: float | None = None
    sums: dict[str, float] = field(default_factory=dict)
    group_key: str | None = None

    is_subtotal = True

    @property
    def caption(self) -> str:
        noun = "row" if self.count == 1 else "rows"
        return f"{self.label} ({self.count} {noun})"


def _key_part(name: str, val: str) -> str:
    # "/" separates levels in a group key
    return f"{name}:" + val.replace("%", "%25").replace("/", "%2F")


def _group(rows: list[dict], key: str) -> list[tuple[str, list[dict]]]:
    groups: dict[str, list[dict]] = {}
    for row in rows:
        val = row.get(key)
        k = NULL_GROUP if val is None else str(val)
        groups.setdefault(k, []).append(row)
    return [(k, groups[k]) for k in sorted(groups, key=natural_sort_key)]


def group_rows(rows: list[dict], levels: list[Level], total_key: str | None = None,
               sum_keys: Iterable[str] = ()) -> list[GridRow | Subtotal]:
    """
    Group *rows* by each of *levels* in turn.

    Returns data rows (``GridRow``) interleaved with ``Subtotal`` items.
    Each subtotal carries the row count, the sum of *total_key* and the
    sum of every key in *sum_keys*.  With no levels the rows come back
    ungrouped with every value shown.
    """
    sum_keys = [k for k in sum_keys if k]
    if not levels or not rows:
        return [GridRow(row=r) for r in rows]

    out: list[GridRow | Subtotal] = []
    level_names = [lv.name for lv in levels]

    def walk(subset: list[dict], depth: int, values: dict, first: dict[str, bool],
             group_key: str):
        level = levels[depth]
        for val, members in _group(subset, level.key):
            these = dict(values)
            these[level.name] = None if val == NULL_GROUP else val
            part = _key_part(level.name, val)
            gkey = f"{group_key}/{part}" if group_key else part
            first_here = dict(first)
            first_here[level.name] = True
            if depth + 1 < len(levels):
                walk(members, depth + 1, these, first_here, gkey)
            else:
                for row in members:
                    out.append(GridRow(
                        row=row,
                        show={name: first_here.get(name, False) for name in level_names},
                        group_key=gkey,
                    ))
                    first_here = {name: False for name in level_names}
            # only the first row of the outer group shows the outer values
            for name in first:
                first[name] = False
            out.append(Subtotal(
                level=level.name,
                label=level.label,
                values=these,
                count=len(members),
                total=sum(numeric_value(r, total_key) for r in members) if total_key else None,
                sums={k: sum(numeric_value(r, k) for r in members) for k in sum_keys},
                group_key=gkey,
            ))

    walk(rows, 0, {}, {}, "")
    return out
