"""
ui.admin_pages - The list + add + inline-edit page shared by the admin
master tables (categories, types, mines, shafts, sections, gangs,
technicians).

A page is described by its columns and its form fields; rows are plain
dicts from the service layer.  Every row renders as an inline form
posting to ``<endpoint>_edit``; the add form posts to ``<endpoint>``.
"""

from __future__ import annotations

from dataclasses import dataclass

from flask import render_template, request

from reports.formatting import column_header

SORT_ORDERS = ("asc", "desc")


@dataclass
class Field:
    name: str
    label: str
    kind: str = "text"              # text | checkbox | select
    options: str | None = None      # dropdown list name for selects
    required: bool = False


def sort_rows(rows: list[dict], allowed: tuple[str, ...], default: str = "id") -> tuple[list[dict], str, str]:
    """Sort by ``?sort=&order=``; NULLs last in either direction."""
    key = request.args.get("sort", default)
    if key not in allowed:
        key = default
    order = request.args.get("order", "asc")
    if order not in SORT_ORDERS:
        order = "asc"

    def sort_key(row):
        val = row[key]
        return val.casefold() if isinstance(val, str) else val

    present = [r for r in rows if r.get(key) is not None]
    missing = [r for r in rows if r.get(key) is None]
    present.sort(key=sort_key, reverse=(order == "desc"))
    return present + missing, key, order


def render_admin(title: str, endpoint: str, rows: list[dict],
                 columns: list[tuple[str, str]] | None, fields: list[Field],
                 options: dict | None = None, sortable: tuple[str, ...] = (),
                 sort: str | None = None, order: str = "asc", **extra):
    if columns is None:
        # RPC listings: whatever columns the database function returns
        columns = [(k, column_header(k)) for k in rows[0]] if rows else []
    return render_template(
        "admin_list.html",
        title=title, endpoint=endpoint, rows=rows, columns=columns,
        fields=fields, options=options or {}, sortable=sortable,
        sort=sort, order=order, **extra,
    )
