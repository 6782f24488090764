"""
reports.grids - Column layout and grouping for each report grid.

A ``Grid`` is what the report pages render and what the Excel / PDF
exports write: ordered columns plus data rows and subtotal rows.  The
``*_grid`` builders below take the raw RPC rows of one report.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from reports.formatting import (
    EMPTY_CELL, column_header, format_cell, format_date_dd_mmm_yyyy,
    format_job_count, format_total,
)
from reports.grouping import (
    GridRow, Level, Subtotal, find_key, group_rows, ordered_keys,
)

# kinds decide how a cell value is rendered
TEXT, TOTAL, COUNT, DATE = "text", "total", "count", "date"

SERVICES_DONE_HEADERS = {
    "serialno": "Serial No",
    "jobno": "Job No",
    "stockcode": "Stock Code",
    "unitcost": "Unit Cost",
    "isdamaged": "Abuse",
    "cost": "Total",
}


@dataclass
class Column:
    key: str
    header: str
    kind: str = TEXT
    level: str | None = None          # grouping level this column carries
    aliases: tuple[str, ...] = ()

    def value(self, row: dict):
        if self.key in row:
            return row[self.key]
        for alias in self.aliases:
            if alias in row:
                return row[alias]
        return None


@dataclass
class Grid:
    columns: list[Column]
    items: list[GridRow | Subtotal] = field(default_factory=list)
    empty_text: str = EMPTY_CELL

    @property
    def headers(self) -> list[str]:
        return [c.header for c in self.columns]

    @property
    def row_count(self) -> int:
        return sum(1 for i in self.items if not i.is_subtotal)

    def _render(self, col: Column, value) -> str:
        if col.kind == TOTAL:
            return format_total(value)
        if col.kind == COUNT:
            return format_job_count(value)
        if col.kind == DATE:
            return format_date_dd_mmm_yyyy(value)
        if value is None:
            return self.empty_text
        return format_cell(value)

    def cells(self, item: GridRow | Subtotal) -> list[str]:
        """Display strings for one item, aligned with ``columns``."""
        if item.is_subtotal:
            out = []
            for i, col in enumerate(self.columns):
                if i == 0:
                    out.append(item.caption)
                elif col.kind == TOTAL and item.total is not None:
                    out.append(format_total(item.total))
                elif col.key in item.sums:
                    out.append(format_job_count(item.sums[col.key]))
                else:
                    out.append("")
            return out
        out = []
        for col in self.columns:
            if col.level and not item.shows(col.level):
                out.append("")
            else:
                out.append(self._render(col, col.value(item.row)))
        return out

    def table(self) -> list[list[str]]:
        """Header row followed by every item's cells (export input)."""
        return [self.headers] + [self.cells(i) for i in self.items]


def _levels(candidates: list[tuple[str, str | None, str]]) -> list[Level]:
    """Levels up to (not including) the first one whose key is missing."""
    levels = []
    for name, key, label in candidates:
        if not key:
            break
        levels.append(Level(name=name, key=key, label=label))
    return levels


def _dynamic_columns(keys: list[str], headers: dict[str, str], levels: list[Level],
                     total_key: str | None, count_keys: tuple[str | None, ...] = ()) -> list[Column]:
    level_by_key = {lv.key: lv.name for lv in levels}
    cols = []
    for k in keys:
        kind = TEXT
        if k == total_key:
            kind = TOTAL
        elif k in count_keys:
            kind = COUNT
        cols.append(Column(key=k, header=column_header(k, headers), kind=kind,
                           level=level_by_key.get(k)))
    return cols


# ── Services done / full service history ───────────────────────────────

def services_done_grid(rows: list[dict]) -> Grid:
    """Mine -> Shaft -> Section -> Type -> Serial No -> Job No, summing Total."""
    keys = ordered_keys(rows)
    total_key = find_key(keys, ("cost", "total"), r"total|cost")
    levels = _levels([
        ("mine", find_key(keys, ("mine",), r"mine"), "Mine total"),
        ("shaft", find_key(keys, ("shaft",), r"shaft"), "Shaft total"),
        ("section", find_key(keys, ("section",), r"section"), "Section total"),
        ("type", find_key(keys, ("type", "equipmenttype"), r"^type$"), "Subtotal"),
        ("serial", find_key(keys, ("serialno", "serialnumber"), r"serial"), "Serial No total"),
        ("jobno", find_key(keys, ("jobno", "jobnumber"), r"job"), "Job No total"),
    ])
    cols = _dynamic_columns(keys, SERVICES_DONE_HEADERS, levels, total_key)
    return Grid(columns=cols, items=group_rows(rows, levels, total_key))


# ── Jobs per technician ────────────────────────────────────────────────

def jobs_per_technician_grid(rows: list[dict]) -> Grid:
    keys = ordered_keys(rows)
    tech_key = find_key(keys, ("technician",), r"technician")
    total_key = find_key(keys, ("cost", "total", "count"), r"total|cost|count")
    jobcount_key = find_key(keys, ("jobcount",), r"jobcount")
    levels = _levels([("technician", tech_key, "Technician total")])
    if jobcount_key == total_key:
        jobcount_key = None
    cols = _dynamic_columns(keys, {"jobcount": "Job Count"}, levels, total_key,
                            (jobcount_key,))
    return Grid(columns=cols,
                items=group_rows(rows, levels, total_key, sum_keys=[jobcount_key]))


# ── Job count per equipment item ───────────────────────────────────────

JOBCOUNT_COLUMNS = [
    Column("type", "Type", level="type"),
    Column("serialno", "Serial No"),
    Column("pistonno", "Piston No"),
    Column("mine", "Mine"),
    Column("shaft", "Shaft"),
    Column("section", "Section"),
    Column("gang", "Gang"),
    Column("jobcount", "Job Count", kind=COUNT),
]


def job_count_grid(rows: list[dict]) -> Grid:
    levels = [Level("type", "type", "Type total")]
    return Grid(columns=list(JOBCOUNT_COLUMNS),
                items=group_rows(rows, levels, sum_keys=["jobcount"]))


# ── Service list ───────────────────────────────────────────────────────

SERVICE_LIST_HEADERS = [
    "Equipment category ID",
    "Equipment type",
    "Serial Number",
    "Job Number",
    "Mine",
    "Shaft",
    "Section",
    "Technician",
    "Job Date",
]
SERVICE_LIST_KEY_MAP = {
    "equipmentcategoryid": "Equipment category ID",
    "equipmentcategoriesid": "Equipment category ID",
    "equipmenttype": "Equipment type",
    "serialno": "Serial Number",
    "serialnumber": "Serial Number",
    "jobnumber": "Job Number",
    "jobno": "Job Number",
    "mine": "Mine",
    "shaft": "Shaft",
    "section": "Section",
    "technician": "Technician",
    "jobdate": "Job Date",
}
CATEGORY_ID_KEYS = ("equipmentcategoriesid", "equipmentcategoryid")


def service_list_columns(first_row: dict | None) -> list[Column]:
    """Known service-list keys of *first_row*, in the fixed header order."""
    if not first_row:
        return []
    header_to_key: dict[str, str] = {}
    for k in first_row:
        header = SERVICE_LIST_KEY_MAP.get(k.lower().replace("_", ""))
        if header and header not in header_to_key:
            header_to_key[header] = k
    cols = []
    for header in SERVICE_LIST_HEADERS:
        key = header_to_key.get(header)
        if key:
            cols.append(Column(key, header, kind=DATE if header == "Job Date" else TEXT))
    return cols


def service_list_category_key(keys: list[str]) -> str | None:
    key = find_key(keys, CATEGORY_ID_KEYS)
    if key:
        return key
    for k in keys:
        low = k.lower()
        if "category" in low and "id" in low:
            return k
    return None


def service_list_grid(rows: list[dict]) -> Grid:
    """Rows grouped by equipment category id with a row count per group."""
    keys = ordered_keys(rows)
    cols = [Column(k, column_header(k)) for k in keys]
    cat_key = service_list_category_key(keys)
    levels = _levels([("category", cat_key, "Category total")])
    return Grid(columns=cols, items=group_rows(rows, levels))


# ── Repair minutes per type ────────────────────────────────────────────

def mins_per_type_grid(rows: list[dict]) -> Grid:
    keys = ordered_keys(rows)
    type_key = find_key(keys, ("type", "equipmenttype"), r"type")
    mins_key = find_key(keys, ("repairmins", "repairminsum"))
    if mins_key is None:
        mins_key = next((k for k in keys
                         if "repair" in k.lower() and "min" in k.lower()), None)
    levels = _levels([("type", type_key, "Type total")])
    cols = [Column(k, column_header(k), kind=COUNT if k == mins_key else TEXT,
                   level="type" if k == type_key else None) for k in keys]
    return Grid(columns=cols, items=group_rows(rows, levels, sum_keys=[mins_key]))


# ── Fixed-column reports ───────────────────────────────────────────────

NO_RECENT_JOBS_COLUMNS = [
    Column("type", "Type"),
    Column("serialno", "Serial No", aliases=("serial_no",)),
    Column("datein", "Date In", kind=DATE, aliases=("date_in",)),
    Column("daysago", "Days Ago", aliases=("days_ago",)),
]

INDIV_HISTORY_COLUMNS = [
    Column("technician", "Technician"),
    Column("jobno", "Job No"),
    Column("stockcode", "Stock Code"),
    Column("part", "Part"),
    Column("isdamaged", "Damaged", aliases=("is_damaged",)),
    Column("unitcost", "Unit Cost", aliases=("unit_cost",)),
    Column("qty", "Qty"),
    Column("total", "Total"),
]

EQUIPMENT_LIST_COLUMNS = [
    Column("equipmentcategory", "Equipment Category", aliases=("equipment_category",)),
    Column("equipmenttype", "Equipment Type", aliases=("equipment_type",)),
    Column("serialno", "Serial No", aliases=("serial_no",)),
    Column("pistonno", "Piston No", aliases=("piston_no",)),
    Column("mine", "Mine"),
    Column("shaft", "Shaft"),
    Column("section", "Section"),
    Column("gang", "Gang"),
    Column("isactive", "Active", aliases=("is_active",)),
]

SERVICE_HISTORY_COLUMNS = [
    Column("cat", "Category"),
    Column("typ", "Type"),
    Column("isactive", "Active"),
    Column("created_at", "Created"),
]


def flat_grid(rows: list[dict], columns: list[Column], empty_text: str = "") -> Grid:
    """Ungrouped grid over fixed columns; missing values render as *empty_text*."""
    return Grid(columns=list(columns), items=[GridRow(row=r) for r in rows],
                empty_text=empty_text)
