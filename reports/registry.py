"""
reports.registry - One entry per report page.

Ties together where the rows come from (services.report_service), how
they are shaped (reports.grids), which filter controls the page shows
and what the exported files are called.

Filter control names:
    location   mine / shaft / section / gang cascade
    location3  mine / shaft / section only
    types      equipment-type multi-select
    dates      from / to dates
    days       "no job in the last N days"
    item       one equipment type + one item of it
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import config
from reports import grids
from reports.grids import Grid
from reports.grouping import ordered_keys
from services.report_service import ReportService


@dataclass(frozen=True)
class ReportDef:
    slug: str
    title: str
    fetch: Callable
    grid: Callable[[list[dict]], Grid]
    excel_name: str
    filters: tuple[str, ...] = ()
    pdf_name: str | None = None
    export_grid: Callable[[list[dict]], Grid] | None = None
    secondary: Callable[[list[dict]], Grid | None] | None = None
    capped: bool = False     # fetch asks for JOBCOUNT_MAX_ROWS + 1 rows

    def limit(self, rows: list[dict]) -> tuple[list[dict], bool]:
        """Rows cut to JOBCOUNT_MAX_ROWS for capped reports, and whether any were cut."""
        if self.capped and len(rows) > config.JOBCOUNT_MAX_ROWS:
            return rows[:config.JOBCOUNT_MAX_ROWS], True
        return rows, False

    def export_table(self, rows: list[dict]) -> list[list]:
        return (self.export_grid or self.grid)(rows).table()


def _service_list_export(rows: list[dict]) -> Grid:
    columns = grids.service_list_columns(rows[0] if rows else None)
    return grids.flat_grid(rows, columns)


def _mins_grid(rows: list[dict]) -> Grid | None:
    """Repair minutes per type, shown only when the rows carry minutes."""
    keys = [k.lower() for k in ordered_keys(rows)]
    if not any("repair" in k and "min" in k for k in keys):
        return None
    return grids.mins_per_type_grid(rows)


def _flat(columns):
    return lambda rows: grids.flat_grid(rows, columns)


REPORTS: dict[str, ReportDef] = {r.slug: r for r in (
    ReportDef(
        "service_list", "Service List", ReportService.service_list,
        grids.service_list_grid, "Service List.xlsx",
        filters=("location3", "types", "dates"), pdf_name="servicelist.pdf",
        export_grid=_service_list_export, secondary=_mins_grid,
    ),
    ReportDef(
        "services_done", "Services Done", ReportService.jobs_with_parts,
        grids.services_done_grid, "services_done.xlsx",
        filters=("location", "types", "dates"),
    ),
    ReportDef(
        "full_service_history", "Full Service History", ReportService.jobs_with_parts,
        grids.services_done_grid, "full_service_history.xlsx",
        filters=("location", "types", "dates"),
    ),
    ReportDef(
        "indiv_history", "Individual Item History", ReportService.individual_history,
        _flat(grids.INDIV_HISTORY_COLUMNS), "individual_item_history.xlsx",
        filters=("item", "dates"),
    ),
    ReportDef(
        "jobs_per_technician", "Jobs per Technician", ReportService.jobs_per_technician,
        grids.jobs_per_technician_grid, "jobs_per_technician.xlsx",
        filters=("dates",),
    ),
    ReportDef(
        "job_count", "Job Count per Equipment Item", ReportService.job_count_per_item,
        grids.job_count_grid, "jobcount_per_equipment_item.xlsx",
        filters=("dates",), capped=True,
    ),
    ReportDef(
        "no_recent_jobs", "No Recent Jobs", ReportService.no_recent_jobs,
        _flat(grids.NO_RECENT_JOBS_COLUMNS), "no_recent_jobs.xlsx",
        filters=("location", "types", "days"),
    ),
    ReportDef(
        "equipment_list", "Equipment List", ReportService.equipment_list,
        _flat(grids.EQUIPMENT_LIST_COLUMNS), "equipment_list.xlsx",
        filters=("location", "types"),
    ),
    ReportDef(
        "service_history", "Service History",
        lambda session, _f: ReportService.service_history(session),
        _flat(grids.SERVICE_HISTORY_COLUMNS), "service_history.xlsx",
    ),
)}


def get_report(slug: str) -> ReportDef | None:
    return REPORTS.get(slug)
