"""
services.report_service - Data sources for the report pages.

Each report is one database function call; the rows come back as-is
and are shaped into grids by reports.grids.  The only table-backed
report is the equipment service history (types with their category).
"""

from __future__ import annotations

from sqlalchemy.orm import Session

import config
from db import rpc
from db.models import EquipmentCategory, EquipmentType
from reports.filters import ReportFilter

MISSING_CATEGORY = "—"


class ReportService:

    @staticmethod
    def service_list(session: Session, f: ReportFilter) -> list[dict]:
        """Serviced items per type and location in a date window (get_servicedlist)."""
        return rpc.call(session, "get_servicedlist", {
            "p_equipmenttypes_id": list(f.type_ids),
            "p_mine_id": f.mine_id,
            "p_shaft_id": f.shaft_id,
            "p_section_id": f.section_id,
            "p_datein": f.date_from,
            "p_dateout": f.date_to,
        })

    @staticmethod
    def jobs_with_parts(session: Session, f: ReportFilter) -> list[dict]:
        """Jobs and the parts they used (jobswithparts); feeds Services Done
        and Full Service History."""
        return rpc.call(session, "jobswithparts", {
            "p_mine_id": f.mine_id,
            "p_shaft_id": f.shaft_id,
            "p_section_id": f.section_id,
            "p_gang_id": f.gang_id,
            "p_equipmenttypes_id": list(f.type_ids),
            "p_datefrom": f.date_from,
            "p_dateto": f.date_to,
        })

    @staticmethod
    def individual_history(session: Session, f: ReportFilter) -> list[dict]:
        """Part lines of every job on one item; needs both type and item."""
        if not f.type_id or not f.item_id:
            return []
        return rpc.call(session, "rpt_indivhistory", {
            "p_equipmenttypes_id": f.type_id,
            "p_equipmentitems_id": f.item_id,
            "p_datefrom": f.date_from,
            "p_dateto": f.date_to,
        })

    @staticmethod
    def jobs_per_technician(session: Session, f: ReportFilter) -> list[dict]:
        return rpc.call(session, "get_jobspertechnician", {
            "p_fromdate": f.date_from,
            "p_todate": f.date_to,
        })

    @staticmethod
    def job_count_per_item(session: Session, f: ReportFilter) -> list[dict]:
        return rpc.call(session, "get_jobcountper_item", {
            "p_fromdate": f.date_from,
            "p_todate": f.date_to,
        }, limit=config.JOBCOUNT_MAX_ROWS + 1)

    @staticmethod
    def no_recent_jobs(session: Session, f: ReportFilter) -> list[dict]:
        """Items whose last job is older than ``f.days`` days (get_norecentjobs)."""
        return rpc.call(session, "get_norecentjobs", {
            "p_mine_id": f.mine_id,
            "p_shaft_id": f.shaft_id,
            "p_section_id": f.section_id,
            "p_gang_id": f.gang_id,
            "p_equipmenttypes_id": list(f.type_ids),
            "p_days": f.days,
        })

    @staticmethod
    def equipment_list(session: Session, f: ReportFilter) -> list[dict]:
        """Equipment items at a location (get_allequipmentitems)."""
        return rpc.call(session, "get_allequipmentitems", {
            "p_mine_id": f.mine_id,
            "p_shaft_id": f.shaft_id,
            "p_section_id": f.section_id,
            "p_gang_id": f.gang_id,
            "p_equipmenttypes_id": list(f.type_ids),
        })

    @staticmethod
    def service_history(session: Session) -> list[dict]:
        """Every equipment type with its category, sorted by category name."""
        rows = (session.query(EquipmentType, EquipmentCategory.descr)
                .outerjoin(EquipmentCategory,
                           EquipmentCategory.id == EquipmentType.equipmentcategories_id)
                .all())
        out = [
            {
                "cat": cat or MISSING_CATEGORY,
                "typ": t.descr,
                "isactive": t.isactive,
                "created_at": t.created_at.isoformat() if t.created_at else None,
            }
            for t, cat in rows
        ]
        out.sort(key=lambda r: r["cat"].casefold())
        return out
