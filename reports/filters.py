"""
reports.filters - The cascading report filter.

Every report page carries the same query-string filter:

    ?mine_id=&shaft_id=&section_id=&gang_id=&type_ids=1&type_ids=4
     &date_from=2024-01-01&date_to=2024-12-31&days=180
     &type_id=&item_id=

``ReportFilter.from_args`` reads it from ``request.args``; ``labels``
resolves the selected ids to the descriptions printed in export
headers.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy.orm import Session

import config
from db.models import EquipmentItem, EquipmentType, Gang, Mine, Section, Shaft
from services.lookup_service import LookupService
from services.values import id_list, parse_date, selected_id


def _arg_list(args, name: str) -> list[str]:
    if hasattr(args, "getlist"):
        values = args.getlist(name)
    else:
        values = args.get(name) or []
        if isinstance(values, str):
            values = [values]
    out: list[str] = []
    for v in values:
        out.extend(str(v).split(","))
    return out


@dataclass
class ReportFilter:
    mine_id: int = 0
    shaft_id: int = 0
    section_id: int = 0
    gang_id: int = 0
    type_ids: list[int] = field(default_factory=list)
    date_from: str | None = None
    date_to: str | None = None
    days: int = config.NO_RECENT_JOBS_DEFAULT_DAYS
    type_id: int | None = None
    item_id: int | None = None

    @classmethod
    def from_args(cls, args) -> "ReportFilter":
        def iso(name):
            d = parse_date(args.get(name))
            return d.isoformat() if d else None

        days = selected_id(args.get("days"))
        return cls(
            mine_id=selected_id(args.get("mine_id")) or 0,
            shaft_id=selected_id(args.get("shaft_id")) or 0,
            section_id=selected_id(args.get("section_id")) or 0,
            gang_id=selected_id(args.get("gang_id")) or 0,
            type_ids=id_list(_arg_list(args, "type_ids")),
            date_from=iso("date_from"),
            date_to=iso("date_to"),
            days=days if days is not None else config.NO_RECENT_JOBS_DEFAULT_DAYS,
            type_id=selected_id(args.get("type_id")),
            item_id=selected_id(args.get("item_id")),
        )

    def query_args(self) -> dict:
        """Inverse of from_args, for building export links."""
        out: dict = {}
        for name in ("mine_id", "shaft_id", "section_id", "gang_id"):
            if getattr(self, name):
                out[name] = getattr(self, name)
        if self.type_ids:
            out["type_ids"] = list(self.type_ids)
        if self.date_from:
            out["date_from"] = self.date_from
        if self.date_to:
            out["date_to"] = self.date_to
        if self.days != config.NO_RECENT_JOBS_DEFAULT_DAYS:
            out["days"] = self.days
        if self.type_id:
            out["type_id"] = self.type_id
        if self.item_id:
            out["item_id"] = self.item_id
        return out

    def labels(self, session: Session) -> dict:
        """Descriptions for the selected ids (empty strings when unset)."""
        serial = ""
        if self.item_id:
            item = session.get(EquipmentItem, self.item_id)
            serial = (item.serialno or "") if item else ""
        return {
            "mine": LookupService.describe(session, Mine, self.mine_id),
            "shaft": LookupService.describe(session, Shaft, self.shaft_id),
            "section": LookupService.describe(session, Section, self.section_id),
            "gang": LookupService.describe(session, Gang, self.gang_id),
            "equipment_types": LookupService.type_names(session, self.type_ids),
            "equipment_type": LookupService.describe(session, EquipmentType, self.type_id),
            "serial_no": serial,
            "from_date": self.date_from or "",
            "to_date": self.date_to or "",
            "days": self.days,
        }
