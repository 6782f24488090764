"""
services.jobs_service - Job entry (a service event plus the parts used).

Jobs and their part lines are written through the database functions
insert_job / insert_partsperjob so job numbering stays in Postgres.
"""

from __future__ import annotations

import logging
import math

from sqlalchemy.orm import Session

from db import rpc
from services.actions import ValidationError
from services.values import (
    is_nan, parse_date, parse_id, parse_number, selected_id, to_bool,
)

logger = logging.getLogger(__name__)


def _qty(value) -> int:
    n = parse_id(value)
    if is_nan(n):
        return 0
    return int(math.floor(n))


def _unitcost(value) -> float:
    n = parse_number(value)
    return 0.0 if is_nan(n) else n


class JobsService:

    @staticmethod
    def parts_for_type(session: Session, type_id) -> list[dict]:
        """Parts that fit an equipment type (get_partspertype)."""
        n = parse_id(type_id)
        if is_nan(n):
            return []
        return rpc.call(session, "get_partspertype", {"type_id": int(n)})

    @staticmethod
    def items_for_type(session: Session, type_id) -> list[dict]:
        """Equipment items of one type (get_itemspertype)."""
        n = parse_id(type_id)
        if is_nan(n):
            return []
        return rpc.call(session, "get_itemspertype", {"p_type_id": int(n)})

    @staticmethod
    def insert_job(session: Session, equipmentitems_id, technician_id,
                   datein, dateout, comments) -> int | None:
        """Create the job row; returns the new job id."""
        return rpc.call_scalar(session, "insert_job", {
            "p_equipmentitems_id": selected_id(equipmentitems_id),
            "p_technician_id": selected_id(technician_id),
            "p_datein": parse_date(datein),
            "p_dateout": parse_date(dateout),
            "p_comments": comments,
        })

    @staticmethod
    def insert_part_for_job(session: Session, equipmentitems_id, job_id, part_id,
                            qty, unitcost, isdamaged) -> None:
        rpc.call(session, "insert_partsperjob", {
            "p_equipmentitems_id": selected_id(equipmentitems_id),
            "p_job_id": selected_id(job_id),
            "p_part_id": selected_id(part_id),
            "p_qty": _qty(qty),
            "p_unitcost": _unitcost(unitcost),
            "p_isdamaged": to_bool(isdamaged),
        })

    @staticmethod
    def save_job(session: Session, equipmentitems_id, technician_id, datein,
                 dateout, comments, lines: list[dict]) -> dict:
        """
        Insert a job and every part line with a positive quantity in one
        transaction.  *lines* are dicts with part_id, qty, unitcost and
        isdamaged keys.
        """
        if selected_id(equipmentitems_id) is None:
            raise ValidationError("Please select an equipment item.")
        if selected_id(technician_id) is None:
            raise ValidationError("Please select a technician.")
        if parse_date(datein) is None:
            raise ValidationError("Please enter the date in.")

        job_id = JobsService.insert_job(session, equipmentitems_id, technician_id,
                                        datein, dateout, comments or None)
        if job_id is None:
            raise ValidationError("The job could not be created.")

        saved = 0
        for line in lines:
            if _qty(line.get("qty")) <= 0:
                continue
            JobsService.insert_part_for_job(
                session, equipmentitems_id, job_id, line.get("part_id"),
                line.get("qty"), line.get("unitcost"), line.get("isdamaged"),
            )
            saved += 1
        logger.info("Job %s saved with %d part line(s)", job_id, saved)
        return {"job_id": job_id, "parts": saved}
