"""
db.models - SQLAlchemy ORM declarations.

The tables belong to the Supabase Postgres database; the classes below
mirror them column for column so the services can query them with the
ORM.  Uniqueness rules (description per parent, serial number, stock
code) are enforced by the services, not by constraints declared here.

Tables
------
equipmentcategories / equipmenttypes / equipmentitems
               - three-level equipment classification.
mines / shafts / sections / gangs
               - four-level location hierarchy.
parts / partspertype
               - stock parts and the equipment types they fit.
jobs / partsperjob
               - service events and the parts consumed by them.
notes / notecomments
               - free-text notes against an equipment item.
technicians    - people doing jobs and writing notes.
users / functions / userfunctions
               - per-user permission grants.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from sqlalchemy import (
    Boolean, Column, Date, DateTime, Float, ForeignKey, Integer, String, Text,
)
from sqlalchemy.orm import DeclarativeBase


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):

    # ── Serialisation ──────────────────────────────────────────────────
    def to_dict(self) -> dict:
        d = {}
        for col in self.__table__.columns:
            val = getattr(self, col.key)
            if isinstance(val, (datetime, date)):
                val = val.isoformat()
            d[col.key] = val
        return d


# ── Equipment ──────────────────────────────────────────────────────────

class EquipmentCategory(Base):
    __tablename__ = "equipmentcategories"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    descr      = Column(String(200))
    isactive   = Column(Boolean, default=True)
    created_at = Column(DateTime, default=_utcnow)


class EquipmentType(Base):
    __tablename__ = "equipmenttypes"

    id                     = Column(Integer, primary_key=True, autoincrement=True)
    equipmentcategories_id = Column(Integer, ForeignKey("equipmentcategories.id"), index=True)
    descr                  = Column(String(200))
    isactive               = Column(Boolean, default=True)
    created_at             = Column(DateTime, default=_utcnow)


class EquipmentItem(Base):
    __tablename__ = "equipmentitems"

    id                = Column(Integer, primary_key=True, autoincrement=True)
    equipmenttypes_id = Column(Integer, ForeignKey("equipmenttypes.id"), index=True)
    mine_id           = Column(Integer, ForeignKey("mines.id"))
    shaft_id          = Column(Integer, ForeignKey("shafts.id"))
    section_id        = Column(Integer, ForeignKey("sections.id"))
    gang_id           = Column(Integer, ForeignKey("gangs.id"))
    serialno          = Column(String(100), index=True)
    pistonno          = Column(String(100))
    isactive          = Column(Boolean, default=True)
    created_at        = Column(DateTime, default=_utcnow)


# ── Locations ──────────────────────────────────────────────────────────

class Mine(Base):
    __tablename__ = "mines"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    descr      = Column(String(200))
    isactive   = Column(Boolean, default=True)
    created_at = Column(DateTime, default=_utcnow)


class Shaft(Base):
    __tablename__ = "shafts"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    mine_id    = Column(Integer, ForeignKey("mines.id"), index=True)
    descr      = Column(String(200))
    isactive   = Column(Boolean, default=True)
    created_at = Column(DateTime, default=_utcnow)


class Section(Base):
    __tablename__ = "sections"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    shaft_id   = Column(Integer, ForeignKey("shafts.id"), index=True)
    descr      = Column(String(200))
    costcode   = Column(String(100))
    isactive   = Column(Boolean, default=True)
    created_at = Column(DateTime, default=_utcnow)


class Gang(Base):
    __tablename__ = "gangs"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    section_id = Column(Integer, ForeignKey("sections.id"), index=True)
    descr      = Column(String(200))
    isactive   = Column(Boolean, default=True)
    created_at = Column(DateTime, default=_utcnow)


# ── Parts ──────────────────────────────────────────────────────────────

class Part(Base):
    __tablename__ = "parts"

    id                = Column(Integer, primary_key=True, autoincrement=True)
    stockcode         = Column(String(100), index=True)
    part              = Column(Text)
    matcatno          = Column(String(100))
    lastpurchaseprice = Column(Float)
    costa             = Column(Float)
    binno             = Column(String(100))
    stocklevel        = Column(Float)
    reorder           = Column(Float)
    isactive          = Column(Boolean, default=True)
    created_at        = Column(DateTime, default=_utcnow)


class PartPerType(Base):
    __tablename__ = "partspertype"

    id     = Column(Integer, primary_key=True, autoincrement=True)
    partid = Column(Integer, ForeignKey("parts.id"), index=True)
    typeid = Column(Integer, ForeignKey("equipmenttypes.id"), index=True)


# ── People ─────────────────────────────────────────────────────────────

class Technician(Base):
    __tablename__ = "technicians"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    descr      = Column(String(200))
    isactive   = Column(Boolean, default=True)
    created_at = Column(DateTime, default=_utcnow)


# ── Jobs ───────────────────────────────────────────────────────────────

class Job(Base):
    __tablename__ = "jobs"

    id                = Column(Integer, primary_key=True, autoincrement=True)
    jobno             = Column(String(50))
    equipmentitems_id = Column(Integer, ForeignKey("equipmentitems.id"), index=True)
    technician_id     = Column(Integer, ForeignKey("technicians.id"))
    datein            = Column(Date)
    dateout           = Column(Date)
    comments          = Column(Text)
    created_at        = Column(DateTime, default=_utcnow)


class PartPerJob(Base):
    __tablename__ = "partsperjob"

    id                = Column(Integer, primary_key=True, autoincrement=True)
    equipmentitems_id = Column(Integer, ForeignKey("equipmentitems.id"))
    job_id            = Column(Integer, ForeignKey("jobs.id"), index=True)
    part_id           = Column(Integer, ForeignKey("parts.id"))
    qty               = Column(Integer, default=0)
    unitcost          = Column(Float)
    isdamaged         = Column(Boolean, default=False)


# ── Notes ──────────────────────────────────────────────────────────────

class Note(Base):
    __tablename__ = "notes"

    id                = Column(Integer, primary_key=True, autoincrement=True)
    equipmentitems_id = Column(Integer, ForeignKey("equipmentitems.id"), index=True)
    technicians_id    = Column(Integer, ForeignKey("technicians.id"))
    description       = Column(Text)
    isfinalised       = Column(Boolean, default=False)
    created_at        = Column(DateTime, default=_utcnow)


class NoteComment(Base):
    __tablename__ = "notecomments"

    id             = Column(Integer, primary_key=True, autoincrement=True)
    noteid         = Column(Integer, ForeignKey("notes.id"), index=True)
    technicians_id = Column(Integer, ForeignKey("technicians.id"))
    comment        = Column(Text)
    created_at     = Column(DateTime, default=_utcnow)


# ── Permissions ────────────────────────────────────────────────────────

class User(Base):
    __tablename__ = "users"

    id    = Column(String(36), primary_key=True)       # auth uuid
    email = Column(String(320), index=True)


class Function(Base):
    __tablename__ = "functions"

    id    = Column(Integer, primary_key=True, autoincrement=True)
    descr = Column(String(200))


class UserFunction(Base):
    __tablename__ = "userfunctions"

    id          = Column(Integer, primary_key=True, autoincrement=True)
    user_id     = Column(String(36), ForeignKey("users.id"), index=True)
    function_id = Column(Integer, ForeignKey("functions.id"))
