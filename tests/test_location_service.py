import pytest

from db.models import Gang, Section, Technician
from services.actions import ValidationError
from services.location_service import LocationService
from services.technicians_service import TechniciansService


def test_mine_description_is_required_and_unique(session, seeded):
    with pytest.raises(ValidationError, match="Mine is required."):
        LocationService.insert_mine(session, "", True)
    with pytest.raises(ValidationError, match="A mine with this description already exists."):
        LocationService.insert_mine(session, "Kopanang", True)
    assert LocationService.insert_mine(session, "Moab Khotsong", True)["id"] > 0


def test_shaft_names_are_unique_per_mine_only(session, seeded):
    """The same shaft name may exist under two different mines."""
    with pytest.raises(ValidationError, match="already exists for this mine"):
        LocationService.insert_shaft(session, seeded.mine, "No. 1 Shaft", True)
    created = LocationService.insert_shaft(session, seeded.other_mine, "No. 1 Shaft", True)
    assert created["id"] > 0


def test_shaft_needs_a_mine(session):
    with pytest.raises(ValidationError, match="Please select a mine."):
        LocationService.insert_shaft(session, "0", "Vent Shaft", True)


def test_insert_section_keeps_costcode(session, seeded):
    created = LocationService.insert_section(session, seeded.shaft, "West", " CC-02 ", "on")
    row = session.get(Section, created["id"])
    assert (row.descr, row.costcode, row.isactive) == ("West", "CC-02", True)

    with pytest.raises(ValidationError, match="already exists for this shaft"):
        LocationService.insert_section(session, seeded.shaft, "East", "", True)


def test_update_section_partial(session, seeded):
    LocationService.update_section(session, seeded.section, costcode="", isactive=False)
    row = session.get(Section, seeded.section)
    session.refresh(row)
    assert row.costcode is None
    assert row.isactive is False
    assert row.descr == "East"


def test_gang_rename_checks_siblings(session, seeded):
    other = LocationService.insert_gang(session, seeded.section, "Gang 8", True)
    with pytest.raises(ValidationError, match="already exists for this section"):
        LocationService.update_gang(session, other["id"], section_id=seeded.section,
                                    descr="Gang 7")

    LocationService.update_gang(session, other["id"], section_id=seeded.section,
                                descr="Gang 8", isactive=False)
    row = session.get(Gang, other["id"])
    session.refresh(row)
    assert row.isactive is False


def test_rpc_listings(session, rpc_stub):
    rpc_stub.answers["get_allgangs"] = [{"id": 1, "gang": "Gang 7", "section": "East"}]
    assert LocationService.all_gangs(session)[0]["section"] == "East"
    LocationService.all_shafts(session)
    LocationService.all_sections(session)
    assert rpc_stub.names() == ["get_allgangs", "get_allshafts", "get_allsections"]


# ── Technicians ────────────────────────────────────────────────────────

def test_technicians_crud(session, seeded):
    with pytest.raises(ValidationError, match="Technician is required."):
        TechniciansService.insert_technician(session, " ", True)
    with pytest.raises(ValidationError, match="already exists"):
        TechniciansService.insert_technician(session, "T. Mokoena", True)

    created = TechniciansService.insert_technician(session, "S. Dlamini", True)
    with pytest.raises(ValidationError, match="already exists"):
        TechniciansService.update_technician(session, created["id"], descr="T. Mokoena")

    TechniciansService.update_technician(session, seeded.technician, descr="T. Mokoena",
                                         isactive=False)
    row = session.get(Technician, seeded.technician)
    session.refresh(row)
    assert row.isactive is False
    names = [t["descr"] for t in TechniciansService.all_technicians(session)]
    assert names == ["T. Mokoena", "S. Dlamini"]
