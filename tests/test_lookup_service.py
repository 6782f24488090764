from db.models import EquipmentType, Mine
from services.lookup_service import LookupService


def test_shafts_by_mine_lists_active_children(session, seeded):
    rows = LookupService.shafts_by_mine(session, seeded.mine)
    assert [r["descr"] for r in rows] == ["No. 1 Shaft"]


def test_shafts_by_mine_can_include_inactive(session, seeded):
    rows = LookupService.shafts_by_mine(session, str(seeded.mine), active_only=False)
    assert [r["descr"] for r in rows] == ["No. 1 Shaft", "Old Shaft"]


def test_zero_parent_means_all_and_garbage_means_none(session, seeded):
    """Parent id 0 lists every shaft; an unparsable id lists nothing."""
    everything = LookupService.shafts_by_mine(session, "0")
    assert {r["descr"] for r in everything} == {"No. 1 Shaft", "Main Shaft"}
    assert LookupService.shafts_by_mine(session, "abc") == []


def test_sections_and_gangs_follow_the_cascade(session, seeded):
    sections = LookupService.sections_by_shaft(session, seeded.shaft)
    assert sections == [{"id": seeded.section, "descr": "East"}]
    gangs = LookupService.gangs_by_section(session, seeded.section)
    assert gangs == [{"id": seeded.gang, "descr": "Gang 7"}]
    assert LookupService.gangs_by_section(session, seeded.far_shaft + 100) == []


def test_active_lists_skip_inactive_rows(session, seeded):
    session.add(Mine(descr="Closed Mine", isactive=False))
    session.flush()
    names = [m["descr"] for m in LookupService.active_mines(session)]
    assert names == ["Kopanang", "Tau Lekoa"]

    types = LookupService.active_types(session)
    assert types == [{"id": seeded.drill, "descr": "Rock Drill",
                      "equipmentcategories_id": seeded.category}]


def test_describe_and_type_names(session, seeded):
    assert LookupService.describe(session, Mine, seeded.mine) == "Kopanang"
    assert LookupService.describe(session, Mine, 0) == ""
    assert LookupService.describe(session, Mine, 9999) == ""

    session.add(EquipmentType(descr="Air Loader", isactive=True))
    session.flush()
    all_ids = [t.id for t in session.query(EquipmentType).all()]
    assert LookupService.type_names(session, all_ids) == ["Air Loader", "Rock Drill"]
    assert LookupService.type_names(session, []) == []


def test_out_of_range_parent_lists_nothing(session, seeded):
    for value in ("Infinity", "1e400", "1e30"):
        assert LookupService.shafts_by_mine(session, value) == []
    assert LookupService.describe(session, Mine, "1e30") == ""
