import pytest

from db.models import EquipmentType, Part
from services.actions import ValidationError
from services.parts_service import PartsService


def _part(**overrides):
    data = {"stockcode": "BRG-6205", "part": "Bearing 6205", "matcatno": "MC-100",
            "lastpurchaseprice": "85.50", "costa": "0", "binno": "A1",
            "stocklevel": "", "reorder": "abc", "isactive": True}
    data.update(overrides)
    return data


def test_create_part_coerces_numbers(session):
    """Zero, blank and unparsable numbers end up NULL."""
    created = PartsService.create(session, _part())
    row = session.get(Part, created["id"])
    assert row.lastpurchaseprice == 85.5
    assert row.costa is None
    assert row.stocklevel is None
    assert row.reorder is None
    assert row.isactive is True


@pytest.mark.parametrize("field, message", [
    ("stockcode", "Stock Code is required."),
    ("part", "Description is required."),
])
def test_create_part_required_fields(session, field, message):
    with pytest.raises(ValidationError) as info:
        PartsService.create(session, _part(**{field: "  "}))
    assert str(info.value) == message


def test_stockcode_and_matcatno_are_unique(session):
    PartsService.create(session, _part())
    with pytest.raises(ValidationError, match="Stock Code already exists"):
        PartsService.create(session, _part(matcatno="MC-200"))
    with pytest.raises(ValidationError, match="Mat Cat Number already exists"):
        PartsService.create(session, _part(stockcode="BRG-6206"))
    # a blank Mat Cat No is never a duplicate
    PartsService.create(session, _part(stockcode="BRG-6206", matcatno=""))
    PartsService.create(session, _part(stockcode="BRG-6207", matcatno=""))


def test_update_applies_only_present_keys(session):
    pid = PartsService.create(session, _part())["id"]
    PartsService.update(session, pid, {"binno": " B7 ", "costa": "12", "isactive": False})
    row = session.get(Part, pid)
    session.refresh(row)
    assert (row.binno, row.costa, row.isactive) == ("B7", 12.0, False)
    assert row.stockcode == "BRG-6205"

    # keeping its own stock code is not a duplicate
    PartsService.update(session, pid, {"stockcode": "BRG-6205"})

    with pytest.raises(ValidationError, match="Description is required."):
        PartsService.update(session, pid, {"part": ""})
    with pytest.raises(ValidationError, match="Invalid part id."):
        PartsService.update(session, "abc", {"binno": "C"})


def test_searches_need_minimum_lengths(session):
    PartsService.create(session, _part())
    PartsService.create(session, _part(stockcode="SEAL-1", part="Seal kit", matcatno=""))

    assert [p["stockcode"] for p in PartsService.search_by_stockcode(session, "br")] == ["BRG-6205"]
    assert PartsService.search_by_stockcode(session, "B") == []
    assert [p["part"] for p in PartsService.search_by_description(session, "sea")] == ["Seal kit"]
    assert PartsService.search_by_description(session, "se") == []


def test_replace_types_for_part(session):
    pid = PartsService.create(session, _part())["id"]
    first = EquipmentType(descr="Rock Drill", isactive=True)
    second = EquipmentType(descr="Loader", isactive=True)
    session.add_all([first, second])
    session.flush()

    PartsService.insert_types_for_part(session, pid, [str(first.id), "", "0"])
    assert PartsService.types_for_part(session, pid) == [first.id]

    assert PartsService.replace_types_for_part(session, pid, [second.id]) == [second.id]
    assert PartsService.types_for_part(session, pid) == [second.id]

    PartsService.replace_types_for_part(session, pid, [])
    assert PartsService.types_for_part(session, pid) == []


def test_get_part(session):
    pid = PartsService.create(session, _part())["id"]
    assert PartsService.get(session, pid)["stockcode"] == "BRG-6205"
    assert PartsService.get(session, 999) is None


def test_out_of_range_part_ids(session):
    assert PartsService.get(session, "1e30") is None
    assert PartsService.types_for_part(session, "inf") == []
    with pytest.raises(ValidationError, match="Invalid part id."):
        PartsService.update(session, "1e400", {"part": "Bearing"})
