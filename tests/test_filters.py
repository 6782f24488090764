from werkzeug.datastructures import MultiDict

import config
from reports.filters import ReportFilter


def test_from_args_reads_the_cascade_and_type_list():
    args = MultiDict([("mine_id", "3"), ("shaft_id", "abc"), ("type_ids", "1"),
                      ("type_ids", "4,1"), ("date_from", "2024-01-01"),
                      ("date_to", "31/12/2024"), ("days", "0")])
    f = ReportFilter.from_args(args)
    assert (f.mine_id, f.shaft_id, f.section_id, f.gang_id) == (3, 0, 0, 0)
    assert f.type_ids == [1, 4]
    assert f.date_from == "2024-01-01"
    assert f.date_to is None
    assert f.days == config.NO_RECENT_JOBS_DEFAULT_DAYS
    assert f.item_id is None


def test_query_args_only_carries_what_is_set():
    f = ReportFilter(mine_id=3, type_ids=[1, 4], date_from="2024-01-01", days=90, item_id=7)
    assert f.query_args() == {"mine_id": 3, "type_ids": [1, 4], "date_from": "2024-01-01",
                              "days": 90, "item_id": 7}
    assert ReportFilter().query_args() == {}


def test_plain_dict_args_work_too():
    f = ReportFilter.from_args({"type_ids": "2,5", "gang_id": "8"})
    assert f.type_ids == [2, 5]
    assert f.gang_id == 8


def test_labels_resolve_descriptions(session, seeded):
    f = ReportFilter(mine_id=seeded.mine, shaft_id=seeded.shaft, type_ids=[seeded.drill],
                     type_id=seeded.drill, item_id=seeded.item, date_from="2024-01-01")
    labels = f.labels(session)
    assert labels["mine"] == "Kopanang"
    assert labels["shaft"] == "No. 1 Shaft"
    assert labels["section"] == ""
    assert labels["equipment_types"] == ["Rock Drill"]
    assert labels["equipment_type"] == "Rock Drill"
    assert labels["serial_no"] == "RD1001"
    assert labels["from_date"] == "2024-01-01"
    assert labels["to_date"] == ""


def test_out_of_range_ids_are_ignored():
    f = ReportFilter.from_args({"mine_id": "1e400", "shaft_id": "Infinity",
                                "item_id": "1e30", "days": "inf", "type_ids": "1e30,3"})
    assert (f.mine_id, f.shaft_id, f.item_id) == (0, 0, None)
    assert f.days == config.NO_RECENT_JOBS_DEFAULT_DAYS
    assert f.type_ids == [3]
