from datetime import date

import pytest

from services.actions import ValidationError, run_action
from services.jobs_service import JobsService


def _lines():
    return [
        {"part_id": "11", "qty": "2.7", "unitcost": "85.5", "isdamaged": True},
        {"part_id": "12", "qty": "0", "unitcost": "10", "isdamaged": False},
        {"part_id": "13", "qty": "", "unitcost": "", "isdamaged": False},
        {"part_id": "14", "qty": "1", "unitcost": "abc", "isdamaged": False},
    ]


def test_save_job_writes_job_and_quantity_lines(session, rpc_stub):
    """Lines without a positive quantity are skipped."""
    rpc_stub.answers["insert_job"] = [{"insert_job": 501}]

    saved = JobsService.save_job(session, "7", "3", "2024-03-05", "2024-03-06",
                                 "Replaced bearings", _lines())
    assert saved == {"job_id": 501, "parts": 2}

    name, params, _limit = rpc_stub.calls[0]
    assert name == "insert_job"
    assert params == {"p_equipmentitems_id": 7, "p_technician_id": 3,
                      "p_datein": date(2024, 3, 5), "p_dateout": date(2024, 3, 6),
                      "p_comments": "Replaced bearings"}

    lines = [params for name, params, _ in rpc_stub.calls if name == "insert_partsperjob"]
    assert lines == [
        {"p_equipmentitems_id": 7, "p_job_id": 501, "p_part_id": 11, "p_qty": 2,
         "p_unitcost": 85.5, "p_isdamaged": True},
        {"p_equipmentitems_id": 7, "p_job_id": 501, "p_part_id": 14, "p_qty": 1,
         "p_unitcost": 0.0, "p_isdamaged": False},
    ]


@pytest.mark.parametrize("item, tech, datein, message", [
    ("", "3", "2024-03-05", "Please select an equipment item."),
    ("7", "0", "2024-03-05", "Please select a technician."),
    ("7", "3", "", "Please enter the date in."),
])
def test_save_job_validation(session, rpc_stub, item, tech, datein, message):
    with pytest.raises(ValidationError) as info:
        JobsService.save_job(session, item, tech, datein, "", "", [])
    assert str(info.value) == message
    assert rpc_stub.calls == []


def test_save_job_without_new_id_fails(app, rpc_stub):
    rpc_stub.answers["insert_job"] = []
    result = run_action(JobsService.save_job, "7", "3", "2024-03-05", "", "", _lines())
    assert result.error == "The job could not be created."
    assert "insert_partsperjob" not in rpc_stub.names()


def test_parts_and_items_for_type(session, rpc_stub):
    rpc_stub.answers["get_partspertype"] = [{"part_id": 11, "stockcode": "BRG-6205"}]
    assert JobsService.parts_for_type(session, "4") == [{"part_id": 11, "stockcode": "BRG-6205"}]
    JobsService.items_for_type(session, 4)
    assert rpc_stub.calls[0][1] == {"type_id": 4}
    assert rpc_stub.calls[1][1] == {"p_type_id": 4}
    assert JobsService.items_for_type(session, "x") == []
