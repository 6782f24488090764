import config
from db.models import EquipmentType
from reports.filters import ReportFilter
from services.report_service import MISSING_CATEGORY, ReportService


def _filter(**kwargs):
    base = dict(mine_id=1, shaft_id=2, section_id=0, gang_id=0, type_ids=[4, 5],
                date_from="2024-01-01", date_to="2024-06-30")
    base.update(kwargs)
    return ReportFilter(**base)


def test_service_list_parameters(session, rpc_stub):
    ReportService.service_list(session, _filter())
    assert rpc_stub.calls == [("get_servicedlist", {
        "p_equipmenttypes_id": [4, 5], "p_mine_id": 1, "p_shaft_id": 2,
        "p_section_id": 0, "p_datein": "2024-01-01", "p_dateout": "2024-06-30",
    }, None)]


def test_jobs_with_parts_passes_the_gang(session, rpc_stub):
    ReportService.jobs_with_parts(session, _filter(gang_id=9))
    name, params, _ = rpc_stub.calls[0]
    assert name == "jobswithparts"
    assert params["p_gang_id"] == 9
    assert params["p_datefrom"] == "2024-01-01"


def test_individual_history_needs_type_and_item(session, rpc_stub):
    assert ReportService.individual_history(session, _filter(type_id=4)) == []
    assert rpc_stub.calls == []
    ReportService.individual_history(session, _filter(type_id=4, item_id=77))
    assert rpc_stub.calls[0][1]["p_equipmentitems_id"] == 77


def test_job_count_asks_for_one_row_past_the_cap(session, rpc_stub):
    ReportService.job_count_per_item(session, _filter())
    assert rpc_stub.calls[0][2] == config.JOBCOUNT_MAX_ROWS + 1


def test_no_recent_jobs_and_equipment_list(session, rpc_stub):
    ReportService.no_recent_jobs(session, _filter(days=90))
    ReportService.equipment_list(session, _filter())
    ReportService.jobs_per_technician(session, _filter())
    assert rpc_stub.names() == ["get_norecentjobs", "get_allequipmentitems",
                                "get_jobspertechnician"]
    assert rpc_stub.calls[0][1]["p_days"] == 90
    assert rpc_stub.calls[2][1] == {"p_fromdate": "2024-01-01", "p_todate": "2024-06-30"}


def test_service_history_sorts_by_category(session, seeded):
    """Types without a category sort under the placeholder."""
    session.add(EquipmentType(descr="Orphan", isactive=False))
    session.flush()
    rows = ReportService.service_history(session)
    assert [(r["cat"], r["typ"]) for r in rows] == [
        ("Drills", "Rock Drill"), (MISSING_CATEGORY, "Orphan")]
    assert rows[0]["isactive"] is True
    assert rows[0]["created_at"]
