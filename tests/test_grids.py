from reports import grids
from reports.registry import REPORTS, get_report

JOB_ROW = {"mine": "Kopanang", "shaft": "No. 1", "section": "East", "type": "Rock Drill",
           "serialno": "RD1001", "jobno": "J-17", "stockcode": "BRG-6205",
           "unitcost": 85.5, "isdamaged": False, "cost": 1234.5}


def test_services_done_grid_headers_and_subtotals():
    grid = grids.services_done_grid([JOB_ROW])
    assert grid.headers == ["Mine", "Shaft", "Section", "Type", "Serial No", "Job No",
                            "Stock Code", "Unit Cost", "Abuse", "Total"]

    table = grid.table()
    # header, one data row, one subtotal per grouping level
    assert len(table) == 1 + 1 + 6
    assert table[1][0] == "Kopanang"
    assert table[1][-1] == "1 234.50"
    assert table[1][8] == "No"
    assert table[2][0] == "Job No total (1 row)"
    assert table[2][-1] == "1 234.50"
    assert table[-1][0] == "Mine total (1 row)"


def test_services_done_grid_stops_levels_at_first_missing_key():
    rows = [{"mine": "A", "section": "East", "cost": 3}]
    grid = grids.services_done_grid(rows)
    subtotals = [i for i in grid.items if i.is_subtotal]
    assert [s.level for s in subtotals] == ["mine"]


def test_job_count_grid_sums_job_counts():
    rows = [
        {"type": "Rock Drill", "serialno": "RD1", "jobcount": 1200},
        {"type": "Rock Drill", "serialno": "RD2", "jobcount": 3},
    ]
    table = grids.job_count_grid(rows).table()
    assert table[0] == [c.header for c in grids.JOBCOUNT_COLUMNS]
    assert table[1][0] == "Rock Drill"
    assert table[2][0] == ""
    assert table[1][-1] == "1 200"
    assert table[3][0] == "Type total (2 rows)"
    assert table[3][-1] == "1 203"


def test_jobs_per_technician_grid():
    rows = [{"technician": "T. Mokoena", "jobcount": 2, "total": 100},
            {"technician": "T. Mokoena", "jobcount": 1, "total": 50.25}]
    grid = grids.jobs_per_technician_grid(rows)
    assert grid.headers == ["Technician", "Job Count", "Total"]
    sub = grid.table()[-1]
    assert sub == ["Technician total (2 rows)", "3", "150.25"]


def test_service_list_columns_follow_fixed_order():
    first = {"jobdate": "2024-03-05", "serial_no": "RD1", "extra": 1,
             "equipmentcategories_id": 2, "equipmenttype": "Rock Drill"}
    cols = grids.service_list_columns(first)
    assert [c.header for c in cols] == ["Equipment category ID", "Equipment type",
                                        "Serial Number", "Job Date"]
    assert grids.service_list_columns(None) == []

    table = grids.flat_grid([first], cols).table()
    assert table[1] == ["2", "Rock Drill", "RD1", "05 Mar 2024"]


def test_service_list_grid_groups_by_category():
    rows = [{"equipmentcategories_id": 2, "serialno": "A"},
            {"equipmentcategories_id": 2, "serialno": "B"},
            {"equipmentcategories_id": 1, "serialno": "C"}]
    grid = grids.service_list_grid(rows)
    captions = [i.caption for i in grid.items if i.is_subtotal]
    assert captions == ["Category total (1 row)", "Category total (2 rows)"]


def test_mins_per_type_grid():
    rows = [{"type": "Drill", "repair_mins": 30}, {"type": "Drill", "repair_mins": 15}]
    table = grids.mins_per_type_grid(rows).table()
    assert table[-1] == ["Type total (2 rows)", "45"]


def test_flat_grid_renders_missing_values_blank():
    rows = [{"type": "Drill", "serial_no": "RD1", "datein": None, "days_ago": 200}]
    table = grids.flat_grid(rows, grids.NO_RECENT_JOBS_COLUMNS).table()
    assert table[1] == ["Drill", "RD1", "", "200"]


def test_registry_export_tables():
    service_list = get_report("service_list")
    table = service_list.export_table([{"serialno": "RD1", "mine": "Kopanang", "x": 1}])
    assert table == [["Serial Number", "Mine"], ["RD1", "Kopanang"]]
    assert service_list.secondary([{"serialno": "RD1"}]) is None
    assert service_list.secondary([{"type": "Drill", "repairmins": 5}]) is not None

    assert get_report("nope") is None
    assert len(REPORTS) == 9
    assert REPORTS["job_count"].excel_name == "jobcount_per_equipment_item.xlsx"
