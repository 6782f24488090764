import pytest

from db import rpc
from db.rpc import RpcError, build_sql


def test_build_sql_uses_named_parameters():
    sql = build_sql("get_servicedlist", {"p_mine_id": 1, "p_shaft_id": 0})
    assert sql == ("SELECT * FROM get_servicedlist("
                   "p_mine_id => :p_mine_id, p_shaft_id => :p_shaft_id)")


def test_build_sql_without_parameters_and_with_limit():
    assert build_sql("get_allshafts", {}) == "SELECT * FROM get_allshafts()"
    assert build_sql("get_jobcountper_item", {}, limit=10001).endswith(" LIMIT 10001")


@pytest.mark.parametrize("name", ["drop table x;", "Get-All", "1abc"])
def test_build_sql_rejects_unsafe_function_names(name):
    with pytest.raises(ValueError):
        build_sql(name, {})


def test_build_sql_rejects_unsafe_parameter_names():
    with pytest.raises(ValueError):
        build_sql("get_allshafts", {"p_id; --": 1})


def test_call_wraps_database_errors(session):
    """SQLite has no stored functions, so the call fails with an RpcError."""
    with pytest.raises(RpcError) as info:
        rpc.call(session, "get_allshafts")
    assert info.value.name == "get_allshafts"


def test_call_scalar_prefers_the_function_named_column(monkeypatch):
    monkeypatch.setattr(rpc, "call", lambda *_a, **_k: [{"other": 1, "insert_job": 42}])
    assert rpc.call_scalar(None, "insert_job") == 42

    monkeypatch.setattr(rpc, "call", lambda *_a, **_k: [{"id": 9}])
    assert rpc.call_scalar(None, "insert_job") == 9

    monkeypatch.setattr(rpc, "call", lambda *_a, **_k: [])
    assert rpc.call_scalar(None, "insert_job") is None
