from types import SimpleNamespace

import pytest

import config
from db import get_session, rpc
from db.models import (
    EquipmentCategory, EquipmentItem, EquipmentType, Gang, Mine, Section,
    Shaft, Technician,
)
from main import create_app


@pytest.fixture(autouse=True)
def _auth_off(monkeypatch, tmp_path):
    """Run every test without Supabase and without a logo file."""
    monkeypatch.setattr(config, "SUPABASE_URL", "")
    monkeypatch.setattr(config, "SUPABASE_ANON_KEY", "")
    monkeypatch.setattr(config, "LOGO_PATH", tmp_path / "no-logo.png")


@pytest.fixture
def app(tmp_path):
    """Flask app on a throwaway SQLite file."""
    return create_app({"DB_URL": f"sqlite:///{tmp_path / 'minetrack.sqlite'}",
                       "TESTING": True})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    s = get_session()
    yield s
    s.rollback()
    s.close()


@pytest.fixture
def rpc_stub(monkeypatch):
    """
    Replace the stored-function calls with canned answers.

    ``stub.answers[name]`` is a list of rows or an exception to raise;
    every call is recorded in ``stub.calls`` as (name, params, limit).
    """
    stub = SimpleNamespace(calls=[], answers={})

    def fake_call(_session, name, params=None, limit=None):
        stub.calls.append((name, dict(params or {}), limit))
        answer = stub.answers.get(name, [])
        if isinstance(answer, Exception):
            raise answer
        return [dict(row) for row in answer]

    monkeypatch.setattr(rpc, "call", fake_call)
    stub.names = lambda: [c[0] for c in stub.calls]
    return stub


@pytest.fixture
def seeded(session):
    """One mine with a shaft / section / gang, a drill type, a technician and an item."""
    mine = Mine(descr="Kopanang", isactive=True)
    other_mine = Mine(descr="Tau Lekoa", isactive=True)
    session.add_all([mine, other_mine])
    session.flush()

    shaft = Shaft(mine_id=mine.id, descr="No. 1 Shaft", isactive=True)
    old_shaft = Shaft(mine_id=mine.id, descr="Old Shaft", isactive=False)
    far_shaft = Shaft(mine_id=other_mine.id, descr="Main Shaft", isactive=True)
    session.add_all([shaft, old_shaft, far_shaft])
    session.flush()

    section = Section(shaft_id=shaft.id, descr="East", costcode="CC-01", isactive=True)
    session.add(section)
    session.flush()
    gang = Gang(section_id=section.id, descr="Gang 7", isactive=True)

    category = EquipmentCategory(descr="Drills", isactive=True)
    session.add_all([gang, category])
    session.flush()
    drill = EquipmentType(equipmentcategories_id=category.id, descr="Rock Drill", isactive=True)
    technician = Technician(descr="T. Mokoena", isactive=True)
    session.add_all([drill, technician])
    session.flush()

    item = EquipmentItem(equipmenttypes_id=drill.id, mine_id=mine.id, shaft_id=shaft.id,
                         section_id=section.id, gang_id=gang.id, serialno="RD1001",
                         pistonno="P-1", isactive=True)
    session.add(item)
    session.commit()

    return SimpleNamespace(
        mine=mine.id, other_mine=other_mine.id, shaft=shaft.id, old_shaft=old_shaft.id,
        far_shaft=far_shaft.id, section=section.id, gang=gang.id, category=category.id,
        drill=drill.id, technician=technician.id, item=item.id,
    )
