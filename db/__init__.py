"""
db - Database layer.

Public API:
    init_db()       → create engine (+ tables on SQLite)
    get_session()   → new Session
    rpc.call()      → run a Postgres stored function
    models          → ORM classes mirroring the Supabase tables
"""

from db.engine import init_db, get_session, get_engine     # noqa: F401
from db.models import (                                    # noqa: F401
    Base, EquipmentCategory, EquipmentType, EquipmentItem,
    Mine, Shaft, Section, Gang, Part, PartPerType, Technician,
    Job, PartPerJob, Note, NoteComment, User, Function, UserFunction,
)
from db.rpc import RpcError                                # noqa: F401
