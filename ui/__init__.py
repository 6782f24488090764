"""
ui - Server-rendered HTML layer.

All route modules register on a single Flask Blueprint.
"""

from flask import Blueprint

ui_bp = Blueprint("ui", __name__)

# Import route modules so their @ui_bp decorators execute
from ui import routes_auth          # noqa: F401, E402
from ui import routes_equipment     # noqa: F401, E402
from ui import routes_locations     # noqa: F401, E402
from ui import routes_technicians   # noqa: F401, E402
from ui import routes_parts         # noqa: F401, E402
from ui import routes_jobs          # noqa: F401, E402
from ui import routes_notes         # noqa: F401, E402
from ui import routes_permissions   # noqa: F401, E402
from ui import routes_reports       # noqa: F401, E402
