# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - entries.py: Authorized read/write endpoints for the entries table
# - pages.py: Placeholder pages guarded by the navigation middleware
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import entries
from . import pages

__all__ = [
    "health",
    "entries",
    "pages",
]
