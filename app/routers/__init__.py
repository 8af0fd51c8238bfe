# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - collections.py: Collection create/drop endpoints
# - documents.py: Find, aggregate, insert and find-and-modify endpoints
#
# Each router is mounted in main.py at the root path.
# =============================================================================

from . import health
from . import collections
from . import documents

__all__ = [
    "health",
    "collections",
    "documents",
]
