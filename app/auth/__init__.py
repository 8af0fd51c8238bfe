# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Static bearer-token allowlist check.
#
# Usage:
#   from app.auth import require_token
#
#   router = APIRouter(dependencies=[Depends(require_token)])
# =============================================================================

from app.auth.dependencies import require_token

__all__ = [
    "require_token",
]
