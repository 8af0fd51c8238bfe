# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Checks the Authorization header against the configured token allowlist.
# There are no users or claims: a token is either on the list or it isn't.
#
# Usage:
#   from app.auth import require_token
#
#   @router.get("/protected", dependencies=[Depends(require_token)])
#   def protected():
#       ...
# =============================================================================

import logging
import secrets
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor. auto_error is off so a missing header
# produces our own 401 body instead of FastAPI's 403.
security = HTTPBearer(auto_error=False)


def is_allowed(token: str, allowed_tokens: list[str]) -> bool:
    """Constant-time membership test of token in allowed_tokens."""
    matched = False
    for allowed in allowed_tokens:
        if secrets.compare_digest(token.encode(), allowed.encode()):
            matched = True
    return matched


async def require_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """
    Require a bearer token from the allowlist.

    Returns:
        The accepted token

    Raises:
        UnauthorizedError: 401 if the header is missing, not a Bearer
            credential, or the token is not allowed
    """
    if credentials is None:
        logger.warning(f"Missing bearer token on {request.method} {request.url.path}")
        raise UnauthorizedError()

    settings = request.app.state.settings
    if not is_allowed(credentials.credentials, settings.allowed_tokens_list):
        logger.warning(f"Rejected bearer token on {request.method} {request.url.path}")
        raise UnauthorizedError()

    return credentials.credentials
