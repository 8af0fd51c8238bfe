# =============================================================================
# lib/mongo_client.py - MongoDB Client Construction
# =============================================================================
# Builds the single pymongo client the gateway shares across requests.
# The client owns its own connection pool and reconnects on its own, so
# nothing here holds global state: the caller keeps the returned handle.
#
# Usage:
#   from lib.mongo_client import create_mongo_client, ping
#   client = create_mongo_client(settings.MONGO_URI)
#   ping(client)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from pymongo import MongoClient
from pymongo.errors import ConfigurationError, InvalidURI

logger = logging.getLogger(__name__)


class MongoClientError(Exception):
    """
    Error while constructing the MongoDB client.

    Carries a suggestion so startup failures say how to fix them.
    """

    def __init__(
        self,
        message: str,
        code: str = "MONGO_CLIENT_ERROR",
        suggestion: str | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


def create_mongo_client(uri: str, server_selection_timeout_ms: int = 5000) -> MongoClient:
    """
    Create a MongoClient for uri.

    The driver connects lazily, so this does not touch the network for
    mongodb:// URIs. Returned datetimes are timezone-aware UTC.

    Raises:
        MongoClientError: If the URI or options are invalid
    """
    try:
        client: MongoClient = MongoClient(
            uri,
            serverSelectionTimeoutMS=server_selection_timeout_ms,
            tz_aware=True,
        )
    except (InvalidURI, ConfigurationError) as e:
        raise MongoClientError(
            message=f"Failed to create MongoDB client: {e}",
            code="CLIENT_INIT_FAILED",
            suggestion="Check MONGO_URI in your .env file",
        )
    logger.debug("MongoDB client created")
    return client


def ping(client: MongoClient) -> dict[str, Any]:
    """Run the ping admin command. Raises the driver's error when unreachable."""
    return client.admin.command("ping")
