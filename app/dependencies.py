# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# The MongoDB client and settings live on app.state; they are set once by
# create_app() and never looked up from module globals.
# =============================================================================

import json
from typing import Annotated, Any

from fastapi import Depends, Request
from pymongo import MongoClient

from app.auth import require_token
from app.config import Settings
from app.exceptions import InvalidParameterError, MissingTargetError
from core.models.documents import CollectionTarget
from core.services.collection_service import CollectionService


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_mongo_client(request: Request) -> MongoClient:
    """Shared MongoClient owned by the application."""
    return request.app.state.mongo_client


async def get_payload(request: Request) -> dict[str, Any]:
    """
    Request parameters as one dict.

    Query parameters first, then the JSON body on top, so GET and POST
    variants of the same route read their fields the same way.

    Raises:
        InvalidParameterError: If the body is not a JSON object
    """
    payload: dict[str, Any] = dict(request.query_params)

    body = await request.body()
    if body.strip():
        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise InvalidParameterError(f"Invalid JSON body: {e.msg}")
        if not isinstance(data, dict):
            raise InvalidParameterError("Request body must be a JSON object")
        payload.update(data)

    return payload


def get_target(
    _token: Annotated[str, Depends(require_token)],
    payload: Annotated[dict[str, Any], Depends(get_payload)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> CollectionTarget:
    """
    Resolve the database and collection a request addresses.

    Runs after the token check. collectionName may also be sent as
    collection; dbName falls back to the configured default database.

    Raises:
        MissingTargetError: 401 if either name cannot be resolved
    """
    collection_name = payload.get("collectionName") or payload.get("collection")
    db_name = payload.get("dbName") or settings.default_database

    if not isinstance(collection_name, str) or not isinstance(db_name, str):
        raise MissingTargetError()

    return CollectionTarget(db_name=db_name, collection_name=collection_name)


def get_collection_service(
    client: Annotated[MongoClient, Depends(get_mongo_client)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> CollectionService:
    return CollectionService(
        client,
        timestamp_documents=settings.TIMESTAMP_DOCUMENTS,
        default_page_size=settings.DEFAULT_PAGE_SIZE,
    )


# Type aliases for dependency injection
PayloadDep = Annotated[dict[str, Any], Depends(get_payload)]
TargetDep = Annotated[CollectionTarget, Depends(get_target)]
CollectionServiceDep = Annotated[CollectionService, Depends(get_collection_service)]
