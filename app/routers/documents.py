# =============================================================================
# app/routers/documents.py - Document Endpoints
# =============================================================================
# Query, insert, update and delete documents in a collection.
#
# Every route reads its fields from the merged query string + JSON body
# (see app.dependencies.get_payload), so GET /find?collection=users and
# POST /find {"collection": "users"} behave the same.
# =============================================================================

from typing import Any

from fastapi import APIRouter, Response, status

from app.dependencies import CollectionServiceDep, PayloadDep, TargetDep
from app.exceptions import InvalidParameterError, MissingParameterError
from core.models.documents import (
    InsertManyResponse,
    InsertOneResponse,
    ModifyResultResponse,
)
from lib.utils import JsonParamError, parse_json_param

router = APIRouter()

TOTAL_RECORDS_HEADER = "TotalRecords"


def _json_param(payload: dict[str, Any], name: str) -> Any:
    try:
        return parse_json_param(payload.get(name), name)
    except JsonParamError as e:
        raise InvalidParameterError(str(e))


def _return_document(payload: dict[str, Any]) -> str:
    value = payload.get("returnDocument", "before")
    if value not in ("before", "after"):
        raise InvalidParameterError("returnDocument must be 'before' or 'after'")
    return value


def _require_id_and_update(payload: dict[str, Any]) -> tuple[Any, dict[str, Any]]:
    document_id = payload.get("id")
    update = _json_param(payload, "update")
    if not document_id or update is None:
        raise MissingParameterError("Missing collection, id or update in body")
    if not isinstance(update, dict):
        raise InvalidParameterError("update must be an object")
    return document_id, update


# =============================================================================
# Reads
# =============================================================================

@router.api_route("/find", methods=["GET", "POST"])
def find_documents(
    target: TargetDep,
    payload: PayloadDep,
    service: CollectionServiceDep,
    response: Response,
) -> list[Any]:
    """
    Find documents with pagination.

    Fields:
    - filter: MongoDB filter (JSON-encoded in the query string for GET)
    - page: zero-based page number
    - pageSize: documents per page

    The total number of matches is returned in the TotalRecords header.
    """
    query_filter = _json_param(payload, "filter")
    if query_filter is not None and not isinstance(query_filter, dict):
        raise InvalidParameterError("filter must be an object")

    total, documents = service.find(
        target,
        query_filter=query_filter,
        page=payload.get("page"),
        page_size=payload.get("pageSize"),
    )

    response.headers[TOTAL_RECORDS_HEADER] = str(total)
    response.headers["Access-Control-Expose-Headers"] = TOTAL_RECORDS_HEADER
    return documents


@router.api_route("/aggregate", methods=["GET", "POST"])
def aggregate_documents(
    target: TargetDep,
    payload: PayloadDep,
    service: CollectionServiceDep,
) -> list[Any]:
    """Run an aggregation pipeline (JSON-encoded in the query string for GET)."""
    pipeline = _json_param(payload, "pipeline")
    if pipeline is None:
        raise MissingParameterError("Missing collection or pipeline param")
    if not isinstance(pipeline, list):
        raise InvalidParameterError("pipeline must be an array of stages")

    return service.aggregate(target, pipeline)


# =============================================================================
# Inserts
# =============================================================================

@router.post("/insert", response_model=InsertOneResponse, status_code=status.HTTP_201_CREATED)
def insert_document(
    target: TargetDep,
    payload: PayloadDep,
    service: CollectionServiceDep,
):
    """Insert one document. createdAt/updatedAt are added when timestamping is on."""
    document = payload.get("document")
    if document is None:
        raise MissingParameterError("Missing collection or document in body")
    if not isinstance(document, dict):
        raise InvalidParameterError("document must be an object")

    return service.insert_one(target, document)


@router.post("/insertMany", response_model=InsertManyResponse, status_code=status.HTTP_201_CREATED)
def insert_documents(
    target: TargetDep,
    payload: PayloadDep,
    service: CollectionServiceDep,
):
    """Insert a non-empty array of documents."""
    documents = payload.get("documents")
    if not isinstance(documents, list) or len(documents) == 0:
        raise MissingParameterError("Missing collection or documents in body")
    if not all(isinstance(document, dict) for document in documents):
        raise InvalidParameterError("documents must be an array of objects")

    return service.insert_many(target, documents)


# =============================================================================
# Find-and-modify
# =============================================================================

@router.api_route(
    "/findByIdAndUpdate",
    methods=["PUT", "POST"],
    response_model=ModifyResultResponse,
)
def find_by_id_and_update(
    target: TargetDep,
    payload: PayloadDep,
    service: CollectionServiceDep,
):
    """
    Set fields on the document with the given id.

    Body: {"id": "<ObjectId hex>", "update": {"field": value}}

    Returns the document as it was before the update unless
    returnDocument is "after".
    """
    document_id, update = _require_id_and_update(payload)
    return service.find_by_id_and_update(
        target,
        document_id,
        update,
        return_document=_return_document(payload),
    )


@router.api_route(
    "/findByIdAndPush",
    methods=["POST", "PATCH"],
    response_model=ModifyResultResponse,
)
def find_by_id_and_push(
    target: TargetDep,
    payload: PayloadDep,
    service: CollectionServiceDep,
):
    """
    Apply raw update operators to the document with the given id.

    Body: {"id": "<ObjectId hex>", "update": {"$push": {"tags": "new"}}}
    """
    document_id, update = _require_id_and_update(payload)
    return service.find_by_id_and_push(
        target,
        document_id,
        update,
        return_document=_return_document(payload),
    )


@router.delete("/findByIdAndDelete", response_model=ModifyResultResponse)
def find_by_id_and_delete(
    target: TargetDep,
    payload: PayloadDep,
    service: CollectionServiceDep,
):
    """Delete the document with the given id and return it."""
    document_id = payload.get("id")
    if not document_id:
        raise MissingParameterError("Missing collection or id in body")

    return service.find_by_id_and_delete(target, document_id)
