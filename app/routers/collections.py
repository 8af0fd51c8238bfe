# =============================================================================
# app/routers/collections.py - Collection Endpoints
# =============================================================================
# Create and drop whole collections.
# =============================================================================

from fastapi import APIRouter, status

from app.dependencies import CollectionServiceDep, PayloadDep, TargetDep
from core.models.documents import MessageResponse

router = APIRouter()


@router.post("/create", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def create_collection(
    target: TargetDep,
    payload: PayloadDep,
    service: CollectionServiceDep,
):
    """
    Create a collection.

    Optional body fields:
    - index: key spec for a regular index, e.g. {"email": 1}
    - searchIndex: Atlas Search index definition
    """
    return service.create_collection(
        target,
        index=payload.get("index"),
        search_index=payload.get("searchIndex"),
    )


@router.delete("/delete", response_model=MessageResponse)
def drop_collection(target: TargetDep, service: CollectionServiceDep):
    """Drop a collection and all its documents."""
    return service.drop_collection(target)
