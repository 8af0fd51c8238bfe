# =============================================================================
# core/models/documents.py - Gateway Schemas
# =============================================================================
# These models define the API contract for collection and document operations:
# - CollectionTarget: Which database/collection a request addresses
# - MessageResponse: Output of collection create/drop
# - InsertOneResponse / InsertManyResponse: Insert acknowledgements
# - ModifyResultResponse: Output of the find-and-modify operations
#
# Documents themselves are opaque; they travel as plain dicts.
# =============================================================================

from typing import Any

from pydantic import BaseModel, Field


class CollectionTarget(BaseModel):
    """
    The (database, collection) pair a request addresses.

    Example:
        {"db_name": "app", "collection_name": "users"}
    """
    db_name: str = Field(..., min_length=1)
    collection_name: str = Field(..., min_length=1)


class MessageResponse(BaseModel):
    """Response for collection-level operations."""
    message: str = Field(..., examples=["Collection users created"])


class InsertOneResponse(BaseModel):
    """Acknowledgement of a single insert."""
    acknowledged: bool = True
    insertedId: str = Field(..., examples=["65a1f0c2e4b0a1b2c3d4e5f6"])


class InsertManyResponse(BaseModel):
    """Acknowledgement of a bulk insert."""
    acknowledged: bool = True
    insertedCount: int = Field(..., ge=0, examples=[2])
    insertedIds: list[str] = Field(default_factory=list)


class ModifyResultResponse(BaseModel):
    """
    Result of findByIdAndUpdate/Push/Delete.

    value is the matched document (None when nothing matched). ok is 1
    whenever the driver call itself succeeded.
    """
    value: dict[str, Any] | None = None
    ok: int = 1

    model_config = {
        "json_schema_extra": {
            "example": {
                "value": {"_id": "65a1f0c2e4b0a1b2c3d4e5f6", "name": "David", "age": 40},
                "ok": 1,
            }
        }
    }
