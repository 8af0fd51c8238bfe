# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# - documents.py: Collection target and operation response schemas
# =============================================================================

from .documents import (
    CollectionTarget,
    InsertManyResponse,
    InsertOneResponse,
    MessageResponse,
    ModifyResultResponse,
)

__all__ = [
    "CollectionTarget",
    "InsertManyResponse",
    "InsertOneResponse",
    "MessageResponse",
    "ModifyResultResponse",
]
