# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .collection_service import CollectionService

__all__ = [
    "CollectionService",
]
