# =============================================================================
# core/services/collection_service.py - Collection and Document Operations
# =============================================================================
# Each method maps one gateway operation onto exactly one pymongo call.
# Separates HTTP concerns from the database driver.
#
# Driver failures are re-raised as DatabaseOperationError with the
# driver's message unmodified.
# =============================================================================

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator

from bson.errors import InvalidId
from pymongo import MongoClient, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from app.exceptions import DatabaseOperationError
from core.models.documents import (
    CollectionTarget,
    InsertManyResponse,
    InsertOneResponse,
    MessageResponse,
    ModifyResultResponse,
)
from lib.utils import encode_document, normalize_filter, paginate, to_object_id

logger = logging.getLogger(__name__)


@contextmanager
def _driver_errors(operation: str, target: CollectionTarget) -> Iterator[None]:
    """Translate driver errors raised inside the block."""
    try:
        yield
    except (PyMongoError, InvalidId) as e:
        logger.error(
            f"{operation} failed on {target.db_name}.{target.collection_name}: {e}"
        )
        raise DatabaseOperationError(str(e))


def _index_keys(index: Any) -> Any:
    """
    Normalize an index spec for create_index.

    {"name": 1, "age": -1} -> [("name", 1), ("age", -1)]
    [["name", 1]]          -> [("name", 1)]
    "name"                 -> "name"
    """
    if isinstance(index, dict):
        return list(index.items())
    if isinstance(index, list):
        return [tuple(key) if isinstance(key, list) else key for key in index]
    return index


class CollectionService:
    """
    Service for collection and document operations.

    Holds the shared MongoClient handed in by the application; it never
    creates or closes one itself.

    Example:
        service = CollectionService(client, timestamp_documents=True)
        result = service.insert_one(target, {"name": "Alice"})
    """

    def __init__(
        self,
        client: MongoClient,
        timestamp_documents: bool = True,
        default_page_size: int = 10,
    ):
        self.client = client
        self.timestamp_documents = timestamp_documents
        self.default_page_size = default_page_size

    def _collection(self, target: CollectionTarget) -> Collection:
        return self.client[target.db_name][target.collection_name]

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _stamped(self, document: dict[str, Any]) -> dict[str, Any]:
        if not self.timestamp_documents:
            return dict(document)
        now = self._now()
        return {**document, "createdAt": now, "updatedAt": now}

    # -------------------------------------------------------------------------
    # Collections
    # -------------------------------------------------------------------------

    def create_collection(
        self,
        target: CollectionTarget,
        index: Any = None,
        search_index: dict[str, Any] | None = None,
    ) -> MessageResponse:
        """
        Create a collection, optionally with a regular and a search index.

        Raises:
            DatabaseOperationError: If the collection exists or an index is rejected
        """
        with _driver_errors("create", target):
            db = self.client[target.db_name]
            db.create_collection(target.collection_name)
            collection = db[target.collection_name]
            if index:
                collection.create_index(_index_keys(index))
            if search_index:
                collection.create_search_index(search_index)

        logger.info(f"Created collection {target.db_name}.{target.collection_name}")
        return MessageResponse(message=f"Collection {target.collection_name} created")

    def drop_collection(self, target: CollectionTarget) -> MessageResponse:
        """Drop a collection. Dropping a missing collection is not an error."""
        with _driver_errors("delete", target):
            self._collection(target).drop()

        logger.info(f"Dropped collection {target.db_name}.{target.collection_name}")
        return MessageResponse(message=f"Collection {target.collection_name} deleted")

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def find(
        self,
        target: CollectionTarget,
        query_filter: dict[str, Any] | None = None,
        page: Any = None,
        page_size: Any = None,
    ) -> tuple[int, list[Any]]:
        """
        Find one page of documents.

        Args:
            target: Collection to query
            query_filter: MongoDB filter; a top-level _id is coerced to ObjectId
            page: Zero-based page number
            page_size: Documents per page (default from settings)

        Returns:
            Tuple of (total matching documents, encoded page of documents)
        """
        skip, limit = paginate(page, page_size, self.default_page_size)

        with _driver_errors("find", target):
            normalized = normalize_filter(query_filter)
            collection = self._collection(target)
            total = collection.count_documents(normalized)
            documents = list(collection.find(normalized).skip(skip).limit(limit))

        return total, encode_document(documents)

    def aggregate(self, target: CollectionTarget, pipeline: list[dict[str, Any]]) -> list[Any]:
        """Run an aggregation pipeline and return every resulting document."""
        with _driver_errors("aggregate", target):
            documents = list(self._collection(target).aggregate(pipeline))
        return encode_document(documents)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def insert_one(self, target: CollectionTarget, document: dict[str, Any]) -> InsertOneResponse:
        with _driver_errors("insert", target):
            result = self._collection(target).insert_one(self._stamped(document))

        return InsertOneResponse(
            acknowledged=result.acknowledged,
            insertedId=str(result.inserted_id),
        )

    def insert_many(
        self,
        target: CollectionTarget,
        documents: list[dict[str, Any]],
    ) -> InsertManyResponse:
        with _driver_errors("insertMany", target):
            result = self._collection(target).insert_many(
                [self._stamped(document) for document in documents]
            )

        return InsertManyResponse(
            acknowledged=result.acknowledged,
            insertedCount=len(result.inserted_ids),
            insertedIds=[str(_id) for _id in result.inserted_ids],
        )

    def find_by_id_and_update(
        self,
        target: CollectionTarget,
        document_id: Any,
        update: dict[str, Any],
        return_document: str = "before",
    ) -> ModifyResultResponse:
        """
        Set fields on one document by _id.

        The update is applied with $set. The returned value is the document
        as it was before the update unless return_document is "after".
        """
        fields = dict(update)
        if self.timestamp_documents:
            fields["updatedAt"] = self._now()

        with _driver_errors("findByIdAndUpdate", target):
            value = self._collection(target).find_one_and_update(
                {"_id": to_object_id(document_id)},
                {"$set": fields},
                return_document=(
                    ReturnDocument.AFTER if return_document == "after" else ReturnDocument.BEFORE
                ),
            )

        return ModifyResultResponse(value=encode_document(value))

    def find_by_id_and_push(
        self,
        target: CollectionTarget,
        document_id: Any,
        update: dict[str, Any],
        return_document: str = "before",
    ) -> ModifyResultResponse:
        """
        Apply raw update operators to one document by _id.

        Unlike find_by_id_and_update the update is passed through as given,
        e.g. {"$push": {"tags": "new"}}.
        """
        with _driver_errors("findByIdAndPush", target):
            value = self._collection(target).find_one_and_update(
                {"_id": to_object_id(document_id)},
                dict(update),
                return_document=(
                    ReturnDocument.AFTER if return_document == "after" else ReturnDocument.BEFORE
                ),
            )

        return ModifyResultResponse(value=encode_document(value))

    def find_by_id_and_delete(self, target: CollectionTarget, document_id: Any) -> ModifyResultResponse:
        with _driver_errors("findByIdAndDelete", target):
            value = self._collection(target).find_one_and_delete(
                {"_id": to_object_id(document_id)}
            )

        return ModifyResultResponse(value=encode_document(value))
