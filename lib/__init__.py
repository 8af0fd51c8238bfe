# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - mongo_client.py: MongoDB client construction and ping
# - utils.py: Value coercion (ObjectId, filters, pagination, JSON params)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.mongo_client import MongoClientError, create_mongo_client, ping
from lib.utils import (
    JsonParamError,
    encode_document,
    normalize_filter,
    paginate,
    parse_json_param,
    to_object_id,
)

__all__ = [
    # MongoDB
    "MongoClientError",
    "create_mongo_client",
    "ping",
    # Utils
    "JsonParamError",
    "encode_document",
    "normalize_filter",
    "paginate",
    "parse_json_param",
    "to_object_id",
]
