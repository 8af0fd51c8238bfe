# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Value coercion between JSON request payloads and BSON driver values.
# =============================================================================

import base64
import json
import re
from typing import Any

from bson import Binary, Code, DBRef, Decimal128, Int64, MaxKey, MinKey, ObjectId, Regex, Timestamp
from bson.errors import InvalidId
from fastapi.encoders import jsonable_encoder


class JsonParamError(ValueError):
    """Raised when a JSON-encoded parameter cannot be decoded."""

    def __init__(self, name: str, reason: str):
        super().__init__(f"Invalid JSON in {name} param: {reason}")
        self.name = name


# =============================================================================
# ObjectId Utilities
# =============================================================================

def to_object_id(value: Any) -> ObjectId:
    """
    Coerce an identifier from a request into an ObjectId.

    Accepts an ObjectId, a 24-character hex string, or the extended JSON
    form {"$oid": "<hex>"}.

    Raises:
        InvalidId: If the value is not a valid ObjectId
    """
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, dict) and set(value) == {"$oid"}:
        value = value["$oid"]
    if not isinstance(value, str):
        raise InvalidId(f"{value!r} is not a valid ObjectId, it must be a 24-character hex string")
    return ObjectId(value)


def normalize_filter(query_filter: dict[str, Any] | None) -> dict[str, Any]:
    """
    Copy a find filter, coercing a top-level _id to ObjectId.

    Operator documents like {"_id": {"$in": [...]}} are left as given.

    Example:
        normalize_filter({"_id": "65a1..."})  # {"_id": ObjectId("65a1...")}
        normalize_filter(None)                # {}
    """
    if not query_filter:
        return {}
    normalized = dict(query_filter)
    if "_id" in normalized:
        _id = normalized["_id"]
        is_operator = isinstance(_id, dict) and any(key.startswith("$") and key != "$oid" for key in _id)
        if not is_operator:
            normalized["_id"] = to_object_id(_id)
    return normalized


# =============================================================================
# Parameter Parsing
# =============================================================================

def parse_json_param(value: Any, name: str) -> Any:
    """
    Decode a parameter that may arrive JSON-encoded.

    Query string values are always strings, so GET /aggregate?pipeline=[...]
    carries the pipeline as JSON text. Values from a JSON body are
    returned unchanged.

    Raises:
        JsonParamError: If a string value is not valid JSON
    """
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise JsonParamError(name, e.msg)


def _to_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def paginate(page: Any, page_size: Any, default_page_size: int = 10) -> tuple[int, int]:
    """
    Turn page/pageSize request values into (skip, limit).

    Pages are zero-based. A missing or non-positive page size falls back
    to the default; a missing or negative page means the first page.

    Example:
        paginate("2", "5")    # (10, 5)
        paginate(None, None)  # (0, 10)
    """
    limit = _to_int(page_size)
    if limit is None or limit <= 0:
        limit = default_page_size

    page_number = _to_int(page)
    if page_number is None or page_number < 0:
        page_number = 0

    return page_number * limit, limit


# =============================================================================
# Serialization
# =============================================================================

_REGEX_FLAGS = (
    (re.IGNORECASE, "i"),
    (re.LOCALE, "l"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.UNICODE, "u"),
    (re.VERBOSE, "x"),
)


def _encode_bytes(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


def _encode_regex(value: Regex) -> dict[str, str]:
    options = "".join(letter for flag, letter in _REGEX_FLAGS if value.flags & flag)
    return {"pattern": value.pattern, "options": options}


def _encode_dbref(value: DBRef) -> dict[str, Any]:
    return encode_document(dict(value.as_doc()))


# Exact types are matched first, then isinstance in this order, so Binary
# must precede bytes.
BSON_ENCODERS = {
    ObjectId: str,
    Decimal128: str,
    Int64: int,
    Binary: _encode_bytes,
    bytes: _encode_bytes,
    Timestamp: lambda value: {"t": value.time, "i": value.inc},
    Regex: _encode_regex,
    DBRef: _encode_dbref,
    Code: str,
    MinKey: lambda value: {"$minKey": 1},
    MaxKey: lambda value: {"$maxKey": 1},
}


def encode_document(value: Any) -> Any:
    """
    Make driver output JSON-serializable.

    ObjectIds become hex strings, datetimes ISO-8601 strings and binary
    data (including UUIDs stored as Binary) base64 strings. Timestamps
    become {"t", "i"}, regexes {"pattern", "options"} and DBRefs their
    {"$ref", "$id"} document.
    Works on single documents, lists of documents, and scalars.
    """
    return jsonable_encoder(value, custom_encoder=BSON_ENCODERS)
