from __future__ import annotations

from datetime import datetime
from typing import Any

from bson import ObjectId


def serialize_doc(doc: Any) -> Any:
    """Recursively convert MongoDB docs into JSON-serializable structures.

    Keys are kept as stored, so `_id` stays `_id` and a document's own `id`
    field is never shadowed.
    """
    if doc is None:
        return None

    if isinstance(doc, ObjectId):
        return str(doc)

    if isinstance(doc, datetime):
        return doc.isoformat()

    if isinstance(doc, list):
        return [serialize_doc(x) for x in doc]

    if isinstance(doc, dict):
        return {k: serialize_doc(v) for k, v in doc.items()}

    return doc


def to_object_id(id_str: str) -> ObjectId:
    # Raises bson.errors.InvalidId for malformed input
    return ObjectId(id_str)


def insert_ack(result: Any) -> dict[str, Any]:
    return {"acknowledged": bool(result.acknowledged), "insertedId": serialize_doc(result.inserted_id)}


def delete_ack(result: Any) -> dict[str, Any]:
    return {"acknowledged": bool(result.acknowledged), "deletedCount": int(result.deleted_count)}
