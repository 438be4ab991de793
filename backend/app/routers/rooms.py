from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from app.db import StoreHandle, get_store
from app.errors import store_error
from app.utils import serialize_doc, to_object_id

logger = logging.getLogger("rooms")

router = APIRouter(prefix="/rooms", tags=["rooms"])

PRICE_FIELD = "price_per_night"

_SORT_DIRECTIONS = {"asc": ASCENDING, "desc": DESCENDING}


@router.get("")
async def list_rooms(
    sort: Optional[str] = Query(default=None, description="asc|desc by price per night"),
    store: StoreHandle = Depends(get_store),
) -> list[dict[str, Any]]:
    try:
        cursor = store.rooms.find()
        direction = _SORT_DIRECTIONS.get(sort or "")
        if direction is not None:
            cursor = cursor.sort(PRICE_FIELD, direction)
        docs = await cursor.to_list(length=None)
    except PyMongoError:
        logger.exception("Failed to list rooms")
        raise store_error()
    return serialize_doc(docs)


@router.get("/{room_id}")
async def get_room(room_id: str, store: StoreHandle = Depends(get_store)) -> Optional[dict[str, Any]]:
    # Malformed ids raise InvalidId and surface as a 500
    doc = await store.rooms.find_one({"_id": to_object_id(room_id)})
    return serialize_doc(doc)
