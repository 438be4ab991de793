from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from pymongo.errors import PyMongoError

from app import config
from app.auth import verify_booking_token, verify_token
from app.db import StoreHandle, get_store
from app.errors import forbidden, store_error
from app.schemas import BookingIn, DeleteAck, InsertAck
from app.utils import delete_ack, insert_ack, serialize_doc, to_object_id

logger = logging.getLogger("bookings")

router = APIRouter(tags=["bookings"])


async def _insert_booking(store: StoreHandle, payload: BookingIn) -> dict[str, Any]:
    booking = payload.to_document()
    logger.debug("Inserting booking %s", booking)
    try:
        result = await store.bookings.insert_one(booking)
    except PyMongoError:
        logger.exception("Failed to insert booking")
        raise store_error()
    return insert_ack(result)


@router.get("/bookings")
async def list_bookings(
    email: Optional[str] = Query(default=None),
    decoded: Optional[dict[str, Any]] = Depends(verify_booking_token),
    store: StoreHandle = Depends(get_store),
) -> Any:
    """List bookings, filtered by owner email when given.

    With BOOKINGS_REQUIRE_TOKEN the token's email must equal the queried
    email. With BOOKINGS_FIRST_MATCH_ONLY only the first match is returned
    (or null), dropping any further bookings of the same user.
    """
    if decoded is not None and decoded.get("email") != email:
        raise forbidden("forbidden access")

    query: dict[str, Any] = {}
    if email:
        query["email"] = email

    if config.BOOKINGS_FIRST_MATCH_ONLY:
        return serialize_doc(await store.bookings.find_one(query))

    docs = await store.bookings.find(query).to_list(length=None)
    return serialize_doc(docs)


@router.post("/bookings", response_model=InsertAck, dependencies=[Depends(verify_booking_token)])
async def create_booking(payload: BookingIn, store: StoreHandle = Depends(get_store)):
    return await _insert_booking(store, payload)


@router.post("/create-booking", response_model=InsertAck, dependencies=[Depends(verify_token)])
async def create_booking_guarded(payload: BookingIn, store: StoreHandle = Depends(get_store)):
    return await _insert_booking(store, payload)


@router.delete("/bookings/{booking_id}", response_model=DeleteAck, dependencies=[Depends(verify_booking_token)])
async def delete_booking(booking_id: str, store: StoreHandle = Depends(get_store)):
    """Delete by raw string `_id`.

    Store-generated ids are ObjectIds, so this matches only documents inserted
    with a string `_id`; the acknowledgement then reports zero deletions.
    """
    query = {"_id": booking_id}
    logger.info("delete booking %s", query)
    result = await store.bookings.delete_one(query)
    return delete_ack(result)


@router.delete("/cancel-booking/{booking_id}", response_model=DeleteAck, dependencies=[Depends(verify_token)])
async def cancel_booking(booking_id: str, store: StoreHandle = Depends(get_store)):
    result = await store.bookings.delete_one({"_id": to_object_id(booking_id)})
    logger.info("cancel booking %s deleted=%s", booking_id, result.deleted_count)
    return delete_ack(result)
