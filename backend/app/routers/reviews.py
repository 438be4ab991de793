from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from pymongo.errors import PyMongoError

from app import config
from app.db import StoreHandle, get_store
from app.errors import store_error
from app.schemas import InsertAck, ReviewIn
from app.utils import insert_ack, serialize_doc

logger = logging.getLogger("reviews")

router = APIRouter(tags=["reviews"])


@router.post("/reviews", response_model=InsertAck)
async def submit_review(payload: ReviewIn, store: StoreHandle = Depends(get_store)):
    review = payload.to_document()
    target = config.REVIEWS_TARGET_COLLECTION
    logger.debug("Inserting review into %s: %s", target, review)
    try:
        result = await store.collection(target).insert_one(review)
    except PyMongoError:
        logger.exception("Failed to insert review")
        raise store_error()
    return insert_ack(result)


@router.get("/review")
async def list_reviews(
    review_id: Optional[str] = Query(default=None, alias="id", description="Matches the review's own `id` field"),
    store: StoreHandle = Depends(get_store),
) -> list[dict[str, Any]]:
    query: dict[str, Any] = {}
    if review_id:
        query["id"] = review_id
    docs = await store.reviews.find(query).to_list(length=None)
    return serialize_doc(docs)
