from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.server_api import ServerApi

from app import config

logger = logging.getLogger("store")


class StoreHandle:
    """Owns the process-wide Motor client and exposes the service collections."""

    def __init__(self, client: Any, db_name: str = config.DB_NAME) -> None:
        self.client = client
        self.db: AsyncIOMotorDatabase = client[db_name]

    @property
    def rooms(self) -> AsyncIOMotorCollection:
        return self.db[config.ROOMS_COLLECTION]

    @property
    def bookings(self) -> AsyncIOMotorCollection:
        return self.db[config.BOOKINGS_COLLECTION]

    @property
    def reviews(self) -> AsyncIOMotorCollection:
        return self.db[config.REVIEWS_COLLECTION]

    def collection(self, name: str) -> AsyncIOMotorCollection:
        return self.db[name]

    async def ping(self) -> bool:
        try:
            await self.client.admin.command("ping")
        except Exception:
            logger.exception("Store ping failed")
            return False
        return True

    def close(self) -> None:
        self.client.close()


def create_store() -> StoreHandle:
    client = AsyncIOMotorClient(
        config.mongo_url(),
        server_api=ServerApi("1", strict=True, deprecation_errors=True),
    )
    return StoreHandle(client, config.DB_NAME)


async def connect_mongo(app: Any) -> StoreHandle:
    store = getattr(app.state, "store", None)
    if store is not None:
        return store

    store = create_store()
    app.state.store = store
    if await store.ping():
        logger.info("Pinged your deployment. You successfully connected to MongoDB!")
    return store


async def close_mongo(app: Any) -> None:
    store = getattr(app.state, "store", None)
    if store is not None:
        store.close()
    app.state.store = None


def get_store(request: Request) -> StoreHandle:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Store is not connected")
    return store
