from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).parent

# Load .env only if exists (development fallback)
env_path = ROOT_DIR / ".env"
if env_path.exists():
    load_dotenv(env_path)

from fastapi import Depends, FastAPI  # noqa: E402
from fastapi.responses import PlainTextResponse  # noqa: E402
from starlette.middleware.cors import CORSMiddleware  # noqa: E402

from app import config  # noqa: E402
from app.db import StoreHandle, close_mongo, connect_mongo, get_store  # noqa: E402
from app.exception_handlers import register_exception_handlers  # noqa: E402
from app.middleware.structured_logging_middleware import StructuredLoggingMiddleware  # noqa: E402
from app.routers.auth import router as auth_router  # noqa: E402
from app.routers.bookings import router as bookings_router  # noqa: E402
from app.routers.reviews import router as reviews_router  # noqa: E402
from app.routers.rooms import router as rooms_router  # noqa: E402

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("gobook-hotel")

app = FastAPI(title=config.APP_NAME, version=config.APP_VERSION)

# Starlette runs the last-added middleware first: logging wraps CORS.
app.add_middleware(
    CORSMiddleware,
    allow_credentials=True,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(StructuredLoggingMiddleware)

register_exception_handlers(app)

app.include_router(auth_router)
app.include_router(rooms_router)
app.include_router(bookings_router)
app.include_router(reviews_router)


@app.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "running..."


@app.get("/health")
async def health(store: StoreHandle = Depends(get_store)) -> dict[str, Any]:
    """Health check with store ping"""
    ok = await store.ping()
    return {"ok": ok, "service": config.SERVICE_NAME}


@app.on_event("startup")
async def _startup() -> None:
    await connect_mongo(app)
    logger.info("Startup complete")


@app.on_event("shutdown")
async def _shutdown() -> None:
    await close_mongo(app)
    logger.info("Shutdown complete")


if __name__ == "__main__":
    import uvicorn

    logger.info("GoBook Hotel API listening on port %s", config.PORT)
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
