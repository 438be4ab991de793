from __future__ import annotations

import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from fastapi import Request

from app import config
from app.errors import forbidden, unauthorized

logger = logging.getLogger("auth")

JWT_ALGORITHM = "HS256"


def _token_secret() -> str:
    # Default only for dev/testing; production injects ACCESS_TOKEN_SECRET.
    return os.environ.get("ACCESS_TOKEN_SECRET", "dev_access_token_secret_change_me")


def create_access_token(claims: dict[str, Any], minutes: int = config.TOKEN_TTL_MINUTES) -> str:
    now = datetime.now(timezone.utc)
    payload = dict(claims)
    payload["iat"] = int(now.timestamp())
    payload["exp"] = int((now + timedelta(minutes=minutes)).timestamp())
    return jwt.encode(payload, _token_secret(), algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """Verify signature and expiry; any failure is a 403."""
    try:
        return jwt.decode(token, _token_secret(), algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired token")
        raise forbidden()
    except jwt.InvalidTokenError as exc:
        logger.info("Rejected invalid token: %s", exc)
        raise forbidden()


async def verify_token(request: Request) -> dict[str, Any]:
    token = request.cookies.get(config.TOKEN_COOKIE)
    if not token:
        raise unauthorized()

    decoded = decode_token(token)
    logger.debug("decoded %s", decoded)
    request.state.decoded = decoded
    return decoded


async def verify_booking_token(request: Request) -> Optional[dict[str, Any]]:
    """Booking-route guard, active only when BOOKINGS_REQUIRE_TOKEN is set."""
    if not config.BOOKINGS_REQUIRE_TOKEN:
        return None
    return await verify_token(request)
