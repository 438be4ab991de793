from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Response

from app import config
from app.auth import create_access_token
from app.schemas import SuccessOut, TokenRequest

logger = logging.getLogger("auth")

router = APIRouter(tags=["auth"])


@router.post("/jwt", response_model=SuccessOut)
async def issue_token(payload: TokenRequest, response: Response):
    """Sign the posted user object and set it as the `token` cookie."""
    user = payload.to_document()
    logger.info("Issuing token for %s", user.get("email"))

    token = create_access_token(user)
    response.set_cookie(
        config.TOKEN_COOKIE,
        token,
        httponly=True,
        secure=False,
    )
    return SuccessOut()


@router.post("/logout", response_model=SuccessOut)
async def logout(response: Response, user: Optional[dict[str, Any]] = Body(default=None)):
    logger.info("logging out %s", user)
    response.delete_cookie(config.TOKEN_COOKIE, httponly=True, secure=False)
    return SuccessOut()
