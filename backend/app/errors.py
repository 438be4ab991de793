from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from app.config import STORE_ERROR_MESSAGE


@dataclass
class AppError(Exception):
    status_code: int
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return error_response(self.code, self.message, self.details)


def error_response(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"message": message, "code": code}
    if details:
        payload["details"] = details
    return payload


def unauthorized() -> AppError:
    return AppError(401, "unauthorized", "unauthorized access")


def forbidden(message: str = "Forbidden access") -> AppError:
    return AppError(403, "forbidden", message)


def store_error() -> AppError:
    return AppError(500, "store_error", STORE_ERROR_MESSAGE)
