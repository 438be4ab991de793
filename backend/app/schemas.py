from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class _OpenDocument(BaseModel):
    """Request body accepted as-is; declared fields are hints, not requirements."""

    model_config = ConfigDict(extra="allow")

    def to_document(self) -> dict[str, Any]:
        document = self.model_dump(exclude_unset=True)
        document.update(self.model_extra or {})
        return document


class TokenRequest(_OpenDocument):
    email: Optional[Any] = None


class BookingIn(_OpenDocument):
    email: Optional[Any] = None
    room_id: Optional[Any] = None


class ReviewIn(_OpenDocument):
    id: Optional[Any] = None


class SuccessOut(BaseModel):
    success: bool = True


class InsertAck(BaseModel):
    acknowledged: bool
    insertedId: str


class DeleteAck(BaseModel):
    acknowledged: bool
    deletedCount: int
