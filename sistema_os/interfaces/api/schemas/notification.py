"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    type: str
    title: str
    message: str
    read: bool
    created_at: datetime | None = None
    data: dict[str, Any] = Field(default_factory=dict)


class NotificationFeedRead(BaseModel):
    """Preference-filtered notifications of the caller, newest first."""

    notifications: list[NotificationRead]
    unread_count: int


class AnnouncementCreate(BaseModel):
    """Payload used to publish a system announcement."""

    model_config = ConfigDict(extra="forbid")

    user_id: str | None = Field(
        default=None,
        description="Destinatário; quando omitido o anúncio vai para o próprio usuário",
    )
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    data: dict[str, Any] | None = None


class BulkActionRead(BaseModel):
    """Number of rows touched by a bulk action."""

    affected: int


class ScanFailureRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    order_number: str
    error: str


class ScanResultRead(BaseModel):
    """Outcome of a deadline scan."""

    model_config = ConfigDict(from_attributes=True)

    success: bool
    created_count: int = 0
    order_numbers: list[str] = Field(default_factory=list)
    errors: list[ScanFailureRead] = Field(default_factory=list)
    error: str | None = None


__all__ = [
    "AnnouncementCreate",
    "BulkActionRead",
    "NotificationFeedRead",
    "NotificationRead",
    "ScanFailureRead",
    "ScanResultRead",
]
