"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    notification_type: int
    topic_id: int | None = None
    read: bool
    high_priority: bool
    data: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None


class NotificationReadStatus(BaseModel):
    """Identifier of a recent notification and whether it was read."""

    id: int
    read: bool


class NotificationTotalsRead(BaseModel):
    """Counters used to render unread badges."""

    model_config = ConfigDict(from_attributes=True)

    total: int
    unread: int
    unread_high_priority: int
    unread_low_priority: int
    new_personal_messages: int
    max_id: int | None = None
    seen_notification_id: int | None = None
    grouped_unread: dict[int, int] = Field(default_factory=dict)


class UnreadCountRead(BaseModel):
    notification_type: int
    count: int


class MaxIdRead(BaseModel):
    max_id: int | None = None


__all__ = [
    "MaxIdRead",
    "NotificationRead",
    "NotificationReadStatus",
    "NotificationTotalsRead",
    "UnreadCountRead",
]
