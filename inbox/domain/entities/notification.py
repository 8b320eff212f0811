"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any


class NotificationType(IntEnum):
    """Closed set of notification kinds understood by the platform."""

    MENTIONED = 1
    REPLIED = 2
    QUOTED = 3
    EDITED = 4
    LIKED = 5
    PRIVATE_MESSAGE = 6
    INVITED_TO_PRIVATE_MESSAGE = 7
    INVITEE_ACCEPTED = 8
    POSTED = 9
    MOVED_POST = 10
    LINKED = 11
    GRANTED_BADGE = 12
    INVITED_TO_TOPIC = 13
    CUSTOM = 14
    GROUP_MENTIONED = 15
    GROUP_MESSAGE_SUMMARY = 16
    WATCHING_FIRST_POST = 17
    TOPIC_REMINDER = 18
    LIKED_CONSOLIDATED = 19
    POST_APPROVED = 20
    MEMBERSHIP_REQUEST_ACCEPTED = 22
    MEMBERSHIP_REQUEST_CONSOLIDATED = 23
    BOOKMARK_REMINDER = 24
    REACTION = 25
    CHAT_MENTION = 29
    CHAT_MESSAGE = 30
    CHAT_INVITATION = 31
    CHAT_GROUP_MENTION = 32
    CHAT_QUOTED = 33
    WATCHING_CATEGORY_OR_TAG = 36
    NEW_FEATURES = 37
    ADMIN_PROBLEMS = 38
    LINKED_CONSOLIDATED = 39

    @classmethod
    def like_types(cls) -> frozenset["NotificationType"]:
        """Return the types that represent a "like" on the user's content."""

        return frozenset({cls.LIKED, cls.LIKED_CONSOLIDATED, cls.REACTION})


@dataclass
class Notification:
    """Event record delivered to a specific user."""

    id: int | None
    user_id: int
    notification_type: int
    topic_id: int | None = None
    read: bool = False
    high_priority: bool = False
    data: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None


__all__ = ["Notification", "NotificationType"]
