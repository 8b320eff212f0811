"""Domain entity representing a user."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum


class LikeNotificationFrequency(IntEnum):
    """How often a user wants to be told about likes on their posts."""

    ALWAYS = 1
    FIRST_TIME_AND_DAILY = 2
    FIRST_TIME = 3
    NEVER = 4


@dataclass
class User:
    """Core attributes describing a notification owner.

    ``secure_category_ids`` and ``group_ids`` are resolved by the persistence
    layer when the user is loaded, so visibility checks never query them lazily.
    """

    id: int
    username: str
    admin: bool = False
    moderator: bool = False
    active: bool = True
    seen_notification_id: int | None = None
    like_notification_frequency: int = LikeNotificationFrequency.ALWAYS
    secure_category_ids: frozenset[int] = field(default_factory=frozenset)
    group_ids: frozenset[int] = field(default_factory=frozenset)
    created_at: datetime | None = None

    def is_staff(self) -> bool:
        """Return ``True`` for administrators and moderators."""

        return self.admin or self.moderator

    def likes_notifications_disabled(self) -> bool:
        return self.like_notification_frequency == LikeNotificationFrequency.NEVER


__all__ = ["LikeNotificationFrequency", "User"]
