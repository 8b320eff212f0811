"""Domain entities exposed by the application."""

from .guardian import Guardian
from .notification import Notification, NotificationType
from .user import LikeNotificationFrequency, User

__all__ = [
    "Guardian",
    "LikeNotificationFrequency",
    "Notification",
    "NotificationType",
    "User",
]
