"""Read use cases over the notifications a user may see."""

from .count_unread_for_type import count_unread_for_type
from .get_max_notification_id import get_max_notification_id
from .get_notification_totals import NotificationTotals, get_notification_totals
from .list_notifications import list_notifications
from .list_recent_notification_ids import list_recent_notification_ids

__all__ = [
    "NotificationTotals",
    "count_unread_for_type",
    "get_max_notification_id",
    "get_notification_totals",
    "list_notifications",
    "list_recent_notification_ids",
]
