"""Aggregate application use cases."""

from .notifications import (
    count_unread_for_type,
    get_max_notification_id,
    get_notification_totals,
    list_notifications,
    list_recent_notification_ids,
)

__all__ = [
    "count_unread_for_type",
    "get_max_notification_id",
    "get_notification_totals",
    "list_notifications",
    "list_recent_notification_ids",
]
