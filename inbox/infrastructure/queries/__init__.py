"""Notification visibility rules and the read operations built on them."""

from .assembler import (
    DEFAULT_LIMIT,
    NotificationFilters,
    NotificationOrder,
    ReadFilter,
    assemble,
)
from .notification_query import RECENT_LIMIT, NotificationQuery, NotificationQueryError
from .visibility import VisibilityPredicate, build_visibility_predicate

__all__ = [
    "DEFAULT_LIMIT",
    "NotificationFilters",
    "NotificationOrder",
    "NotificationQuery",
    "NotificationQueryError",
    "RECENT_LIMIT",
    "ReadFilter",
    "VisibilityPredicate",
    "assemble",
    "build_visibility_predicate",
]
