from .notification import (
    MaxIdRead,
    NotificationRead,
    NotificationReadStatus,
    NotificationTotalsRead,
    UnreadCountRead,
)

__all__ = [
    "MaxIdRead",
    "NotificationRead",
    "NotificationReadStatus",
    "NotificationTotalsRead",
    "UnreadCountRead",
]
