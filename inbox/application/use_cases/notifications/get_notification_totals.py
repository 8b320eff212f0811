"""Use case for computing the counters shown in notification badges."""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from inbox.domain.entities import User
from inbox.infrastructure.queries import NotificationQuery


@dataclass
class NotificationTotals:
    """Unread counters and aggregates for a single user."""

    total: int
    unread: int
    unread_high_priority: int
    unread_low_priority: int
    new_personal_messages: int
    max_id: int | None
    seen_notification_id: int | None
    grouped_unread: dict[int, int] = field(default_factory=dict)


def get_notification_totals(session: Session, *, current_user: User) -> NotificationTotals:
    """Return every counter computed from one shared visibility predicate."""

    query = NotificationQuery(session, user=current_user)
    return NotificationTotals(
        total=query.total_count(),
        unread=query.unread_count(),
        unread_high_priority=query.unread_high_priority_count(),
        unread_low_priority=query.unread_low_priority_count(),
        new_personal_messages=query.new_personal_messages_count(),
        max_id=query.max_id(),
        seen_notification_id=current_user.seen_notification_id,
        grouped_unread=query.grouped_unread_counts(),
    )
