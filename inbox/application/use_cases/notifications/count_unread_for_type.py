"""Use case for counting unread notifications of a single type."""

from datetime import datetime

from sqlalchemy.orm import Session

from inbox.domain.entities import User
from inbox.infrastructure.queries import NotificationQuery


def count_unread_for_type(
    session: Session,
    *,
    current_user: User,
    notification_type: int,
    since: datetime | None = None,
) -> int:
    query = NotificationQuery(session, user=current_user)
    return query.unread_count_for_type(notification_type, since=since)
