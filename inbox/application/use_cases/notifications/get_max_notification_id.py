"""Use case for reading a user's notification high-water mark candidate."""

from sqlalchemy.orm import Session

from inbox.domain.entities import User
from inbox.infrastructure.queries import NotificationQuery


def get_max_notification_id(
    session: Session, *, current_user: User, since_id: int | None = None
) -> int | None:
    """Return the newest visible notification id, optionally above ``since_id``."""

    return NotificationQuery(session, user=current_user).max_id(since_id=since_id)
