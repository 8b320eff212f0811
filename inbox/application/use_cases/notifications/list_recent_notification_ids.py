"""Use case for listing recent notification ids with their read state."""

from sqlalchemy.orm import Session

from inbox.domain.entities import User
from inbox.infrastructure.queries import RECENT_LIMIT, NotificationQuery


def list_recent_notification_ids(
    session: Session, *, current_user: User, limit: int = RECENT_LIMIT
) -> list[tuple[int, bool]]:
    """Return ``(id, read)`` pairs with unread high priority entries first."""

    return NotificationQuery(session, user=current_user).recent_ids_with_read_status(
        limit=limit
    )
