"""Use case for listing the notifications visible to a user."""

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from inbox.domain.entities import Notification, User
from inbox.infrastructure.queries import (
    DEFAULT_LIMIT,
    NotificationOrder,
    NotificationQuery,
    ReadFilter,
)


def list_notifications(
    session: Session,
    *,
    current_user: User,
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
    types: Iterable[int] | None = None,
    read_filter: ReadFilter | None = None,
    order: NotificationOrder = NotificationOrder.DESC,
) -> Sequence[Notification]:
    """Return a page of notifications respecting filters and ordering."""

    query = NotificationQuery(session, user=current_user)
    return query.list(
        limit=limit,
        offset=offset,
        types=types,
        read_filter=read_filter,
        order=order,
    )
