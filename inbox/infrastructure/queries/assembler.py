"""Turn a visibility predicate plus caller filters into a concrete ``SELECT``."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from sqlalchemy import Select, and_, case
from sqlalchemy.sql.elements import ColumnElement

from inbox.infrastructure.models import NotificationModel
from inbox.utils import ensure_app_naive_datetime

from .visibility import VisibilityPredicate

DEFAULT_LIMIT = 30


class ReadFilter(str, Enum):
    """Restrict results by read state."""

    READ = "read"
    UNREAD = "unread"


class NotificationOrder(str, Enum):
    """Ordering modes supported when listing notifications."""

    ASC = "asc"
    DESC = "desc"
    PRIORITIZED = "prioritized"


@dataclass(frozen=True)
class NotificationFilters:
    """Optional, independently composable restrictions on the visible scope.

    ``limit`` and ``offset`` are left unset by default so counting operations
    can reuse the same filters without paginating.
    """

    types: tuple[int, ...] | None = None
    exclude_types: tuple[int, ...] | None = None
    read_filter: ReadFilter | None = None
    high_priority: bool | None = None
    since: datetime | None = None
    since_id: int | None = None
    order: NotificationOrder | None = None
    deprioritized_types: tuple[int, ...] = ()
    limit: int | None = None
    offset: int | None = None


def normalize_types(types: Iterable[int] | None) -> tuple[int, ...] | None:
    """Return ``types`` as a sorted tuple, or ``None`` when nothing was given."""

    if types is None:
        return None
    normalized = tuple(sorted({int(value) for value in types}))
    return normalized or None


def assemble(
    predicate: VisibilityPredicate, filters: NotificationFilters, *columns
) -> Select:
    """Return the statement fetching ``columns`` for ``filters``."""

    statement = predicate.scope(*columns)

    if filters.types:
        statement = statement.where(NotificationModel.notification_type.in_(filters.types))
    if filters.exclude_types:
        statement = statement.where(
            NotificationModel.notification_type.not_in(filters.exclude_types)
        )
    statement = apply_read_filter(statement, filters.read_filter)
    if filters.high_priority is not None:
        statement = statement.where(
            NotificationModel.high_priority.is_(filters.high_priority)
        )
    if filters.since is not None:
        statement = statement.where(
            NotificationModel.created_at > ensure_app_naive_datetime(filters.since)
        )
    if filters.since_id is not None:
        statement = statement.where(NotificationModel.id > filters.since_id)

    if filters.order is NotificationOrder.PRIORITIZED:
        statement = statement.order_by(*priority_ordering(filters.deprioritized_types))
    elif filters.order is NotificationOrder.ASC:
        statement = statement.order_by(
            NotificationModel.created_at.asc(), NotificationModel.id.asc()
        )
    elif filters.order is NotificationOrder.DESC:
        statement = statement.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )

    if filters.offset:
        statement = statement.offset(filters.offset)
    if filters.limit is not None:
        statement = statement.limit(filters.limit)
    return statement


def apply_read_filter(statement: Select, read_filter: ReadFilter | None) -> Select:
    if read_filter is ReadFilter.READ:
        return statement.where(NotificationModel.read.is_(True))
    if read_filter is ReadFilter.UNREAD:
        return statement.where(NotificationModel.read.is_(False))
    return statement


def priority_ordering(deprioritized_types: tuple[int, ...] = ()) -> tuple:
    """Unread high priority first, then unread, then most recent.

    Boolean expressions are wrapped in ``CASE`` so the ordering also works on
    backends without a native boolean type.
    """

    unread = NotificationModel.read.is_(False)
    urgent = case((and_(NotificationModel.high_priority.is_(True), unread), 1), else_=0)
    return (
        urgent.desc(),
        _unread_ordering(unread, deprioritized_types),
        NotificationModel.created_at.desc(),
        NotificationModel.id.desc(),
    )


def _unread_ordering(unread: ColumnElement[bool], deprioritized_types: tuple[int, ...]):
    if deprioritized_types:
        boosted = and_(
            unread, NotificationModel.notification_type.not_in(deprioritized_types)
        )
        return case((boosted, 1), else_=0).desc()
    return case((unread, 1), else_=0).desc()


__all__ = [
    "DEFAULT_LIMIT",
    "NotificationFilters",
    "NotificationOrder",
    "ReadFilter",
    "apply_read_filter",
    "assemble",
    "normalize_types",
    "priority_ordering",
]
