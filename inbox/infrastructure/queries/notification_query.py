"""Read operations over the notifications a user is allowed to see."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime
from functools import cached_property

from sqlalchemy import Select, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from inbox.config import Settings, get_settings
from inbox.domain.entities import Guardian, Notification, NotificationType, User
from inbox.infrastructure.models import NotificationModel
from inbox.utils import ensure_app_timezone

from .assembler import (
    DEFAULT_LIMIT,
    NotificationFilters,
    NotificationOrder,
    ReadFilter,
    assemble,
    normalize_types,
)
from .visibility import VisibilityPredicate, build_visibility_predicate

logger = logging.getLogger(__name__)

RECENT_LIMIT = 20


class NotificationQueryError(RuntimeError):
    """Raised when the store cannot answer a notification query."""


class NotificationQuery:
    """Answer list and count questions about one user's visible notifications.

    An instance is bound to a single ``(user, guardian)`` pair. The visibility
    predicate is derived on first use and shared by every operation called on
    the same instance; build a new instance whenever the viewer changes.
    """

    def __init__(
        self,
        session: Session,
        *,
        user: User,
        guardian: Guardian | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.session = session
        self.user = user
        self.guardian = guardian or Guardian(user)
        self.settings = settings or get_settings()

    @cached_property
    def visibility(self) -> VisibilityPredicate:
        return build_visibility_predicate(
            self.user, self.guardian, badges_enabled=self.settings.enable_badges
        )

    def list(
        self,
        *,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
        types: Iterable[int] | None = None,
        read_filter: ReadFilter | None = None,
        order: NotificationOrder = NotificationOrder.DESC,
    ) -> list[Notification]:
        """Return a page of visible notifications.

        With ``NotificationOrder.PRIORITIZED`` and no explicit ``types``, like
        notifications are dropped entirely for users who disabled them, and
        otherwise lose the unread boost. An explicit ``types`` filter turns
        both behaviours off.
        """

        filters = NotificationFilters(
            types=normalize_types(types),
            read_filter=read_filter,
            order=order,
            limit=limit,
            offset=offset,
        )
        if order is NotificationOrder.PRIORITIZED:
            if filters.types is None:
                filters = self._exclude_likes_if_disabled(filters)
                filters = replace(filters, deprioritized_types=_like_types())
            else:
                filters = replace(filters, deprioritized_types=())

        statement = assemble(self.visibility, filters)
        models = self._execute("list", statement).scalars().all()
        return [self._to_entity(model) for model in models]

    def recent_ids_with_read_status(
        self, *, limit: int = RECENT_LIMIT
    ) -> list[tuple[int, bool]]:
        """Return ``(id, read)`` pairs, unread high priority ones first.

        Each half is limited independently, so up to ``2 * limit`` pairs may
        be returned.
        """

        columns = (NotificationModel.id, NotificationModel.read)
        high_priority = assemble(
            self.visibility,
            NotificationFilters(read_filter=ReadFilter.UNREAD, high_priority=True),
            *columns,
        )
        rest = assemble(self.visibility, NotificationFilters(), *columns).where(
            or_(
                NotificationModel.high_priority.is_(False),
                NotificationModel.read.is_(True),
            )
        )

        pairs: list[tuple[int, bool]] = []
        for statement in (high_priority, rest):
            statement = statement.order_by(NotificationModel.id.desc()).limit(limit)
            rows = self._execute("recent_ids_with_read_status", statement).all()
            pairs.extend((row.id, bool(row.read)) for row in rows)
        return pairs

    def total_count(self, *, read_filter: ReadFilter | None = None) -> int:
        return self._count(NotificationFilters(read_filter=read_filter))

    def unread_count(self) -> int:
        """Unread notifications newer than the user's high-water mark."""

        return self._count(
            self._unread_since_seen(), cap=self.settings.max_unread_notifications
        )

    def unread_high_priority_count(self) -> int:
        # Ignores the high-water mark, unlike the low priority counter.
        return self._count(
            NotificationFilters(read_filter=ReadFilter.UNREAD, high_priority=True)
        )

    def unread_low_priority_count(self) -> int:
        return self._count(
            replace(self._unread_since_seen(), high_priority=False),
            cap=self.settings.max_unread_notifications,
        )

    def unread_count_for_type(
        self, notification_type: int, *, since: datetime | None = None
    ) -> int:
        return self._count(
            NotificationFilters(
                types=(int(notification_type),),
                read_filter=ReadFilter.UNREAD,
                since=since,
            )
        )

    def grouped_unread_counts(self) -> dict[int, int]:
        """Return ``{notification_type: unread_count}`` for types with unread items.

        Every type contributes at most ``max_unread_backlog`` rows.
        """

        position = (
            func.row_number()
            .over(
                partition_by=NotificationModel.notification_type,
                order_by=NotificationModel.id.desc(),
            )
            .label("position")
        )
        ranked = assemble(
            self.visibility,
            NotificationFilters(read_filter=ReadFilter.UNREAD),
            NotificationModel.notification_type,
            position,
        ).subquery()
        statement = (
            select(ranked.c.notification_type, func.count())
            .where(ranked.c.position <= self.settings.max_unread_backlog)
            .group_by(ranked.c.notification_type)
        )
        rows = self._execute("grouped_unread_counts", statement).all()
        return {int(notification_type): int(count) for notification_type, count in rows}

    def new_personal_messages_count(self) -> int:
        return self._count(
            replace(
                self._unread_since_seen(),
                types=(int(NotificationType.PRIVATE_MESSAGE),),
            )
        )

    def max_id(self, *, since_id: int | None = None) -> int | None:
        """Return the highest visible notification id, or ``None``."""

        statement = assemble(
            self.visibility,
            NotificationFilters(since_id=since_id),
            func.max(NotificationModel.id),
        )
        return self._execute("max_id", statement).scalar()

    def _unread_since_seen(self) -> NotificationFilters:
        return NotificationFilters(
            read_filter=ReadFilter.UNREAD,
            since_id=self.user.seen_notification_id or 0,
        )

    def _exclude_likes_if_disabled(
        self, filters: NotificationFilters
    ) -> NotificationFilters:
        if not self.user.likes_notifications_disabled():
            return filters
        return replace(filters, exclude_types=_like_types())

    def _count(self, filters: NotificationFilters, *, cap: int | None = None) -> int:
        """Count rows matching ``filters``, looking at no more than ``cap`` rows."""

        statement = assemble(self.visibility, filters, NotificationModel.id)
        if cap is not None:
            statement = statement.limit(cap)
        counted = select(func.count()).select_from(statement.subquery())
        return int(self._execute("count", counted).scalar() or 0)

    def _execute(self, operation: str, statement: Select):
        try:
            return self.session.execute(statement)
        except SQLAlchemyError as exc:
            logger.error(
                "Notification query '%s' failed for user %s: %s",
                operation,
                self.user.id,
                exc,
            )
            msg = f"No se pudo consultar las notificaciones ({operation})"
            raise NotificationQueryError(msg) from exc

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            notification_type=model.notification_type,
            topic_id=model.topic_id,
            read=bool(model.read),
            high_priority=bool(model.high_priority),
            data=model.data or {},
            created_at=ensure_app_timezone(model.created_at),
        )


def _like_types() -> tuple[int, ...]:
    return tuple(sorted(int(value) for value in NotificationType.like_types()))


__all__ = ["NotificationQuery", "NotificationQueryError", "RECENT_LIMIT"]
