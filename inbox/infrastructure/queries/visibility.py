"""Per-user visibility rules for notifications.

A notification is visible to its owner when the topic it points at (if any)
is still readable by that owner and, for badge grants, when the granted badge
is still active. The rules are expressed once as a SQLAlchemy boolean
criterion over ``notification LEFT JOIN topic LEFT JOIN category`` so every
read operation filters through exactly the same conditions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import Select, and_, exists, or_, select, true
from sqlalchemy.sql.elements import ColumnElement

from inbox.domain.entities import Guardian, NotificationType, User
from inbox.infrastructure.models import (
    ARCHETYPE_PRIVATE_MESSAGE,
    ARCHETYPE_REGULAR,
    BadgeModel,
    CategoryModel,
    NotificationModel,
    TopicAllowedGroupModel,
    TopicAllowedUserModel,
    TopicModel,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VisibilityPredicate:
    """Immutable filter selecting the notifications ``user_id`` may observe."""

    user_id: int
    criterion: ColumnElement[bool]

    def scope(self, *columns) -> Select:
        """Return a ``SELECT`` of ``columns`` restricted to visible notifications.

        Without explicit columns the full :class:`NotificationModel` row is
        selected.
        """

        selected = columns or (NotificationModel,)
        return (
            select(*selected)
            .select_from(NotificationModel)
            .outerjoin(TopicModel, TopicModel.id == NotificationModel.topic_id)
            .outerjoin(CategoryModel, CategoryModel.id == TopicModel.category_id)
            .where(NotificationModel.user_id == self.user_id)
            .where(self.criterion)
        )


def build_visibility_predicate(
    user: User, guardian: Guardian | None = None, *, badges_enabled: bool = True
) -> VisibilityPredicate:
    """Derive the visibility predicate for ``user`` under ``guardian``."""

    guardian = guardian or Guardian(user)
    staff = guardian.is_staff()
    criterion = and_(
        _topic_visibility(user, staff=staff),
        _badge_visibility(badges_enabled),
    )
    logger.debug(
        "Built notification visibility for user %s (staff=%s, secure_categories=%d, groups=%d)",
        user.id,
        staff,
        len(user.secure_category_ids),
        len(user.group_ids),
    )
    return VisibilityPredicate(user_id=user.id, criterion=criterion)


def _topic_visibility(user: User, *, staff: bool) -> ColumnElement[bool]:
    # A dangling topic_id (hard-deleted topic) leaves TopicModel.id NULL after
    # the outer join, so such notifications never match the second branch.
    not_trashed = true() if staff else TopicModel.deleted_at.is_(None)
    return or_(
        NotificationModel.topic_id.is_(None),
        and_(
            TopicModel.id.is_not(None),
            not_trashed,
            or_(_regular_topic(user), _private_message(user)),
        ),
    )


def _regular_topic(user: User) -> ColumnElement[bool]:
    secure_ids = sorted(user.secure_category_ids)
    if secure_ids:
        category_access = or_(
            CategoryModel.read_restricted.is_(False),
            CategoryModel.id.in_(secure_ids),
        )
    else:
        category_access = CategoryModel.read_restricted.is_(False)
    return and_(
        TopicModel.archetype == ARCHETYPE_REGULAR,
        or_(CategoryModel.id.is_(None), category_access),
    )


def _private_message(user: User) -> ColumnElement[bool]:
    allowed = [
        TopicModel.id.in_(
            select(TopicAllowedUserModel.topic_id).where(
                TopicAllowedUserModel.user_id == user.id
            )
        )
    ]
    group_ids = sorted(user.group_ids)
    if group_ids:
        allowed.append(
            TopicModel.id.in_(
                select(TopicAllowedGroupModel.topic_id).where(
                    TopicAllowedGroupModel.group_id.in_(group_ids)
                )
            )
        )
    return and_(TopicModel.archetype == ARCHETYPE_PRIVATE_MESSAGE, or_(*allowed))


def _badge_visibility(badges_enabled: bool) -> ColumnElement[bool]:
    not_a_badge = NotificationModel.notification_type != int(NotificationType.GRANTED_BADGE)
    if not badges_enabled:
        return not_a_badge

    badge_id = NotificationModel.data["badge_id"].as_integer()
    badge_active = exists().where(
        BadgeModel.id == badge_id,
        BadgeModel.enabled.is_(True),
    )
    return or_(not_a_badge, badge_active)


__all__ = ["VisibilityPredicate", "build_visibility_predicate"]
