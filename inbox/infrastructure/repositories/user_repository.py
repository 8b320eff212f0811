"""Persistence layer for notification owners."""

from __future__ import annotations

from sqlalchemy.orm import Session

from inbox.domain.entities import User
from inbox.infrastructure.models import (
    CategoryGroupModel,
    CategoryModel,
    GroupUserModel,
    UserModel,
)


class UserRepository:
    """Load users together with the access data visibility checks rely on."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_username(self, username: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(UserModel.username == username)
            .first()
        )
        return self._to_entity(model) if model else None

    def list_group_ids(self, user_id: int) -> frozenset[int]:
        query = self.session.query(GroupUserModel.group_id).filter(
            GroupUserModel.user_id == user_id
        )
        return frozenset(group_id for (group_id,) in query.all())

    def list_secure_category_ids(
        self, user_id: int, *, admin: bool = False
    ) -> frozenset[int]:
        """Return the read-restricted categories ``user_id`` may read.

        Administrators hold every restricted category; other users hold the
        ones granted to a group they belong to.
        """

        query = self.session.query(CategoryModel.id).filter(
            CategoryModel.read_restricted.is_(True)
        )
        if not admin:
            query = (
                query.join(
                    CategoryGroupModel, CategoryGroupModel.category_id == CategoryModel.id
                )
                .join(
                    GroupUserModel, GroupUserModel.group_id == CategoryGroupModel.group_id
                )
                .filter(GroupUserModel.user_id == user_id)
                .distinct()
            )
        return frozenset(category_id for (category_id,) in query.all())

    def _to_entity(self, model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            admin=bool(model.admin),
            moderator=bool(model.moderator),
            active=bool(model.active),
            seen_notification_id=model.seen_notification_id,
            like_notification_frequency=model.like_notification_frequency,
            secure_category_ids=self.list_secure_category_ids(
                model.id, admin=bool(model.admin)
            ),
            group_ids=self.list_group_ids(model.id),
            created_at=model.created_at,
        )


__all__ = ["UserRepository"]
