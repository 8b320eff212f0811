"""Shared fixtures: an in-memory database and factories for test data."""

from __future__ import annotations

import itertools
import os
from datetime import datetime, timedelta

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from inbox.config import get_settings
from inbox.domain.entities import NotificationType, User
from inbox.infrastructure.database import Base
from inbox.infrastructure.models import (
    ARCHETYPE_PRIVATE_MESSAGE,
    ARCHETYPE_REGULAR,
    BadgeModel,
    CategoryGroupModel,
    CategoryModel,
    GroupModel,
    GroupUserModel,
    NotificationModel,
    TopicAllowedGroupModel,
    TopicAllowedUserModel,
    TopicModel,
    UserModel,
)
from inbox.infrastructure.repositories import UserRepository

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


class Fabricator:
    """Create persisted rows with sensible defaults."""

    def __init__(self, session) -> None:
        self.session = session
        self._sequence = itertools.count(1)

    def _next(self) -> int:
        return next(self._sequence)

    def _save(self, model):
        self.session.add(model)
        self.session.flush()
        return model

    def user(self, **overrides) -> UserModel:
        values = {"username": f"user{self._next()}"}
        values.update(overrides)
        return self._save(UserModel(**values))

    def viewer(self, model: UserModel) -> User:
        """Load ``model`` as a domain user with its access data resolved."""

        self.session.flush()
        return UserRepository(self.session).get(model.id)

    def group(self, *members: UserModel, name: str | None = None) -> GroupModel:
        group = self._save(GroupModel(name=name or f"group{self._next()}"))
        for member in members:
            self._save(GroupUserModel(group_id=group.id, user_id=member.id))
        return group

    def category(
        self, *, read_restricted: bool = False, groups: tuple[GroupModel, ...] = ()
    ) -> CategoryModel:
        category = self._save(
            CategoryModel(name=f"category{self._next()}", read_restricted=read_restricted)
        )
        for group in groups:
            self._save(CategoryGroupModel(category_id=category.id, group_id=group.id))
        return category

    def topic(self, *, category: CategoryModel | None = None) -> TopicModel:
        return self._save(
            TopicModel(
                title=f"Topic {self._next()}",
                category_id=category.id if category else None,
                archetype=ARCHETYPE_REGULAR,
            )
        )

    def private_message(
        self,
        *,
        allowed_users: tuple[UserModel, ...] = (),
        allowed_groups: tuple[GroupModel, ...] = (),
    ) -> TopicModel:
        topic = self._save(
            TopicModel(title=f"PM {self._next()}", archetype=ARCHETYPE_PRIVATE_MESSAGE)
        )
        for user in allowed_users:
            self._save(TopicAllowedUserModel(topic_id=topic.id, user_id=user.id))
        for group in allowed_groups:
            self._save(TopicAllowedGroupModel(topic_id=topic.id, group_id=group.id))
        return topic

    def badge(self, *, enabled: bool = True, **overrides) -> BadgeModel:
        values = {"name": f"badge{self._next()}", "enabled": enabled}
        values.update(overrides)
        return self._save(BadgeModel(**values))

    def notification(
        self,
        user: UserModel,
        *,
        topic: TopicModel | None = None,
        notification_type: int = NotificationType.MENTIONED,
        **overrides,
    ) -> NotificationModel:
        sequence = self._next()
        values = {
            "user_id": user.id,
            "topic_id": topic.id if topic else None,
            "notification_type": int(notification_type),
            "read": False,
            "high_priority": False,
            "data": {},
            "created_at": BASE_TIME + timedelta(minutes=sequence),
        }
        values.update(overrides)
        return self._save(NotificationModel(**values))

    def badge_notification(self, user: UserModel, badge: BadgeModel) -> NotificationModel:
        return self.notification(
            user,
            notification_type=NotificationType.GRANTED_BADGE,
            data={"badge_id": badge.id, "badge_name": badge.name},
        )


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session(engine):
    session = sessionmaker(bind=engine, autoflush=True)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def fab(session) -> Fabricator:
    return Fabricator(session)


@pytest.fixture()
def settings():
    return get_settings()


@pytest.fixture()
def owner(fab) -> UserModel:
    return fab.user()


@pytest.fixture()
def other_user(fab) -> UserModel:
    return fab.user()
