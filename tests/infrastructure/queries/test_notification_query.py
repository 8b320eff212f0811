"""Tests for the list and count operations of ``NotificationQuery``."""

from __future__ import annotations

from datetime import datetime

import pytest
from sqlalchemy.exc import OperationalError

from inbox.domain.entities import LikeNotificationFrequency, NotificationType
from inbox.infrastructure.queries import (
    NotificationOrder,
    NotificationQuery,
    NotificationQueryError,
    ReadFilter,
)


def _query(session, fab, user_model, **kwargs) -> NotificationQuery:
    return NotificationQuery(session, user=fab.viewer(user_model), **kwargs)


def _ids(notifications) -> list[int]:
    return [notification.id for notification in notifications]


class TestList:
    def test_read_filters(self, session, fab, owner):
        read = fab.notification(owner, read=True)
        unread = fab.notification(owner, read=False)
        query = _query(session, fab, owner)

        assert _ids(query.list(read_filter=ReadFilter.UNREAD)) == [unread.id]
        assert _ids(query.list(read_filter=ReadFilter.READ)) == [read.id]
        assert set(_ids(query.list())) == {read.id, unread.id}

    def test_types_filter(self, session, fab, owner):
        mention = fab.notification(owner, notification_type=NotificationType.MENTIONED)
        fab.notification(owner, notification_type=NotificationType.REPLIED)

        result = _query(session, fab, owner).list(types=[NotificationType.MENTIONED])

        assert _ids(result) == [mention.id]

    def test_chronological_order_and_pagination(self, session, fab, owner):
        created = [fab.notification(owner) for _ in range(5)]
        query = _query(session, fab, owner)

        newest_first = _ids(query.list(order=NotificationOrder.DESC))
        oldest_first = _ids(query.list(order=NotificationOrder.ASC))
        page = _ids(query.list(limit=2, offset=1, order=NotificationOrder.DESC))

        assert newest_first == [n.id for n in reversed(created)]
        assert oldest_first == [n.id for n in created]
        assert page == newest_first[1:3]

    def test_default_limit(self, session, fab, owner):
        for _ in range(35):
            fab.notification(owner)

        assert len(_query(session, fab, owner).list()) == 30

    def test_returns_plain_entities(self, session, fab, owner):
        fab.notification(owner, high_priority=True, data={"topic_title": "Hola"})

        (notification,) = _query(session, fab, owner).list()

        assert notification.user_id == owner.id
        assert notification.high_priority is True
        assert notification.read is False
        assert notification.data == {"topic_title": "Hola"}
        assert notification.created_at is not None
        assert notification.created_at.tzinfo is not None

    def test_repeated_calls_are_identical(self, session, fab, owner):
        for index in range(6):
            fab.notification(owner, read=index % 2 == 0, high_priority=index % 3 == 0)
        query = _query(session, fab, owner)

        first = query.list(order=NotificationOrder.PRIORITIZED)
        second = query.list(order=NotificationOrder.PRIORITIZED)

        assert first == second
        assert query.total_count() == query.total_count()


class TestPrioritizedList:
    @pytest.fixture()
    def tiers(self, fab, owner):
        return {
            "urgent": fab.notification(owner, high_priority=True),
            "unread": fab.notification(owner),
            "liked": fab.notification(owner, notification_type=NotificationType.LIKED),
            "read": fab.notification(owner, read=True),
            "read_urgent": fab.notification(owner, high_priority=True, read=True),
        }

    def test_unread_high_priority_comes_first(self, session, fab, owner, tiers):
        result = _query(session, fab, owner).list(order=NotificationOrder.PRIORITIZED)

        assert result[0].id == tiers["urgent"].id

    def test_likes_lose_unread_boost_without_type_filter(self, session, fab, owner, tiers):
        result = _query(session, fab, owner).list(order=NotificationOrder.PRIORITIZED)

        assert _ids(result) == [
            tiers["urgent"].id,
            tiers["unread"].id,
            tiers["read_urgent"].id,
            tiers["read"].id,
            tiers["liked"].id,
        ]

    def test_likes_excluded_when_disabled_and_no_type_filter(
        self, session, fab, owner, tiers
    ):
        owner.like_notification_frequency = int(LikeNotificationFrequency.NEVER)
        session.flush()

        result = _query(session, fab, owner).list(order=NotificationOrder.PRIORITIZED)

        assert _ids(result) == [
            tiers["urgent"].id,
            tiers["unread"].id,
            tiers["read_urgent"].id,
            tiers["read"].id,
        ]

    def test_explicit_types_give_likes_full_priority(self, session, fab, owner, tiers):
        owner.like_notification_frequency = int(LikeNotificationFrequency.NEVER)
        session.flush()

        result = _query(session, fab, owner).list(
            order=NotificationOrder.PRIORITIZED,
            types=[NotificationType.MENTIONED, NotificationType.LIKED],
        )

        assert _ids(result) == [
            tiers["urgent"].id,
            tiers["liked"].id,
            tiers["unread"].id,
            tiers["read_urgent"].id,
            tiers["read"].id,
        ]

    def test_chronological_listing_keeps_disabled_likes(self, session, fab, owner, tiers):
        owner.like_notification_frequency = int(LikeNotificationFrequency.NEVER)
        session.flush()

        result = _query(session, fab, owner).list(order=NotificationOrder.DESC)

        assert tiers["liked"].id in _ids(result)


class TestRecentIdsWithReadStatus:
    def test_returns_ids_with_read_state(self, session, fab, owner):
        read = fab.notification(owner, read=True)
        unread = fab.notification(owner, read=False)

        result = _query(session, fab, owner).recent_ids_with_read_status()

        assert (read.id, True) in result
        assert (unread.id, False) in result

    def test_each_half_is_limited_separately(self, session, fab, owner):
        urgent = [fab.notification(owner, high_priority=True) for _ in range(25)]
        for index in range(25):
            fab.notification(owner, read=index % 2 == 0)

        result = _query(session, fab, owner).recent_ids_with_read_status(limit=20)
        urgent_ids = {notification.id for notification in urgent}

        assert len(result) == 40
        first, second = result[:20], result[20:]
        assert [pair[0] for pair in first] == sorted(urgent_ids, reverse=True)[:20]
        assert all(pair[0] not in urgent_ids for pair in second)
        assert [pair[0] for pair in second] == sorted(
            (pair[0] for pair in second), reverse=True
        )

    def test_excludes_inaccessible_topics(self, session, fab, owner):
        topic = fab.topic(category=fab.category(read_restricted=True))
        fab.notification(owner, topic=topic)

        assert _query(session, fab, owner).recent_ids_with_read_status() == []


class TestCounts:
    def test_total_count(self, session, fab, owner):
        fab.notification(owner, read=True)
        fab.notification(owner, read=False)
        query = _query(session, fab, owner)

        assert query.total_count() == 2
        assert query.total_count(read_filter=ReadFilter.UNREAD) == 1
        assert query.total_count(read_filter=ReadFilter.READ) == 1

    def test_counts_are_zero_without_rows(self, session, fab, owner):
        query = _query(session, fab, owner)

        assert query.total_count() == 0
        assert query.unread_count() == 0
        assert query.unread_high_priority_count() == 0
        assert query.unread_low_priority_count() == 0
        assert query.unread_count_for_type(NotificationType.MENTIONED) == 0
        assert query.new_personal_messages_count() == 0
        assert query.grouped_unread_counts() == {}
        assert query.max_id() is None

    def test_unread_count_respects_seen_notification_id(self, session, fab, owner):
        old = fab.notification(owner)
        fab.notification(owner)
        fab.notification(owner, read=True)

        assert _query(session, fab, owner).unread_count() == 2

        owner.seen_notification_id = old.id
        session.flush()
        assert _query(session, fab, owner).unread_count() == 1

    def test_unread_count_is_capped(self, session, fab, owner, settings):
        capped = settings.model_copy(update={"max_unread_notifications": 2})
        for _ in range(4):
            fab.notification(owner)

        assert _query(session, fab, owner, settings=capped).unread_count() == 2

    def test_unread_count_excludes_inaccessible_topics(self, session, fab, owner):
        topic = fab.topic(category=fab.category(read_restricted=True))
        fab.notification(owner, topic=topic)

        assert _query(session, fab, owner).unread_count() == 0

    def test_priority_counts(self, session, fab, owner):
        fab.notification(owner, high_priority=True)
        fab.notification(owner, high_priority=False)
        fab.notification(owner, high_priority=True, read=True)
        query = _query(session, fab, owner)

        assert query.unread_high_priority_count() == 1
        assert query.unread_low_priority_count() == 1

    def test_only_low_priority_count_uses_high_water_mark(self, session, fab, owner):
        fab.notification(owner, high_priority=True)
        latest = fab.notification(owner, high_priority=False)
        owner.seen_notification_id = latest.id
        session.flush()
        query = _query(session, fab, owner)

        assert query.unread_high_priority_count() == 1
        assert query.unread_low_priority_count() == 0

    def test_low_priority_count_is_capped(self, session, fab, owner, settings):
        capped = settings.model_copy(update={"max_unread_notifications": 3})
        for _ in range(5):
            fab.notification(owner)

        assert _query(session, fab, owner, settings=capped).unread_low_priority_count() == 3

    def test_unread_count_for_type(self, session, fab, owner):
        fab.notification(owner, notification_type=NotificationType.MENTIONED)
        fab.notification(owner, notification_type=NotificationType.MENTIONED, read=True)
        fab.notification(owner, notification_type=NotificationType.REPLIED)

        query = _query(session, fab, owner)

        assert query.unread_count_for_type(NotificationType.MENTIONED) == 1

    def test_unread_count_for_type_since(self, session, fab, owner):
        fab.notification(owner, created_at=datetime(2024, 3, 1))
        fab.notification(owner, created_at=datetime(2024, 3, 3))

        count = _query(session, fab, owner).unread_count_for_type(
            NotificationType.MENTIONED, since=datetime(2024, 3, 2)
        )

        assert count == 1

    def test_new_personal_messages_count(self, session, fab, owner):
        pm = fab.private_message(allowed_users=(owner,))
        seen = fab.notification(owner, topic=pm, notification_type=NotificationType.PRIVATE_MESSAGE)
        fab.notification(owner, topic=pm, notification_type=NotificationType.PRIVATE_MESSAGE)
        fab.notification(owner, notification_type=NotificationType.MENTIONED)
        owner.seen_notification_id = seen.id
        session.flush()

        assert _query(session, fab, owner).new_personal_messages_count() == 1

    def test_max_id(self, session, fab, owner, other_user):
        first = fab.notification(owner)
        second = fab.notification(owner)
        fab.notification(other_user)
        query = _query(session, fab, owner)

        assert query.max_id() == second.id
        assert query.max_id(since_id=first.id) == second.id
        assert query.max_id(since_id=second.id) is None


class TestGroupedUnreadCounts:
    def test_counts_by_type(self, session, fab, owner):
        fab.notification(owner, notification_type=NotificationType.MENTIONED)
        fab.notification(owner, notification_type=NotificationType.MENTIONED)
        fab.notification(owner, notification_type=NotificationType.REPLIED)
        fab.notification(owner, notification_type=NotificationType.QUOTED, read=True)

        result = _query(session, fab, owner).grouped_unread_counts()

        assert result == {NotificationType.MENTIONED: 2, NotificationType.REPLIED: 1}

    def test_matches_per_type_counts(self, session, fab, owner):
        for notification_type in (1, 1, 2, 6, 6, 6):
            fab.notification(owner, notification_type=notification_type)
        query = _query(session, fab, owner)

        grouped = query.grouped_unread_counts()

        for notification_type, count in grouped.items():
            assert query.unread_count_for_type(notification_type) == count

    def test_respects_topic_visibility(self, session, fab, owner):
        topic = fab.topic(category=fab.category(read_restricted=True))
        fab.notification(owner, topic=topic)

        assert _query(session, fab, owner).grouped_unread_counts() == {}

    def test_each_type_is_capped_by_backlog(self, session, fab, owner, settings):
        capped = settings.model_copy(update={"max_unread_backlog": 2})
        for _ in range(3):
            fab.notification(owner, notification_type=NotificationType.MENTIONED)
        fab.notification(owner, notification_type=NotificationType.REPLIED)

        result = _query(session, fab, owner, settings=capped).grouped_unread_counts()

        assert result == {NotificationType.MENTIONED: 2, NotificationType.REPLIED: 1}


class TestQueryInstance:
    def test_visibility_is_built_once_per_instance(self, session, fab, owner):
        query = _query(session, fab, owner)

        assert query.visibility is query.visibility
        assert _query(session, fab, owner).visibility is not query.visibility

    def test_store_failures_raise_query_error(self, session, fab, owner, monkeypatch):
        query = _query(session, fab, owner)

        def failing_execute(*args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("database is locked"))

        monkeypatch.setattr(session, "execute", failing_execute)

        with pytest.raises(NotificationQueryError) as excinfo:
            query.unread_count()
        assert isinstance(excinfo.value.__cause__, OperationalError)
