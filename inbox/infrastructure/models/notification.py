"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Index, Integer
from sqlalchemy.sql import expression

from inbox.infrastructure.database import Base
from inbox.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for user notifications.

    ``topic_id`` is deliberately not a foreign key: topics may be removed
    while their notifications stay behind, pointing at a missing row.
    """

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_user_read_type", "user_id", "read", "notification_type"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    notification_type = Column(Integer, nullable=False)
    topic_id = Column(Integer, nullable=True, index=True)
    read = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    high_priority = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["NotificationModel"]
