"""SQLAlchemy models for topics and private message allow-lists."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, func

from inbox.infrastructure.database import Base

ARCHETYPE_REGULAR = "regular"
ARCHETYPE_PRIVATE_MESSAGE = "private_message"


class TopicModel(Base):
    """Discussion thread that notifications may point at."""

    __tablename__ = "topic"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    category_id = Column(Integer, ForeignKey("category.id"), nullable=True, index=True)
    archetype = Column(String(30), nullable=False, default=ARCHETYPE_REGULAR)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    deleted_at = Column(DateTime, nullable=True)


class TopicAllowedUserModel(Base):
    """User explicitly allowed on a private message."""

    __tablename__ = "topic_allowed_user"
    __table_args__ = (UniqueConstraint("topic_id", "user_id"),)

    id = Column(Integer, primary_key=True)
    topic_id = Column(
        Integer, ForeignKey("topic.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )


class TopicAllowedGroupModel(Base):
    """Group whose members are allowed on a private message."""

    __tablename__ = "topic_allowed_group"
    __table_args__ = (UniqueConstraint("topic_id", "group_id"),)

    id = Column(Integer, primary_key=True)
    topic_id = Column(
        Integer, ForeignKey("topic.id", ondelete="CASCADE"), nullable=False, index=True
    )
    group_id = Column(
        Integer, ForeignKey("group.id", ondelete="CASCADE"), nullable=False, index=True
    )


__all__ = [
    "ARCHETYPE_PRIVATE_MESSAGE",
    "ARCHETYPE_REGULAR",
    "TopicAllowedGroupModel",
    "TopicAllowedUserModel",
    "TopicModel",
]
