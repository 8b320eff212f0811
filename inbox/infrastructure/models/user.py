"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func
from sqlalchemy.sql import expression

from inbox.domain.entities import LikeNotificationFrequency
from inbox.infrastructure.database import Base


class UserModel(Base):
    """Database representation of a notification owner."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(60), nullable=False, unique=True)
    admin = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    moderator = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    active = Column(Boolean, nullable=False, default=True, server_default=expression.true())
    seen_notification_id = Column(Integer, nullable=True)
    like_notification_frequency = Column(
        Integer,
        nullable=False,
        default=int(LikeNotificationFrequency.ALWAYS),
    )
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["UserModel"]
