"""SQLAlchemy models for groups and their members."""

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint

from inbox.infrastructure.database import Base


class GroupModel(Base):
    """Named set of users that can be granted access as a whole."""

    __tablename__ = "group"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(60), nullable=False, unique=True)


class GroupUserModel(Base):
    """Membership of a user in a group."""

    __tablename__ = "group_user"
    __table_args__ = (UniqueConstraint("group_id", "user_id"),)

    id = Column(Integer, primary_key=True)
    group_id = Column(
        Integer, ForeignKey("group.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )


__all__ = ["GroupModel", "GroupUserModel"]
