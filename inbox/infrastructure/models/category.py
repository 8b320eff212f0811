"""SQLAlchemy models for categories and their group grants."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.sql import expression

from inbox.infrastructure.database import Base


class CategoryModel(Base):
    """Database representation of a topic category."""

    __tablename__ = "category"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    read_restricted = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )


class CategoryGroupModel(Base):
    """Grants a read-restricted category to the members of a group."""

    __tablename__ = "category_group"
    __table_args__ = (UniqueConstraint("category_id", "group_id"),)

    id = Column(Integer, primary_key=True)
    category_id = Column(
        Integer, ForeignKey("category.id", ondelete="CASCADE"), nullable=False, index=True
    )
    group_id = Column(
        Integer, ForeignKey("group.id", ondelete="CASCADE"), nullable=False, index=True
    )


__all__ = ["CategoryModel", "CategoryGroupModel"]
