"""SQLAlchemy model for badges."""

from sqlalchemy import Boolean, Column, Integer, String
from sqlalchemy.sql import expression

from inbox.infrastructure.database import Base


class BadgeModel(Base):
    """Badge that can be granted to users."""

    __tablename__ = "badge"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)
    enabled = Column(Boolean, nullable=False, default=True, server_default=expression.true())


__all__ = ["BadgeModel"]
