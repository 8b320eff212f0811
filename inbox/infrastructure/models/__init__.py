"""ORM models used by the application infrastructure."""

from .badge import BadgeModel
from .category import CategoryGroupModel, CategoryModel
from .group import GroupModel, GroupUserModel
from .notification import NotificationModel
from .topic import (
    ARCHETYPE_PRIVATE_MESSAGE,
    ARCHETYPE_REGULAR,
    TopicAllowedGroupModel,
    TopicAllowedUserModel,
    TopicModel,
)
from .user import UserModel

__all__ = [
    "ARCHETYPE_PRIVATE_MESSAGE",
    "ARCHETYPE_REGULAR",
    "BadgeModel",
    "CategoryGroupModel",
    "CategoryModel",
    "GroupModel",
    "GroupUserModel",
    "NotificationModel",
    "TopicAllowedGroupModel",
    "TopicAllowedUserModel",
    "TopicModel",
    "UserModel",
]
