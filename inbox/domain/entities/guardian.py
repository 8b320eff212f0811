"""Authorization context used when reading notifications."""

from __future__ import annotations

from dataclasses import dataclass

from .user import User


@dataclass(frozen=True)
class Guardian:
    """Answer permission questions on behalf of ``user``."""

    user: User

    def is_staff(self) -> bool:
        """Staff may still see notifications whose topic was soft-deleted."""

        return self.user.is_staff()


__all__ = ["Guardian"]
