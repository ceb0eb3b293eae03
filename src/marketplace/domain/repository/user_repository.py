"""Abstract repository for User aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from marketplace.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    def get_by_identity_id(self, identity_id: str) -> User | None:
        """Resolve an external identity to the marketplace user, or None."""

    @abstractmethod
    def list_all(self) -> list[User]:
        """Return every user."""

    @abstractmethod
    def save(self, user: User) -> None:
        """Persist a new or updated user."""
