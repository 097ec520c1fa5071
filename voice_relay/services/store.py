"""
Base class for user stores.
"""
from abc import ABC, abstractmethod
from typing import Optional

from voice_relay.models.user import UserInDB


class UserStore(ABC):
    """
    Abstract base class for the keyed user record store.

    Implementations must make ``create_user`` an atomic insert-if-absent on
    the email: a second record for the same email raises
    ``UserAlreadyExistsError`` and leaves the first untouched. Any other
    backend failure is raised as ``StoreError``.
    """

    @abstractmethod
    async def create_user(self, name: str, email: str, password_hash: str) -> UserInDB:
        """
        Create a new user.

        Args:
            name: Display name
            email: Normalized email, the unique lookup key
            password_hash: bcrypt hash of the password

        Returns:
            The stored UserInDB with its assigned id
        """
        pass

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[UserInDB]:
        """Get user by email."""
        pass

    @abstractmethod
    async def get_user_by_id(self, user_id: str) -> Optional[UserInDB]:
        """Get user by ID."""
        pass

    @abstractmethod
    async def update_password_hash(self, email: str, password_hash: str) -> bool:
        """Replace a user's password hash. Returns False if the user is gone."""
        pass

    async def close(self) -> None:
        """Release client resources."""
        return None
