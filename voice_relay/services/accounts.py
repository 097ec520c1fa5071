"""Account management.

This module implements registration, login and password changes on top of a
``UserStore``. Password hashing and token signing are delegated to
``voice_relay.auth.utils``.
"""

import logging
from typing import Tuple

from fastapi.concurrency import run_in_threadpool

from voice_relay.auth.utils import create_access_token, hash_password, verify_password
from voice_relay.config import Settings
from voice_relay.exceptions import (
    InvalidCredentialsError,
    UserNotFoundError,
    ValidationError,
)
from voice_relay.models.user import UserInDB
from voice_relay.services.store import UserStore

logger = logging.getLogger(__name__)


def _require(**fields: str) -> None:
    missing = [name for name, value in fields.items() if not value or not value.strip()]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


class AccountService:
    """Registers users, verifies credentials and issues session tokens."""

    def __init__(self, store: UserStore, settings: Settings):
        """Initialize AccountService.

        Args:
            store: User record store.
            settings: Provides bcrypt cost and token signing configuration.
        """
        self.store = store
        self.settings = settings

    async def register(self, name: str, email: str, password: str) -> UserInDB:
        """Create a new user.

        Args:
            name: Display name.
            email: Normalized email address.
            password: Plain text password.

        Returns:
            The created user record.

        Raises:
            ValidationError: If any field is empty.
            UserAlreadyExistsError: If the email is already registered.
            StoreError: If the store fails.
        """
        _require(name=name, email=email, password=password)
        name = name.strip()

        password_hash = await run_in_threadpool(
            hash_password, password, rounds=self.settings.bcrypt_rounds
        )
        user = await self.store.create_user(name=name, email=email, password_hash=password_hash)

        logger.info("Registered user %s (%s)", user.id, email)
        return user

    async def authenticate(self, email: str, password: str) -> UserInDB:
        """Look up a user and check the password.

        Raises:
            UserNotFoundError: If no user has this email.
            InvalidCredentialsError: If the password does not match.
        """
        _require(email=email, password=password)

        user = await self.store.get_user_by_email(email)
        if user is None:
            logger.info("Authentication failed for %s: unknown email", email)
            raise UserNotFoundError(email)

        if not await run_in_threadpool(verify_password, password, user.password_hash):
            logger.info("Authentication failed for %s: wrong password", email)
            raise InvalidCredentialsError()

        return user

    async def login(self, email: str, password: str) -> Tuple[UserInDB, str]:
        """Authenticate and issue a signed session token.

        Returns:
            The user record and the encoded JWT.
        """
        user = await self.authenticate(email, password)
        token = create_access_token(
            data={"sub": user.id, "id": user.id, "email": user.email},
            settings=self.settings,
        )

        logger.info("User %s logged in", user.id)
        return user, token

    async def change_password(self, email: str, old_password: str, new_password: str) -> None:
        """Replace a user's password after verifying the current one.

        Nothing is written unless ``old_password`` matches.

        Raises:
            ValidationError: If any field is empty.
            UserNotFoundError: If no user has this email, including one
                removed between the check and the update.
            InvalidCredentialsError: If ``old_password`` does not match.
        """
        _require(email=email, oldPassword=old_password, newPassword=new_password)

        user = await self.authenticate(email, old_password)

        password_hash = await run_in_threadpool(
            hash_password, new_password, rounds=self.settings.bcrypt_rounds
        )
        updated = await self.store.update_password_hash(email, password_hash)
        if not updated:
            raise UserNotFoundError(email)

        logger.info("Password changed for user %s", user.id)
