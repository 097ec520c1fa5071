"""
Firestore user store.
"""
import hashlib
import inspect
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from google.api_core.exceptions import AlreadyExists, GoogleAPICallError, NotFound
from google.auth.exceptions import GoogleAuthError
from google.cloud import firestore
from google.oauth2 import service_account

from voice_relay.config import Settings
from voice_relay.exceptions import StoreError, UserAlreadyExistsError
from voice_relay.models.user import UserInDB
from voice_relay.services.store import UserStore

logger = logging.getLogger(__name__)

STORE_ERRORS = (GoogleAPICallError, GoogleAuthError)


def email_document_id(email: str) -> str:
    """Document ID for a user record, derived from the normalized email.

    Keying documents by email lets Firestore's ``create`` enforce uniqueness.
    The email is hashed because document IDs may not contain ``/``.
    """
    return hashlib.sha256(email.strip().lower().encode("utf-8")).hexdigest()


class FirestoreUserStore(UserStore):
    """User store backed by a Firestore collection."""

    def __init__(self, client: firestore.AsyncClient, collection: str = "users"):
        self.db = client
        self.collection = collection

    @classmethod
    def from_settings(cls, settings: Settings) -> "FirestoreUserStore":
        """Build the Firestore client from settings."""
        if settings.google_application_credentials:
            credentials = service_account.Credentials.from_service_account_file(
                settings.google_application_credentials
            )
            client = firestore.AsyncClient(
                project=settings.gcp_project_id or None,
                credentials=credentials,
            )
        else:
            # Use default credentials (for local development with gcloud auth)
            client = firestore.AsyncClient(project=settings.gcp_project_id or None)
        return cls(client, collection=settings.users_collection)

    async def close(self) -> None:
        """Close the Firestore client's channels."""
        result = self.db.close()
        # close() is a coroutine on some client releases
        if inspect.isawaitable(result):
            await result

    def _doc(self, email: str):
        return self.db.collection(self.collection).document(email_document_id(email))

    async def create_user(self, name: str, email: str, password_hash: str) -> UserInDB:
        """Create a new user, failing if the email is taken."""
        user_data = {
            "id": str(uuid.uuid4()),
            "name": name,
            "email": email,
            "password_hash": password_hash,
            "created_at": datetime.now(timezone.utc),
            "password_changed_at": None,
        }

        try:
            await self._doc(email).create(user_data)
        except AlreadyExists as e:
            raise UserAlreadyExistsError(email) from e
        except STORE_ERRORS as e:
            logger.error("Firestore create failed for %s: %s", email, e)
            raise StoreError(str(e)) from e

        return UserInDB(**user_data)

    async def get_user_by_email(self, email: str) -> Optional[UserInDB]:
        """Get user by email."""
        try:
            doc = await self._doc(email).get()
        except STORE_ERRORS as e:
            logger.error("Firestore lookup failed for %s: %s", email, e)
            raise StoreError(str(e)) from e

        if doc.exists:
            return UserInDB(**doc.to_dict())
        return None

    async def get_user_by_id(self, user_id: str) -> Optional[UserInDB]:
        """Get user by ID."""
        query = self.db.collection(self.collection).where("id", "==", user_id).limit(1)
        try:
            async for doc in query.stream():
                return UserInDB(**doc.to_dict())
        except STORE_ERRORS as e:
            logger.error("Firestore lookup failed for user %s: %s", user_id, e)
            raise StoreError(str(e)) from e
        return None

    async def update_password_hash(self, email: str, password_hash: str) -> bool:
        """Replace the stored password hash."""
        try:
            await self._doc(email).update({
                "password_hash": password_hash,
                "password_changed_at": datetime.now(timezone.utc),
            })
        except NotFound:
            return False
        except STORE_ERRORS as e:
            logger.error("Firestore update failed for %s: %s", email, e)
            raise StoreError(str(e)) from e
        return True
