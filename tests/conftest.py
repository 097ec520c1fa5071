import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from voice_relay.config import Settings
from voice_relay.exceptions import SynthesisError, UserAlreadyExistsError
from voice_relay.main import create_app
from voice_relay.models.user import UserInDB
from voice_relay.services.accounts import AccountService
from voice_relay.services.speech import SpeechSynthesizer
from voice_relay.services.store import UserStore

FAKE_MP3 = b"ID3\x03\x00fake-mp3-frames"


class InMemoryUserStore(UserStore):
    """UserStore double keyed by email."""

    def __init__(self):
        self.users: Dict[str, UserInDB] = {}
        self.closed = False

    async def create_user(self, name: str, email: str, password_hash: str) -> UserInDB:
        if email in self.users:
            raise UserAlreadyExistsError(email)
        user = UserInDB(
            id=str(uuid.uuid4()),
            name=name,
            email=email,
            password_hash=password_hash,
            created_at=datetime.now(timezone.utc),
        )
        self.users[email] = user
        return user

    async def get_user_by_email(self, email: str) -> Optional[UserInDB]:
        return self.users.get(email)

    async def get_user_by_id(self, user_id: str) -> Optional[UserInDB]:
        for user in self.users.values():
            if user.id == user_id:
                return user
        return None

    async def update_password_hash(self, email: str, password_hash: str) -> bool:
        user = self.users.get(email)
        if user is None:
            return False
        self.users[email] = user.model_copy(
            update={"password_hash": password_hash, "password_changed_at": datetime.now(timezone.utc)}
        )
        return True

    async def close(self) -> None:
        self.closed = True


class FakeSynthesizer(SpeechSynthesizer):
    """Records calls and returns canned audio, or fails with ``error``."""

    def __init__(self, audio: bytes = FAKE_MP3, error: Optional[str] = None):
        self.audio = audio
        self.error = error
        self.calls: List[Tuple[str, str]] = []

    @property
    def name(self) -> str:
        return "fake"

    async def synthesize(self, text: str, voice: str) -> bytes:
        self.calls.append((text, voice))
        if self.error:
            raise SynthesisError(self.error)
        return self.audio


@pytest.fixture
def settings():
    return Settings(
        secret_key="test-secret",
        bcrypt_rounds=4,
        default_voice="en-US-JennyNeural",
        default_text="Hello",
        log_level="WARNING",
    )


@pytest.fixture
def store():
    return InMemoryUserStore()


@pytest.fixture
def synthesizer():
    return FakeSynthesizer()


@pytest.fixture
def accounts(store, settings):
    return AccountService(store, settings)


@pytest.fixture
def app(settings, store, synthesizer):
    return create_app(settings=settings, user_store=store, synthesizer=synthesizer)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def registered(client):
    """Register Ann and return the credentials used."""
    body = {"name": "Ann", "email": "a@x.com", "password": "pw1"}
    response = client.post("/api/auth/register", json=body)
    assert response.status_code == 201
    return body


@pytest.fixture
def fake_audio():
    return FAKE_MP3


@pytest.fixture
def failing_synthesizer():
    """Synthesizer that fails the way the provider reports an unknown voice."""
    return FakeSynthesizer(error="Voice 'Nobody' is not supported")


@pytest.fixture
def make_client(settings, store, synthesizer):
    """Build a TestClient around an app with selected collaborators swapped."""

    def factory(user_store=None, speech=None, **client_kwargs):
        app = create_app(
            settings=settings,
            user_store=user_store or store,
            synthesizer=speech or synthesizer,
        )
        return TestClient(app, **client_kwargs)

    return factory
