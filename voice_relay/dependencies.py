"""Dependency injection for FastAPI routes.

The settings object and the two external clients are built once by
``create_app`` and kept on ``app.state``. These functions hand them to
route handlers.
"""

from typing import Annotated

from fastapi import Depends, Request

from voice_relay.config import Settings
from voice_relay.services.accounts import AccountService
from voice_relay.services.speech import SpeechSynthesizer
from voice_relay.services.store import UserStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_store(request: Request) -> UserStore:
    return request.app.state.user_store


def get_synthesizer(request: Request) -> SpeechSynthesizer:
    return request.app.state.synthesizer


def get_account_service(
    store: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_app_settings),
) -> AccountService:
    """Get an AccountService bound to the shared store and settings."""
    return AccountService(store, settings)


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
UserStoreDep = Annotated[UserStore, Depends(get_user_store)]
SynthesizerDep = Annotated[SpeechSynthesizer, Depends(get_synthesizer)]
AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
