# External collaborators and account logic
from .store import UserStore
from .speech import SpeechSynthesizer, AzureSpeechSynthesizer
from .accounts import AccountService

__all__ = ["UserStore", "SpeechSynthesizer", "AzureSpeechSynthesizer", "AccountService"]
