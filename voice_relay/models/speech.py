"""
Speech synthesis request models.
"""
from typing import Optional
from pydantic import BaseModel


class SpeakRequest(BaseModel):
    """Text-to-speech request. Both fields fall back to configured defaults."""
    text: Optional[str] = None
    voice: Optional[str] = None
