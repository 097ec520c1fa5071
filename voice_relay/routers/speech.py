"""
Text-to-speech relay route.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Body
from fastapi.responses import Response

from voice_relay.dependencies import SettingsDep, SynthesizerDep
from voice_relay.models.speech import SpeakRequest
from voice_relay.services.speech import AUDIO_MIME_TYPE

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/speak", response_class=Response)
async def speak(
    settings: SettingsDep,
    synthesizer: SynthesizerDep,
    request: Optional[SpeakRequest] = Body(default=None),
):
    """
    Synthesize speech and return the MP3 audio.

    Missing text or voice fall back to the configured defaults. The voice is
    not checked here; an unknown voice fails at the provider.
    """
    request = request or SpeakRequest()
    text = request.text or settings.default_text
    voice = request.voice or settings.default_voice

    logger.info("Synthesizing %d chars with voice %s via %s", len(text), voice, synthesizer.name)
    audio = await synthesizer.synthesize(text, voice)

    return Response(content=audio, media_type=AUDIO_MIME_TYPE)
