"""
Speech synthesis providers.
"""
import logging
from abc import ABC, abstractmethod
from typing import List

import azure.cognitiveservices.speech as speechsdk
from fastapi.concurrency import run_in_threadpool

from voice_relay.config import Settings
from voice_relay.exceptions import SynthesisError

logger = logging.getLogger(__name__)

AUDIO_MIME_TYPE = "audio/mpeg"

# Read size for draining the provider's audio stream
CHUNK_SIZE = 16000


class SpeechSynthesizer(ABC):
    """
    Abstract base class for text-to-speech providers.

    To add a new provider, subclass this and implement ``synthesize`` so it
    returns the complete MP3 payload or raises ``SynthesisError``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The name of the provider."""
        pass

    @abstractmethod
    async def synthesize(self, text: str, voice: str) -> bytes:
        """
        Convert text to MP3 audio.

        Args:
            text: Text to speak
            voice: Provider voice identifier, passed through unchecked

        Returns:
            The full MP3 audio as bytes
        """
        pass


class AzureSpeechSynthesizer(SpeechSynthesizer):
    """Azure Cognitive Services speech synthesis, returning MP3 in memory."""

    def __init__(
        self,
        key: str,
        region: str,
        output_format: speechsdk.SpeechSynthesisOutputFormat = (
            speechsdk.SpeechSynthesisOutputFormat.Audio24Khz48KBitRateMonoMp3
        ),
    ):
        self.key = key
        self.region = region
        self.output_format = output_format

    @classmethod
    def from_settings(cls, settings: Settings) -> "AzureSpeechSynthesizer":
        return cls(key=settings.azure_speech_key, region=settings.azure_speech_region)

    @property
    def name(self) -> str:
        return "azure"

    def _create_speech_config(self, voice: str) -> speechsdk.SpeechConfig:
        speech_config = speechsdk.SpeechConfig(subscription=self.key, region=self.region)
        speech_config.speech_synthesis_voice_name = voice
        speech_config.set_speech_synthesis_output_format(self.output_format)
        return speech_config

    def _speak(self, text: str, voice: str) -> bytes:
        try:
            synthesizer = speechsdk.SpeechSynthesizer(
                speech_config=self._create_speech_config(voice), audio_config=None
            )
            result = synthesizer.speak_text_async(text).get()
        except RuntimeError as e:
            # The SDK raises RuntimeError for bad keys, regions and transport setup
            raise SynthesisError(str(e)) from e

        if result.reason == speechsdk.ResultReason.Canceled:
            details = result.cancellation_details
            message = details.error_details or f"Speech synthesis canceled: {details.reason}"
            raise SynthesisError(message)
        if result.reason != speechsdk.ResultReason.SynthesizingAudioCompleted:
            raise SynthesisError(f"Unexpected synthesis result: {result.reason}")

        stream = speechsdk.AudioDataStream(result)
        chunks: List[bytes] = []
        buffer = bytes(CHUNK_SIZE)
        filled = stream.read_data(buffer)
        while filled > 0:
            chunks.append(buffer[:filled])
            filled = stream.read_data(buffer)
        return b"".join(chunks)

    async def synthesize(self, text: str, voice: str) -> bytes:
        """Run the blocking SDK call off the event loop."""
        audio = await run_in_threadpool(self._speak, text, voice)
        logger.debug("Azure synthesis produced %d bytes with voice %s", len(audio), voice)
        return audio
