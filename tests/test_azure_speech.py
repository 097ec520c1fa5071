from unittest.mock import MagicMock

import pytest

from voice_relay.config import Settings
from voice_relay.exceptions import SynthesisError
from voice_relay.services import speech
from voice_relay.services.speech import CHUNK_SIZE, AzureSpeechSynthesizer


@pytest.fixture
def sdk(monkeypatch):
    fake = MagicMock()
    monkeypatch.setattr(speech, "speechsdk", fake)
    return fake


def _result(sdk, reason):
    result = MagicMock()
    result.reason = reason
    sdk.SpeechSynthesizer.return_value.speak_text_async.return_value.get.return_value = result
    return result


async def test_synthesize_drains_audio_stream(sdk):
    _result(sdk, sdk.ResultReason.SynthesizingAudioCompleted)
    sdk.AudioDataStream.return_value.read_data.side_effect = [CHUNK_SIZE, 500, 0]

    synthesizer = AzureSpeechSynthesizer(key="k", region="westeurope")
    audio = await synthesizer.synthesize("Hello", "en-US-JennyNeural")

    assert len(audio) == CHUNK_SIZE + 500
    sdk.SpeechConfig.assert_called_once_with(subscription="k", region="westeurope")
    config = sdk.SpeechConfig.return_value
    assert config.speech_synthesis_voice_name == "en-US-JennyNeural"
    config.set_speech_synthesis_output_format.assert_called_once_with(synthesizer.output_format)
    sdk.SpeechSynthesizer.assert_called_once_with(speech_config=config, audio_config=None)
    sdk.SpeechSynthesizer.return_value.speak_text_async.assert_called_once_with("Hello")


async def test_synthesize_canceled_raises_with_provider_message(sdk):
    result = _result(sdk, sdk.ResultReason.Canceled)
    result.cancellation_details.error_details = "Unsupported voice Nobody"

    synthesizer = AzureSpeechSynthesizer(key="k", region="westeurope")

    with pytest.raises(SynthesisError, match="Unsupported voice Nobody"):
        await synthesizer.synthesize("Hello", "Nobody")
    sdk.AudioDataStream.assert_not_called()


async def test_synthesize_sdk_runtime_error_is_synthesis_error(sdk):
    sdk.SpeechConfig.side_effect = RuntimeError("invalid subscription key")

    synthesizer = AzureSpeechSynthesizer(key="", region="")

    with pytest.raises(SynthesisError, match="invalid subscription key"):
        await synthesizer.synthesize("Hello", "en-US-JennyNeural")


def test_from_settings_reads_key_and_region():
    settings = Settings(azure_speech_key="abc", azure_speech_region="eastus")

    synthesizer = AzureSpeechSynthesizer.from_settings(settings)

    assert synthesizer.key == "abc"
    assert synthesizer.region == "eastus"
    assert synthesizer.name == "azure"
