from voice_relay.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.port == 3000
    assert settings.access_token_expire_minutes == 24 * 60
    assert settings.bcrypt_rounds == 10
    assert settings.default_voice == "en-US-JennyNeural"
    assert settings.default_text == "Hello"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("SECRET_KEY", "from-env")
    monkeypatch.setenv("AZURE_SPEECH_REGION", "westeurope")

    settings = Settings(_env_file=None)

    assert settings.port == 8080
    assert settings.secret_key == "from-env"
    assert settings.azure_speech_region == "westeurope"


def test_cors_origins_are_split_and_trimmed():
    settings = Settings(_env_file=None, cors_origins=" http://a.test , ,http://b.test")

    assert settings.get_cors_origins() == ["http://a.test", "http://b.test"]
