def test_speak_without_body_uses_defaults(client, synthesizer, fake_audio):
    response = client.post("/speak")

    assert response.status_code == 200
    assert response.headers["content-type"] == "audio/mpeg"
    assert response.content == fake_audio
    assert synthesizer.calls == [("Hello", "en-US-JennyNeural")]


def test_speak_with_empty_json_uses_defaults(client, synthesizer):
    response = client.post("/speak", json={})

    assert response.status_code == 200
    assert synthesizer.calls == [("Hello", "en-US-JennyNeural")]


def test_speak_passes_text_and_voice_through(client, synthesizer):
    response = client.post("/speak", json={"text": "Good morning", "voice": "en-GB-SoniaNeural"})

    assert response.status_code == 200
    assert synthesizer.calls == [("Good morning", "en-GB-SoniaNeural")]


def test_speak_provider_failure_is_server_error_with_message(make_client, failing_synthesizer):
    client = make_client(speech=failing_synthesizer)

    response = client.post("/speak", json={"voice": "Nobody"})

    assert response.status_code == 500
    assert response.json()["error"] == "Voice 'Nobody' is not supported"
    assert failing_synthesizer.calls == [("Hello", "Nobody")]


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_cors_allows_configured_origin(client):
    response = client.options(
        "/speak",
        headers={
            "Origin": "http://localhost:4200",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:4200"
    assert response.headers["access-control-allow-credentials"] == "true"
