"""Minimal smoke tests for the API service."""


def test_health_endpoint_returns_ok() -> None:
    # Import inside the test to ensure environment variables are already set
    from fastapi.testclient import TestClient
    from translation_api.main import app

    with TestClient(app) as client:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


def test_languages_resolve_driver_from_environment(monkeypatch, lang_path) -> None:
    from fastapi.testclient import TestClient
    from translation_api.dependencies import get_settings
    from translation_api.main import app

    monkeypatch.setenv("TRANSLATION_DRIVER", "file")
    monkeypatch.setenv("TRANSLATION_LANG_PATH", lang_path)
    get_settings.cache_clear()
    try:
        with TestClient(app) as client:
            response = client.get("/languages")
            assert response.status_code == 200
            assert response.json() == {"en": "en", "es": "es"}
    finally:
        get_settings.cache_clear()
