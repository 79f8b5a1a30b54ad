from http import HTTPStatus

from fastapi.testclient import TestClient

from translation_api.dependencies import get_translation
from translation_api.main import app


def test_health(client) -> None:
    resp = client.get("/health")
    assert resp.status_code == HTTPStatus.OK
    assert resp.json() == {"status": "ok"}


def test_list_languages(client) -> None:
    resp = client.get("/languages")
    assert resp.status_code == HTTPStatus.OK
    assert resp.json() == {"en": "en", "es": "es"}


def test_create_language_and_conflict(client) -> None:
    resp = client.post("/languages", json={"locale": "fr", "name": "French"})
    assert resp.status_code == HTTPStatus.CREATED
    assert resp.json() == {"language": "fr", "name": "French"}

    resp = client.post("/languages", json={"locale": "fr"})
    assert resp.status_code == HTTPStatus.CONFLICT
    assert resp.json() == {"detail": "The language fr already exists"}


def test_create_language_requires_locale(client) -> None:
    resp = client.post("/languages", json={"locale": ""})
    assert resp.status_code == HTTPStatus.UNPROCESSABLE_ENTITY


def test_list_translations_merges_with_source_language(client) -> None:
    resp = client.get("/languages/es/translations")
    assert resp.status_code == HTTPStatus.OK
    assert resp.json() == {
        "group": {
            "test": {
                "hello": {"en": "Hello", "es": None},
                "whats_up": {"en": "What's up!", "es": None},
            },
        },
        "single": {
            "single": {
                "Hello": {"en": "Hello", "es": None},
                "What's up": {"en": "What's up!", "es": None},
            },
        },
    }


def test_list_translations_filtered_by_group(client) -> None:
    resp = client.get("/languages/es/translations", params={"group": "single"})
    assert resp.status_code == HTTPStatus.OK
    assert list(resp.json()) == ["single"]

    resp = client.get("/languages/es/translations", params={"group": "test", "filter": "whats"})
    assert resp.status_code == HTTPStatus.OK
    assert resp.json() == {"group": {"test": {"whats_up": {"en": "What's up!", "es": None}}}}


def test_create_group_and_single_translations(client) -> None:
    resp = client.post("/languages/es/translations", json={"group": "test", "key": "hello", "value": "Hola"})
    assert resp.status_code == HTTPStatus.CREATED
    assert resp.json() == {"language": "es", "group": "test", "key": "hello", "value": "Hola"}

    resp = client.post(
        "/languages/es/translations",
        json={"group": "messages", "namespace": "pkg", "key": "hi", "value": "Hola"},
    )
    assert resp.status_code == HTTPStatus.CREATED
    assert resp.json()["group"] == "pkg::messages"

    resp = client.post("/languages/es/translations", json={"key": "Hello", "value": "Hola"})
    assert resp.status_code == HTTPStatus.CREATED
    assert resp.json()["group"] == "single"

    resp = client.get("/languages/es/groups")
    assert resp.json() == ["pkg::messages", "test"]

    rows = client.get("/languages/es/translations", params={"filter": "Hola"}).json()
    assert rows["group"]["test"]["hello"] == {"en": "Hello", "es": "Hola"}
    assert rows["single"]["single"]["Hello"] == {"en": "Hello", "es": "Hola"}


def test_update_translation(client, file_driver) -> None:
    resp = client.post("/languages/es", json={"group": "test", "key": "whats_up", "value": "¿Qué tal?"})
    assert resp.status_code == HTTPStatus.OK
    assert resp.json() == {"success": True}

    resp = client.post("/languages/es", json={"group": "single", "key": "Hello"})
    assert resp.status_code == HTTPStatus.OK

    assert file_driver.get_group_translations_for("es") == {"test": {"whats_up": "¿Qué tal?"}}
    assert file_driver.get_single_translations_for("es") == {"single": {"Hello": ""}}


def test_missing_translations(client) -> None:
    resp = client.get("/languages/en/missing")
    assert resp.status_code == HTTPStatus.OK
    assert resp.json()["group"]["nested"] == {"deep": {"key": ""}}
    assert resp.json()["single"] == {"single": {"Brand new": ""}}


def test_malformed_storage_is_a_server_error(client, lang_path) -> None:
    with open(f"{lang_path}/en.json", "w", encoding="utf-8") as f:
        f.write("{broken")

    resp = client.get("/languages/en/translations")
    assert resp.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert resp.json()["detail"].startswith("Malformed translation file")


def test_invalid_names_are_bad_requests(client) -> None:
    resp = client.post("/languages/es/translations", json={"group": "..", "key": "a", "value": "b"})
    assert resp.status_code == HTTPStatus.BAD_REQUEST


def test_database_driver_behind_the_api(database_driver) -> None:
    app.dependency_overrides[get_translation] = lambda: database_driver
    try:
        with TestClient(app) as c:
            resp = c.post("/languages/es/translations", json={"group": "test", "key": "hello", "value": "Hola"})
            assert resp.status_code == HTTPStatus.CREATED

            resp = c.get("/languages/es/translations", params={"group": "test"})
            assert resp.json()["group"]["test"]["hello"] == {"en": "Hello", "es": "Hola"}

            resp = c.post("/languages", json={"locale": "en"})
            assert resp.status_code == HTTPStatus.CONFLICT
    finally:
        app.dependency_overrides.clear()
