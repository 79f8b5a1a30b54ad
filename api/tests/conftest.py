"""Common pytest fixtures for driver, engine and API tests.

File-driver tests run against a fresh copy of the fixture language directory
in ``tmp_path``; database-driver tests run against an in-memory SQLite
database seeded with the same translations, so both drivers can be checked
against one contract.
"""

import os
from collections.abc import Iterator

# Human-readable logs in test output; set BEFORE importing the app
os.environ.setdefault("LOG_JSON", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from translation_api import php_array
from translation_api.db import create_tables, make_engine
from translation_api.dependencies import get_translation
from translation_api.drivers.database import DatabaseDriver
from translation_api.drivers.file import FileDriver, encode_single_file
from translation_api.main import app
from translation_api.scanner import Scanner

EN_SINGLE = {"Hello": "Hello", "What's up": "What's up!"}
EN_TEST_GROUP = {"hello": "Hello", "whats_up": "What's up!"}
TRANSLATION_METHODS = ["trans", "__", "t", "@lang"]

SOURCE_FILES = {
    "resources/views/welcome.blade.php": """
        <h1>{{ __('test.hello') }}</h1>
        <p>@lang('Hello')</p>
        <p>{{ __("Brand new") }}</p>
    """,
    "app/Http/Controllers/HomeController.php": """<?php
        return view('home', ['title' => trans('nested.deep.key'), 'n' => __('test.new_key')]);
        $this->t('not.a.lookup');
    """,
    "vendor_pkg/widget.js": "t('ns::group.item');\nconsole.log(i18n.t('also.not.a.lookup'));\n",
}


@pytest.fixture
def lang_path(tmp_path) -> str:
    root = tmp_path / "lang"
    (root / "en").mkdir(parents=True)
    (root / "es").mkdir()
    (root / "en.json").write_text(encode_single_file(EN_SINGLE), encoding="utf-8")
    (root / "en" / "test.php").write_text(php_array.dumps(EN_TEST_GROUP), encoding="utf-8")
    return str(root)


@pytest.fixture
def source_dir(tmp_path) -> str:
    root = tmp_path / "src"
    for relative, contents in SOURCE_FILES.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(contents, encoding="utf-8")
    return str(root)


@pytest.fixture
def scanner(source_dir) -> Scanner:
    return Scanner([source_dir], TRANSLATION_METHODS)


@pytest.fixture
def file_driver(lang_path, scanner) -> FileDriver:
    return FileDriver(lang_path, "en", scanner)


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = make_engine("sqlite://")
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def database_driver(engine, scanner) -> DatabaseDriver:
    driver = DatabaseDriver(engine, "en", scanner)
    driver.add_language("en")
    driver.add_language("es")
    for key, value in EN_SINGLE.items():
        driver.add_single_translation("en", "single", key, value)
    for key, value in EN_TEST_GROUP.items():
        driver.add_group_translation("en", "test", key, value)
    return driver


@pytest.fixture(params=["file", "database"])
def driver(request):
    """Each contract test runs once per driver."""
    return request.getfixturevalue(f"{request.param}_driver")


@pytest.fixture
def client(file_driver) -> Iterator[TestClient]:
    app.dependency_overrides[get_translation] = lambda: file_driver
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
