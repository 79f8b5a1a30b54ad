import json
import os

import pytest

from translation_api import php_array
from translation_api.drivers.file import FileDriver, encode_single_file
from translation_api.errors import IOFailure, MalformedStoredData, TranslationError


def _read(path) -> str:
    with open(path, encoding="utf-8") as f:
        return f.read()


def test_group_file_is_written_in_var_export_format(file_driver, lang_path) -> None:
    file_driver.add_group_translation("es", "test", "hello", "Hola!")

    assert _read(os.path.join(lang_path, "es", "test.php")) == (
        "<?php\n\nreturn array (\n  'hello' => 'Hola!',\n);\n"
    )


def test_single_file_is_pretty_json_with_escaped_slashes(file_driver, lang_path) -> None:
    file_driver.add_single_translation("es", "single", "and/or", "y/o ¿qué?")

    text = _read(os.path.join(lang_path, "es.json"))

    assert text == '{\n    "and\\/or": "y\\/o ¿qué?"\n}'
    assert json.loads(text) == {"and/or": "y/o ¿qué?"}


def test_add_language_creates_directory_and_empty_json(file_driver, lang_path) -> None:
    file_driver.add_language("fr")

    assert os.path.isdir(os.path.join(lang_path, "fr"))
    assert _read(os.path.join(lang_path, "fr.json")) == "{}"
    assert file_driver.get_single_translations_for("fr") == {}


def test_vendor_files_live_under_vendor(file_driver, lang_path) -> None:
    file_driver.add_group_translation("es", "pkg::messages", "hi", "Hola")
    file_driver.add_single_translation("es", "pkg::single", "Bye", "Adios")

    assert os.path.isfile(os.path.join(lang_path, "vendor", "pkg", "es", "messages.php"))
    assert os.path.isfile(os.path.join(lang_path, "vendor", "pkg", "es.json"))
    # vendor is never reported as a language
    assert "vendor" not in file_driver.all_languages()


def test_all_group_lists_own_groups_only(file_driver) -> None:
    file_driver.add_group_translation("en", "pkg::messages", "hi", "Hi")
    file_driver.add_group_translation("en", "auth", "failed", "Nope")

    assert file_driver.all_group("en") == ["auth", "test"]
    assert file_driver.get_groups_for("en") == ["auth", "test", "pkg::messages"]


def test_get_translations_for_file_is_flat(file_driver) -> None:
    file_driver.add_group_translation("en", "test", "deep.key", "Deep")

    assert file_driver.get_translations_for_file("en", "test.php") == {
        "deep.key": "Deep",
        "hello": "Hello",
        "whats_up": "What's up!",
    }
    assert file_driver.get_translations_for_file("en", "absent") == {}


def test_add_group_creates_an_empty_group_file(file_driver, lang_path) -> None:
    file_driver.add_group("es", "auth")

    assert php_array.loads(_read(os.path.join(lang_path, "es", "auth.php"))) == {}
    assert file_driver.get_groups_for("es") == ["auth"]


def test_nested_key_replaces_a_leaf(file_driver) -> None:
    file_driver.add_group_translation("en", "test", "hello.formal", "Good day")

    assert file_driver.get_group_translations_for("en")["test"]["hello"] == {"formal": "Good day"}


def test_leaf_replaces_a_subtree(file_driver) -> None:
    file_driver.add_group_translation("en", "test", "deep.key", "Deep")
    file_driver.add_group_translation("en", "test", "deep", "Flat")

    assert file_driver.get_group_translations_for("en")["test"]["deep"] == "Flat"


def test_hand_written_files_are_read(file_driver, lang_path) -> None:
    with open(os.path.join(lang_path, "en", "auth.php"), "w", encoding="utf-8") as f:
        f.write("<?php\n// auth\nreturn [\n    'failed' => 'Nope',\n    'throttle.short' => \"Wait\",\n];\n")

    assert file_driver.get_group_translations_for("en")["auth"] == {
        "failed": "Nope",
        "throttle": {"short": "Wait"},
    }


def test_empty_json_list_reads_as_no_translations(file_driver, lang_path) -> None:
    with open(os.path.join(lang_path, "es.json"), "w", encoding="utf-8") as f:
        f.write("[]")

    assert file_driver.get_single_translations_for("es") == {}


@pytest.mark.parametrize(
    ("relative", "contents"),
    [
        ("en.json", "{not json"),
        ("en.json", '"a string"'),
        (os.path.join("en", "test.php"), "<?php return ['broken' => ;"),
    ],
)
def test_malformed_files_raise(file_driver, lang_path, relative: str, contents: str) -> None:
    with open(os.path.join(lang_path, relative), "w", encoding="utf-8") as f:
        f.write(contents)

    with pytest.raises(MalformedStoredData) as excinfo:
        file_driver.all_translations_for("en")

    assert excinfo.value.path == os.path.join(lang_path, relative)


def test_writes_leave_no_temporary_files(file_driver, lang_path) -> None:
    file_driver.add_group_translation("es", "test", "hello", "Hola")
    file_driver.add_single_translation("es", "single", "Hello", "Hola")

    leftovers = [name for name in os.listdir(lang_path) + os.listdir(os.path.join(lang_path, "es")) if name.endswith(".tmp")]
    assert leftovers == []


def test_write_failure_raises_io_failure(tmp_path) -> None:
    blocker = tmp_path / "lang"
    blocker.write_text("not a directory", encoding="utf-8")
    driver = FileDriver(str(blocker), "en")

    with pytest.raises(IOFailure):
        driver.add_single_translation("en", "single", "Hello", "Hello")


@pytest.mark.parametrize("language", ["", "..", "en/../x"])
def test_invalid_language_names_are_rejected(file_driver, language: str) -> None:
    with pytest.raises(TranslationError):
        file_driver.add_language(language)


def test_missing_language_path_has_no_languages(tmp_path) -> None:
    driver = FileDriver(str(tmp_path / "nowhere"), "en")

    assert driver.all_languages() == {}
    assert driver.all_translations() == {}


def test_encode_empty_single_file() -> None:
    assert encode_single_file({}) == "{}"
