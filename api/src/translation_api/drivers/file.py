"""Translations stored as language files on disk.

Layout below the language path::

    <lang>/<group>.php                   group translations
    vendor/<namespace>/<lang>/<group>.php  namespaced group translations
    <lang>.json                          single translations
    vendor/<namespace>/<lang>.json       namespaced single translations

Every write rewrites one whole file through a temporary file and a rename,
so readers never see a truncated file.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Any, Dict, List, Optional, Tuple

from translation_api import php_array
from translation_api.drivers.base import Translation
from translation_api.errors import IOFailure, LanguageExists, MalformedStoredData, TranslationError
from translation_api.scanner import Scanner
from translation_api.tree import Tree, flatten, join_group, parse_group, unflatten

logger = logging.getLogger(__name__)

VENDOR = "vendor"
GROUP_SUFFIX = ".php"
SINGLE_SUFFIX = ".json"


def _check_segment(value: str, what: str) -> str:
    if not value or value in (".", "..") or "/" in value or "\\" in value or os.sep in value:
        raise TranslationError(f"Invalid {what} name {value!r}")
    return value


def _read_text(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as exc:
        raise IOFailure(path, exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise MalformedStoredData(path, str(exc)) from exc


def _write_atomic(path: str, text: str) -> None:
    directory = os.path.dirname(path)
    try:
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(text)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
    except OSError as exc:
        raise IOFailure(path, exc.strerror or str(exc)) from exc


def encode_single_file(translations: Dict[str, Any]) -> str:
    """JSON as PHP writes it: pretty printed, unicode unescaped, slashes escaped."""
    return json.dumps(translations, ensure_ascii=False, indent=4).replace("/", "\\/")


def decode_single_file(path: str, text: str) -> Dict[str, Any]:
    try:
        data = json.loads(text) if text.strip() else {}
    except json.JSONDecodeError as exc:
        raise MalformedStoredData(path, str(exc)) from exc
    if data == []:
        return {}
    if not isinstance(data, dict):
        raise MalformedStoredData(path, "expected a JSON object")
    return data


def decode_group_file(path: str, text: str) -> Tree:
    try:
        data = php_array.loads(text)
    except php_array.PhpSyntaxError as exc:
        raise MalformedStoredData(path, str(exc)) from exc
    # dotted keys written by hand nest the same way database rows do
    return unflatten(flatten(data))


class FileDriver(Translation):
    def __init__(self, language_files_path: str, source_language: str, scanner: Optional[Scanner] = None) -> None:
        super().__init__(source_language, scanner)
        self.language_files_path = language_files_path

    # --- paths --------------------------------------------------------------

    def _path(self, *parts: str) -> str:
        return os.path.join(self.language_files_path, *parts)

    def group_file_path(self, language: str, group: str) -> str:
        _check_segment(language, "language")
        namespace, name = parse_group(group)
        _check_segment(name, "group")
        if namespace:
            return self._path(VENDOR, _check_segment(namespace, "namespace"), language, name + GROUP_SUFFIX)
        return self._path(language, name + GROUP_SUFFIX)

    def single_file_path(self, language: str, vendor: str) -> str:
        _check_segment(language, "language")
        namespace, _ = parse_group(vendor)
        if namespace:
            return self._path(VENDOR, _check_segment(namespace, "namespace"), language + SINGLE_SUFFIX)
        return self._path(language + SINGLE_SUFFIX)

    def _vendors(self) -> List[str]:
        vendor_root = self._path(VENDOR)
        if not os.path.isdir(vendor_root):
            return []
        return sorted(name for name in os.listdir(vendor_root) if os.path.isdir(os.path.join(vendor_root, name)))

    @staticmethod
    def _php_files(directory: str) -> List[str]:
        if not os.path.isdir(directory):
            return []
        return sorted(
            name
            for name in os.listdir(directory)
            if name.endswith(GROUP_SUFFIX) and os.path.isfile(os.path.join(directory, name))
        )

    def get_group_files_for(self, language: str) -> List[Tuple[str, str]]:
        """``(group name, path)`` for the language's own and vendor group files."""
        files = [
            (name[: -len(GROUP_SUFFIX)], self._path(language, name))
            for name in self._php_files(self._path(language))
        ]
        for vendor in self._vendors():
            directory = self._path(VENDOR, vendor, language)
            files.extend(
                (join_group(vendor, name[: -len(GROUP_SUFFIX)]), os.path.join(directory, name))
                for name in self._php_files(directory)
            )
        return files

    # --- reads --------------------------------------------------------------

    def all_languages(self) -> Dict[str, str]:
        root = self.language_files_path
        if not os.path.isdir(root):
            return {}
        return {
            name: name
            for name in sorted(os.listdir(root))
            if name != VENDOR and os.path.isdir(os.path.join(root, name))
        }

    def all_group(self, language: str) -> List[str]:
        return [name[: -len(GROUP_SUFFIX)] for name in self._php_files(self._path(language))]

    def language_exists(self, language: str) -> bool:
        return language in self.all_languages()

    def get_groups_for(self, language: str) -> List[str]:
        return [group for group, _ in self.get_group_files_for(language)]

    def get_group_translations_for(self, language: str) -> Tree:
        return {group: decode_group_file(path, _read_text(path)) for group, path in self.get_group_files_for(language)}

    def get_single_translations_for(self, language: str) -> Tree:
        paths = [("single", self._path(language + SINGLE_SUFFIX))]
        for vendor in self._vendors():
            paths.append((join_group(vendor, "single"), self._path(VENDOR, vendor, language + SINGLE_SUFFIX)))
        result: Tree = {}
        for name, path in paths:
            if not os.path.isfile(path):
                continue
            translations = decode_single_file(path, _read_text(path))
            # an empty file reads like no file, as an empty row set does
            if translations:
                result[name] = translations
        return result

    def _read_group(self, language: str, group: str) -> Tree:
        path = self.group_file_path(language, group)
        if not os.path.isfile(path):
            return {}
        return decode_group_file(path, _read_text(path))

    def get_translations_for_file(self, language: str, group: str) -> Dict[str, Any]:
        """Flat dotted map of one group file, empty when the file is absent."""
        if group.endswith(GROUP_SUFFIX):
            group = group[: -len(GROUP_SUFFIX)]
        return flatten(self._read_group(language, group))

    # --- writes -------------------------------------------------------------

    def add_language(self, language: str, name: Optional[str] = None) -> None:
        _check_segment(language, "language")
        if self.language_exists(language):
            raise LanguageExists(language)
        try:
            os.makedirs(self._path(language), exist_ok=True)
        except OSError as exc:
            raise IOFailure(self._path(language), exc.strerror or str(exc)) from exc
        single_path = self._path(language + SINGLE_SUFFIX)
        if not os.path.exists(single_path):
            _write_atomic(single_path, encode_single_file({}))
        logger.info("Language added", extra={"language": language})

    def add_group(self, language: str, group: str) -> None:
        self.save_group_translations(language, group, {})

    def add_group_translation(self, language: str, group: str, key: str, value: str = "") -> None:
        if not self.language_exists(language):
            self.add_language(language)
        flat = {
            existing: current
            for existing, current in flatten(self._read_group(language, group)).items()
            # a key replaces its former subtree, or the leaf it now nests under
            if not existing.startswith(key + ".") and not key.startswith(existing + ".")
        }
        flat[key] = value
        self.save_group_translations(language, group, unflatten(flat, sort_keys=True))
        logger.debug("Group translation saved", extra={"language": language, "group": group, "key": key})

    def add_single_translation(self, language: str, vendor: str, key: str, value: str = "") -> None:
        if not self.language_exists(language):
            self.add_language(language)
        path = self.single_file_path(language, vendor)
        translations = decode_single_file(path, _read_text(path)) if os.path.isfile(path) else {}
        translations[key] = value
        _write_atomic(path, encode_single_file(translations))
        logger.debug("Single translation saved", extra={"language": language, "group": vendor, "key": key})

    def save_group_translations(self, language: str, group: str, translations: Tree) -> None:
        _write_atomic(self.group_file_path(language, group), php_array.dumps(translations))
