"""Driver contract and the backend-agnostic tree engine built on top of it.

Concrete drivers implement storage (``all_languages``, the ``add_*``
writers and the ``get_*_translations_for`` readers). Diffing against the
scanner, three-way merging and filtering only go through
``all_translations_for`` and the writers, so they behave the same for every
backend.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from translation_api.errors import TranslationError
from translation_api.scanner import Scanner
from translation_api.tree import Tree, find_missing, flatten, strs_contain

logger = logging.getLogger(__name__)

GROUP = "group"
SINGLE = "single"


class Translation(ABC):
    def __init__(self, source_language: str, scanner: Optional[Scanner] = None) -> None:
        self.source_language = source_language
        self.scanner = scanner

    # --- storage contract ---------------------------------------------------

    @abstractmethod
    def all_languages(self) -> Dict[str, str]:
        """Map every known language code to its display name."""

    @abstractmethod
    def all_group(self, language: str) -> List[str]:
        """Group names stored for ``language``."""

    @abstractmethod
    def add_language(self, language: str, name: Optional[str] = None) -> None:
        """Register ``language``; raises ``LanguageExists`` when already known."""

    @abstractmethod
    def add_group_translation(self, language: str, group: str, key: str, value: str = "") -> None:
        """Upsert one (possibly dotted) key of a group, creating the language if needed."""

    @abstractmethod
    def add_single_translation(self, language: str, vendor: str, key: str, value: str = "") -> None:
        """Upsert one flat string under ``single`` or ``vendor::single``."""

    @abstractmethod
    def get_single_translations_for(self, language: str) -> Tree:
        """``{"single": {...}, "vendor::single": {...}}`` for ``language``."""

    @abstractmethod
    def get_group_translations_for(self, language: str) -> Tree:
        """``{group: nested tree}`` for ``language``, single namespaces excluded."""

    @abstractmethod
    def language_exists(self, language: str) -> bool: ...

    @abstractmethod
    def get_groups_for(self, language: str) -> List[str]:
        """Group names including vendor groups as ``vendor::group``."""

    # --- shared reads -------------------------------------------------------

    def all_translations_for(self, language: str) -> Tree:
        return {
            GROUP: self.get_group_translations_for(language),
            SINGLE: self.get_single_translations_for(language),
        }

    def all_translations(self) -> Dict[str, Tree]:
        return {language: self.all_translations_for(language) for language in self.all_languages()}

    # --- engine -------------------------------------------------------------

    def _scan(self) -> Tree:
        if self.scanner is None:
            raise TranslationError("No scanner configured for this driver")
        return self.scanner.find_translations()

    def find_missing_translations(self, language: str, scanned: Optional[Tree] = None) -> Tree:
        """Keys the scanned sources use that ``language`` does not have yet."""
        if scanned is None:
            scanned = self._scan()
        return find_missing(scanned, self.all_translations_for(language))

    def save_missing_translations(self, language: Optional[str] = None) -> int:
        """Write an empty placeholder for every missing key; returns the number written.

        Running it again once every key exists writes nothing.
        """
        languages = [language] if language else list(self.all_languages())
        scanned = self._scan()
        written = 0
        for code in languages:
            count = 0
            missing = self.find_missing_translations(code, scanned)
            for group, translations in missing.get(SINGLE, {}).items():
                for key in flatten(translations):
                    self.add_single_translation(code, group, key)
                    count += 1
            for group, translations in missing.get(GROUP, {}).items():
                for key in flatten(translations):
                    self.add_group_translation(code, group, key)
                    count += 1
            logger.info("Missing translations saved", extra={"language": code, "count": count})
            written += count
        return written

    def get_language_translations_with(self, language: str, source_language: str) -> Tree:
        """Three-way merge keyed on every key ``source_language`` has.

        Each row maps ``source_language``, ``language`` and the default source
        language to their value, ``None`` where that language has no entry.
        """
        source_translations = self.all_translations_for(source_language)
        language_translations = self.all_translations_for(language)
        if source_language == self.source_language:
            default_translations = source_translations
        else:
            default_translations = self.all_translations_for(self.source_language)

        merged: Tree = {}
        for type_, groups in source_translations.items():
            merged[type_] = {}
            for group, translations in groups.items():
                target = flatten(language_translations.get(type_, {}).get(group, {}))
                default = flatten(default_translations.get(type_, {}).get(group, {}))
                merged[type_][group] = {
                    key: {
                        source_language: value,
                        language: target.get(key),
                        self.source_language: default.get(key),
                    }
                    for key, value in flatten(translations).items()
                }
        return merged

    def get_source_language_translations_with(self, language: str) -> Tree:
        return self.get_language_translations_with(language, self.source_language)

    def filter_translations_for(
        self,
        language: str,
        source_language: Optional[str] = None,
        filter: Optional[str] = None,  # noqa: A002
    ) -> Tree:
        source_language = source_language or self.source_language
        merged = self.get_language_translations_with(language, source_language)
        if not filter:
            return merged

        filtered: Tree = {}
        for type_, groups in merged.items():
            filtered[type_] = {}
            for group, rows in groups.items():
                kept = {
                    key: row
                    for key, row in rows.items()
                    if strs_contain(
                        [group, key, row.get(language), row.get(source_language), row.get(self.source_language)],
                        filter,
                    )
                }
                if kept:
                    filtered[type_][group] = kept
        return filtered
