"""Translations stored as rows in the ``languages`` / ``translations`` tables."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from translation_api.drivers.base import GROUP, SINGLE, Translation
from translation_api.drivers.cache import ArrayCache, TranslationCache, cache_key
from translation_api.errors import LanguageExists
from translation_api.scanner import Scanner
from translation_api.tree import SEPARATOR, Tree, set_dotted, sort_tree
from translation_models import Language
from translation_models import Translation as TranslationRow

logger = logging.getLogger(__name__)

SINGLE_LIKE = "%single"


class DatabaseDriver(Translation):
    def __init__(
        self,
        engine: Engine,
        source_language: str,
        scanner: Optional[Scanner] = None,
        cache: Optional[TranslationCache] = None,
    ) -> None:
        super().__init__(source_language, scanner)
        self.engine = engine
        self.cache: TranslationCache = cache if cache is not None else ArrayCache()

    @staticmethod
    def _get_language(session: Session, language: str) -> Optional[Language]:
        return session.exec(select(Language).where(Language.language == language)).first()

    def _invalidate(self, language: str) -> None:
        self.cache.invalidate(cache_key(language, SINGLE))
        self.cache.invalidate(cache_key(language, GROUP))

    # --- reads --------------------------------------------------------------

    def all_languages(self) -> Dict[str, str]:
        with Session(self.engine) as session:
            rows = session.exec(select(Language).order_by(Language.language)).all()
            return {row.language: row.name or row.language for row in rows}

    def all_group(self, language: str) -> List[str]:
        with Session(self.engine) as session:
            groups = session.exec(
                select(TranslationRow.group)
                .join(Language, Language.id == TranslationRow.language_id)
                .where(
                    Language.language == language,
                    TranslationRow.group.is_not(None),  # type: ignore[union-attr]
                    TranslationRow.group.not_like(SINGLE_LIKE),  # type: ignore[union-attr]
                )
                .distinct()
                .order_by(TranslationRow.group)
            ).all()
            return list(groups)

    def get_groups_for(self, language: str) -> List[str]:
        return self.all_group(language)

    def language_exists(self, language: str) -> bool:
        with Session(self.engine) as session:
            return self._get_language(session, language) is not None

    def _select_rows(self, language: str, single: bool) -> List[tuple]:
        group_column = TranslationRow.group
        scope = group_column.like(SINGLE_LIKE) if single else group_column.not_like(SINGLE_LIKE)  # type: ignore[union-attr]
        with Session(self.engine) as session:
            return list(
                session.exec(
                    select(TranslationRow.group, TranslationRow.key, TranslationRow.value)
                    .join(Language, Language.id == TranslationRow.language_id)
                    .where(Language.language == language, group_column.is_not(None), scope)  # type: ignore[union-attr]
                    .order_by(TranslationRow.group, TranslationRow.key)
                ).all()
            )

    def _has_legacy_rows(self, language: str) -> bool:
        with Session(self.engine) as session:
            row = session.exec(
                select(TranslationRow.id)
                .join(Language, Language.id == TranslationRow.language_id)
                .where(Language.language == language, TranslationRow.group.is_(None))  # type: ignore[union-attr]
            ).first()
            return row is not None

    def get_single_translations_for(self, language: str) -> Tree:
        key = cache_key(language, SINGLE)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        # Rows from before groups were mandatory are upgraded once, then read.
        if self._has_legacy_rows(language):
            self.upgrade_legacy_groups(language)

        tree: Tree = {}
        for group, translation_key, value in self._select_rows(language, single=True):
            tree.setdefault(group, {})[translation_key] = value
        self.cache.set(key, tree)
        return tree

    def get_group_translations_for(self, language: str) -> Tree:
        key = cache_key(language, GROUP)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        tree: Tree = {}
        for group, translation_key, value in self._select_rows(language, single=False):
            set_dotted(tree.setdefault(group, {}), translation_key, value)
        # same per-level key order as group files
        tree = {group: sort_tree(values) for group, values in tree.items()}
        self.cache.set(key, tree)
        return tree

    # --- writes -------------------------------------------------------------

    def add_language(self, language: str, name: Optional[str] = None) -> None:
        with Session(self.engine) as session:
            if self._get_language(session, language) is not None:
                raise LanguageExists(language)
            session.add(Language(language=language, name=name))
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise LanguageExists(language) from exc
        logger.info("Language added", extra={"language": language})

    def add_group_translation(self, language: str, group: str, key: str, value: str = "") -> None:
        self._write(language, group, key, value, nested=True)

    def add_single_translation(self, language: str, vendor: str, key: str, value: str = "") -> None:
        self._write(language, vendor, key, value)

    @staticmethod
    def _delete_conflicting(session: Session, language_id: int, group: str, key: str) -> None:
        segments = key.split(SEPARATOR)
        prefixes = [SEPARATOR.join(segments[:end]) for end in range(1, len(segments))]
        conflicts = session.exec(
            select(TranslationRow).where(
                TranslationRow.language_id == language_id,
                TranslationRow.group == group,
                or_(
                    TranslationRow.key.startswith(key + SEPARATOR, autoescape=True),  # type: ignore[attr-defined]
                    TranslationRow.key.in_(prefixes),  # type: ignore[attr-defined]
                ),
            )
        ).all()
        for row in conflicts:
            session.delete(row)
        if conflicts:
            session.flush()

    def _write(self, language: str, group: str, key: str, value: str, nested: bool = False) -> None:
        """The only write path: upsert one row, then drop the language's cached trees.

        For ``nested`` (group) keys, rows the new key would shadow or sit under
        are deleted first, so ``a`` replaces ``a.b`` and ``a.b`` replaces ``a``.
        """
        try:
            with Session(self.engine) as session:
                language_row = self._get_language(session, language)
                if language_row is None:
                    language_row = Language(language=language)
                    session.add(language_row)
                    session.flush()
                    logger.info("Language added", extra={"language": language})
                if nested:
                    self._delete_conflicting(session, language_row.id, group, key)
                row = session.exec(
                    select(TranslationRow).where(
                        TranslationRow.language_id == language_row.id,
                        TranslationRow.group == group,
                        TranslationRow.key == key,
                    )
                ).first()
                if row is None:
                    row = TranslationRow(language_id=language_row.id, group=group, key=key, value=value)
                else:
                    row.value = value
                session.add(row)
                session.commit()
        finally:
            self._invalidate(language)
        logger.debug("Translation saved", extra={"language": language, "group": group, "key": key})

    def upgrade_legacy_groups(self, language: Optional[str] = None) -> int:
        """Move rows with a NULL group into ``single``; returns the number of rows touched.

        A legacy row whose key already exists under ``single`` is dropped in
        favour of the newer row.
        """
        touched_languages: set[str] = set()
        count = 0
        with Session(self.engine) as session:
            stmt = (
                select(TranslationRow, Language.language)
                .join(Language, Language.id == TranslationRow.language_id)
                .where(TranslationRow.group.is_(None))  # type: ignore[union-attr]
            )
            if language is not None:
                stmt = stmt.where(Language.language == language)
            for row, code in session.exec(stmt).all():
                duplicate = session.exec(
                    select(TranslationRow.id).where(
                        TranslationRow.language_id == row.language_id,
                        TranslationRow.group == SINGLE,
                        TranslationRow.key == row.key,
                    )
                ).first()
                if duplicate is not None:
                    session.delete(row)
                else:
                    row.group = SINGLE
                    session.add(row)
                touched_languages.add(code)
                count += 1
            session.commit()
        for code in touched_languages:
            self._invalidate(code)
        if count:
            logger.info("Legacy translation groups upgraded", extra={"language": language, "count": count})
        return count
