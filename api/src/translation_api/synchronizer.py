"""Copy translations from one driver into another.

Readers hand back nested trees while writers take dotted keys, so nested
values are walked and their path re-joined with ``.`` before each write.
The copy is not transactional: a failure leaves already-written keys in the
target, and running it again is safe because every write is an upsert.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Mapping, Optional, Tuple

from translation_api.drivers.base import GROUP, SINGLE, Translation

logger = logging.getLogger(__name__)


def iter_entries(translations: Mapping[str, Any], prefix: str = "") -> Iterator[Tuple[str, Any]]:
    """Yield ``(dotted key, leaf value)`` for every leaf of a nested tree."""
    for key, value in translations.items():
        path = f"{prefix}{key}"
        if isinstance(value, Mapping):
            yield from iter_entries(value, path + ".")
        else:
            yield path, value


def merge_translations(target: Translation, language: str, translations: Mapping[str, Any]) -> int:
    """Write one language's ``{"group": ..., "single": ...}`` tree into ``target``."""
    written = 0
    for group, values in translations.get(GROUP, {}).items():
        for key, value in iter_entries(values):
            target.add_group_translation(language, group, key, "" if value is None else str(value))
            written += 1
    for vendor, values in translations.get(SINGLE, {}).items():
        for key, value in iter_entries(values):
            target.add_single_translation(language, vendor, key, "" if value is None else str(value))
            written += 1
    return written


def synchronise(source: Translation, target: Translation, language: Optional[str] = None) -> int:
    """Copy ``language`` (or every language ``source`` knows) into ``target``.

    Returns the number of entries written.
    """
    if language:
        languages = {language: source.all_translations_for(language)}
    else:
        languages = source.all_translations()

    names = source.all_languages()
    written = 0
    for code, translations in languages.items():
        if not target.language_exists(code):
            target.add_language(code, names.get(code))
        count = merge_translations(target, code, translations)
        logger.info("Language synchronised", extra={"language": code, "count": count})
        written += count
    return written
