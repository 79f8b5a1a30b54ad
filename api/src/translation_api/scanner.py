"""Find translation keys used by application source files.

This is pattern matching, not parsing: a call such as ``__('auth.failed')``
or ``@lang("Welcome")`` is recognised when the method name is not part of a
longer identifier and not reached through ``->`` or ``.`` member access.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Iterable, Iterator, List, Sequence

from translation_api.errors import InvalidScannerConfiguration, IOFailure
from translation_api.tree import Tree, set_dotted

logger = logging.getLogger(__name__)

# group.key, namespace::group.key.nested: at least two dot-separated segments
GROUP_KEY_PATTERN = re.compile(r"^[A-Za-z0-9:_-]+(\.[A-Za-z0-9:_-]+)+$")


def build_pattern(translation_methods: Sequence[str]) -> re.Pattern:
    if not translation_methods:
        raise InvalidScannerConfiguration("At least one translation method is required")
    methods = "|".join(translation_methods)
    pattern = (
        r"(?<![\w@])"  # not inside a longer identifier
        r"(?<!->)(?<!\.)"  # not a method call on some object
        rf"(?:{methods})"
        r"\(\s*"
        r"[\'\"]"  # opening quote
        r"(.+?)"  # the key literal
        r"[\'\"]"  # closing quote
        r"\s*[\),]"  # end of call or next argument
    )
    try:
        return re.compile(pattern, re.IGNORECASE | re.DOTALL)
    except re.error as exc:
        raise InvalidScannerConfiguration(f"Invalid translation methods {list(translation_methods)!r}: {exc}") from exc


def classify(literal: str, results: Tree) -> None:
    """Record ``literal`` as a group key (dotted path) or a single key (flat)."""
    if GROUP_KEY_PATTERN.match(literal):
        set_dotted(results["group"], literal, "")
    else:
        results["single"].setdefault("single", {})[literal] = ""


def _iter_files(paths: Iterable[str]) -> Iterator[str]:
    for path in paths:
        # plain files and missing paths go straight to open(), which reports the failure
        if not os.path.isdir(path):
            yield path
            continue
        for root, dirs, files in os.walk(path):
            dirs.sort()
            for name in sorted(files):
                yield os.path.join(root, name)


class Scanner:
    def __init__(self, scan_paths: Sequence[str], translation_methods: Sequence[str]) -> None:
        self.scan_paths = list(scan_paths)
        self.translation_methods = list(translation_methods)
        self.pattern = build_pattern(self.translation_methods)
        self.errors: List[IOFailure] = []

    def find_translations(self) -> Tree:
        """Scan every file below the configured paths."""
        return self.scan_files(_iter_files(self.scan_paths))

    def scan_files(self, files: Iterable[str]) -> Tree:
        """Scan explicit files; unreadable ones are skipped and kept in ``errors``."""
        results: Tree = {"single": {}, "group": {}}
        self.errors = []
        scanned = 0
        for path in files:
            try:
                with open(path, "r", encoding="utf-8", errors="replace") as f:
                    contents = f.read()
            except OSError as exc:
                failure = IOFailure(path, exc.strerror or str(exc))
                self.errors.append(failure)
                logger.warning("Skipping unreadable file", extra={"path": path, "error": failure.reason})
                continue
            scanned += 1
            for match in self.pattern.finditer(contents):
                classify(match.group(1), results)
        logger.debug("Scan finished", extra={"files": scanned, "skipped": len(self.errors)})
        return results


def scan(files: Sequence[str], match_functions: Sequence[str]) -> Tree:
    """Scan ``files`` (files or directories) for calls to ``match_functions``."""
    return Scanner(files, match_functions).find_translations()
