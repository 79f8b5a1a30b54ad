from __future__ import annotations

import copy
from typing import Any, Dict, Optional, Protocol


def cache_key(language: str, scope: str) -> str:
    """``language.{lang}.single`` / ``language.{lang}.group``."""
    return f"language.{language}.{scope}"


class TranslationCache(Protocol):
    """Read-through cache port injected into the database driver."""

    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any) -> None: ...

    def invalidate(self, key: str) -> None: ...


class ArrayCache:
    """Process-local cache; hands out copies so callers cannot mutate entries."""

    def __init__(self) -> None:
        self._store: Dict[str, Any] = {}

    def get(self, key: str) -> Optional[Any]:
        if key not in self._store:
            return None
        return copy.deepcopy(self._store[key])

    def set(self, key: str, value: Any) -> None:
        self._store[key] = copy.deepcopy(value)

    def invalidate(self, key: str) -> None:
        self._store.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._store
