from __future__ import annotations

from enum import Enum
from typing import Optional

from sqlalchemy.engine import Engine

from translation_api.config import Settings
from translation_api.db import get_engine
from translation_api.drivers.base import Translation
from translation_api.drivers.cache import TranslationCache
from translation_api.drivers.database import DatabaseDriver
from translation_api.drivers.file import FileDriver
from translation_api.errors import InvalidDriver
from translation_api.scanner import Scanner


class Driver(str, Enum):
    FILE = "file"
    DATABASE = "database"

    @classmethod
    def parse(cls, name: Optional[str]) -> "Driver":
        try:
            return cls((name or "").strip().lower())
        except ValueError:
            raise InvalidDriver(str(name)) from None


def build_scanner(settings: Settings) -> Scanner:
    return Scanner(settings.scan_paths, settings.translation_methods)


def resolve_driver(
    name: Optional[str],
    settings: Settings,
    scanner: Optional[Scanner] = None,
    engine: Optional[Engine] = None,
    cache: Optional[TranslationCache] = None,
) -> Translation:
    """Build the driver called ``name``; raises ``InvalidDriver`` for anything else."""
    driver = Driver.parse(name)
    if scanner is None:
        scanner = build_scanner(settings)
    if driver is Driver.FILE:
        return FileDriver(settings.lang_path, settings.source_language, scanner)
    if engine is None:
        engine = get_engine(settings.database_url)
    return DatabaseDriver(engine, settings.source_language, scanner, cache)
