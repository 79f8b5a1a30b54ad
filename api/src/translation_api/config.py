import os
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_TRANSLATION_METHODS = ["trans", "__", "t", "@lang"]


def _split(value: Optional[str], sep: str) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(sep) if part.strip()]


def build_database_url() -> str:
    """DATABASE_URL wins; otherwise Postgres from POSTGRES_* when present, else a local SQLite file."""
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    if "POSTGRES_HOST" in os.environ:
        db_user = os.environ["POSTGRES_USER"]
        db_password = os.environ["POSTGRES_PASSWORD"]
        db_name = os.environ["POSTGRES_DB"]
        db_host = os.environ["POSTGRES_HOST"]
        db_port = os.environ.get("POSTGRES_PORT", "5432")
        return f"postgresql+psycopg://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"
    return "sqlite:///translations.db"


@dataclass
class Settings:
    driver: str = "file"
    source_language: str = "en"
    lang_path: str = "lang"
    scan_paths: List[str] = field(default_factory=lambda: ["."])
    translation_methods: List[str] = field(default_factory=lambda: list(DEFAULT_TRANSLATION_METHODS))
    database_url: str = "sqlite:///translations.db"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            driver=os.getenv("TRANSLATION_DRIVER", "file").strip().lower(),
            source_language=os.getenv("TRANSLATION_SOURCE_LANGUAGE", "en"),
            lang_path=os.getenv("TRANSLATION_LANG_PATH", "lang"),
            scan_paths=_split(os.getenv("TRANSLATION_SCAN_PATHS"), os.pathsep) or ["."],
            translation_methods=_split(os.getenv("TRANSLATION_METHODS"), ",") or list(DEFAULT_TRANSLATION_METHODS),
            database_url=build_database_url(),
        )
