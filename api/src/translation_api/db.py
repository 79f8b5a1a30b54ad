from functools import lru_cache
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from translation_api.config import build_database_url


def make_engine(url: str, echo: bool = False) -> Engine:
    """Engine for ``url``; in-memory SQLite shares one connection across threads."""
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)
    return create_engine(url, echo=echo)


@lru_cache(maxsize=1)
def get_engine(url: Optional[str] = None) -> Engine:
    return make_engine(url or build_database_url())


def create_tables(engine: Engine) -> None:
    """Create the catalog tables directly; deployments use the alembic migrations."""
    import translation_models  # noqa: F401

    SQLModel.metadata.create_all(engine)
