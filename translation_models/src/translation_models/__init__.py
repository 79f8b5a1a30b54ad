"""Shared SQLModel models package.

Tables backing the database translation driver, reused by the API, the CLI
and alembic migrations.
"""

from .base import BaseModel
from .language import Language
from .translation import Translation

__all__ = [
    "BaseModel",
    "Language",
    "Translation",
]
