from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlalchemy.dialects.postgresql import TEXT
from sqlmodel import Field

from .base import BaseModel


class Translation(BaseModel, table=True):
    """One translated value scoped by language, group and (dotted) key.

    ``group`` is ``"single"`` or ``"vendor::single"`` for flat strings and a
    group name otherwise. Rows written by old releases carry ``NULL`` here,
    which means ``"single"``.
    """

    __tablename__ = "translations"
    __table_args__ = (
        UniqueConstraint("language_id", "group", "key", name="uq_translation_language_group_key"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    language_id: int = Field(foreign_key="languages.id", index=True)
    group: Optional[str] = Field(default=None, index=True)
    key: str = Field(sa_type=TEXT)
    value: str = Field(default="", sa_type=TEXT)
