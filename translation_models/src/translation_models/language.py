from typing import Optional

from sqlmodel import Field

from .base import BaseModel


class Language(BaseModel, table=True):
    """A locale known to the catalog, unique by its code."""

    __tablename__ = "languages"

    id: Optional[int] = Field(default=None, primary_key=True)

    language: str = Field(unique=True, index=True)
    name: Optional[str] = Field(default=None)
