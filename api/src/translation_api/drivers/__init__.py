from .base import Translation
from .cache import ArrayCache, TranslationCache
from .database import DatabaseDriver
from .file import FileDriver

__all__ = [
    "Translation",
    "ArrayCache",
    "TranslationCache",
    "DatabaseDriver",
    "FileDriver",
]
