"""Domain errors raised by the scanner, the drivers and driver resolution."""

from __future__ import annotations

from typing import Optional


class TranslationError(Exception):
    """Base class for every error raised by translation_api."""


class LanguageExists(TranslationError):
    def __init__(self, language: str) -> None:
        super().__init__(f"The language {language} already exists")
        self.language = language


class InvalidDriver(TranslationError):
    def __init__(self, driver: str) -> None:
        super().__init__(f"Invalid driver [{driver}]")
        self.driver = driver


class InvalidScannerConfiguration(TranslationError):
    """The configured translation methods do not form a valid pattern."""


class IOFailure(TranslationError):
    """A language file or scanned source could not be read or written."""

    def __init__(self, path: str, reason: Optional[str] = None) -> None:
        message = f"I/O failure on {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.path = path
        self.reason = reason


class MalformedStoredData(TranslationError):
    """A stored group or JSON file does not parse."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Malformed translation file {path}: {reason}")
        self.path = path
        self.reason = reason
