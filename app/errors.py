# app/errors.py
from __future__ import annotations



class WordTestError(Exception):
    """Base class for errors raised by the word test."""


class StorageError(WordTestError):
    """A key-value backend could not read or write its data."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class ConfigError(WordTestError):
    """Settings file holds a value the application cannot run with."""
