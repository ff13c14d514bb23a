"""Exceptions raised by the sync engine."""

from pathlib import Path
from typing import Any


class SyncError(Exception):
    """Base class for every error that terminates a sync run."""


class ConfigurationError(SyncError, ValueError):
    """Raised when required settings or credentials are missing or invalid."""


class TransportError(SyncError):
    """Exception raised for Sentiary API errors."""

    def __init__(self, message: str, status_code: int | None = None, response: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class CycleError(SyncError):
    """Raised when language overrides fall back to each other in a loop."""

    def __init__(self, languages: list[str]) -> None:
        self.languages = tuple(languages)
        super().__init__(
            "Circular dependency detected in language overrides: "
            + ", ".join(self.languages)
        )


class UnresolvedFallbackError(SyncError):
    """Raised when an override's fallback language was never materialized."""

    def __init__(self, language: str, fallback: str) -> None:
        self.language = language
        self.fallback = fallback
        super().__init__(
            f"Could not resolve fallback for '{language}'. "
            f"The dependency '{fallback}' is missing."
        )


class OutputWriteError(SyncError):
    """Raised when an output file or the cache marker cannot be written."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = Path(path)
        super().__init__(f"Failed to write {self.path}: {cause}")
