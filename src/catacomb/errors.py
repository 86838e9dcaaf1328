from __future__ import annotations

from typing import Optional


class CatacombError(Exception):
    """Base exception for the catacomb package."""


class ConfigError(CatacombError):
    """Raised when generation settings are missing or out of range."""


class DataValidationError(CatacombError):
    """Raised when a packaged or user data file fails its JSON schema."""

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.errors = errors or []

    def to_human(self) -> str:
        parts = [str(self)]
        for e in self.errors:
            path = "/".join(str(p) for p in e.path) or "<root>"
            parts.append(f" - at {path}: {e.message}")
        return "\n".join(parts)
