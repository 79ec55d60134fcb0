"""Typed error taxonomy shared by every core boundary.

Engine and capture boundaries never raise these to callers; they come back
inside a ``Result``. The API layer maps ``code`` to an HTTP status.
"""

from __future__ import annotations

NOT_INITIALIZED = "NOT_INITIALIZED"
UNSUPPORTED_PROVIDER = "UNSUPPORTED_PROVIDER"
UNKNOWN_PATTERN = "UNKNOWN_PATTERN"
INVALID_STRUCTURE = "INVALID_STRUCTURE"
INVALID_KEYFRAME = "INVALID_KEYFRAME"
PROVIDER_ERROR = "PROVIDER_ERROR"
TIMEOUT = "TIMEOUT"
PERSISTENCE_ERROR = "PERSISTENCE_ERROR"
NOT_FOUND = "NOT_FOUND"
INVALID_CONSTRAINTS = "INVALID_CONSTRAINTS"
CANCELLED = "CANCELLED"


class ShotcallerError(Exception):
    """Base class. Every subclass carries a machine-readable code."""

    default_code = "ERROR"

    def __init__(self, message: str, code: str | None = None, details: object = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message, "type": type(self).__name__}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code}: {self.message})"


class ConfigurationError(ShotcallerError):
    """Engine used before initialization."""

    default_code = NOT_INITIALIZED


class UnsupportedCapability(ShotcallerError):
    """Unknown provider identifier or pattern tag."""

    default_code = UNSUPPORTED_PROVIDER


class ValidationError(ShotcallerError):
    """Malformed backend response or keyframe."""

    default_code = INVALID_STRUCTURE


class ProviderError(ShotcallerError):
    """Wrapped backend failure (including timeouts)."""

    default_code = PROVIDER_ERROR


class PersistenceError(ShotcallerError):
    """Metadata store read/write failure."""

    default_code = PERSISTENCE_ERROR


class UnknownPatternWarning(UserWarning):
    """Non-fatal: a pattern tag with no registered expander."""
