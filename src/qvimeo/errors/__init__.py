"""Custom exception hierarchy for qvimeo.

The list model never raises for expected request failures; these errors are
used by the collaborators around it (settings, authentication, the CLI).
"""

from __future__ import annotations


class QVimeoError(Exception):
    """Base class for all custom errors raised by qvimeo."""


class RequestFailedError(QVimeoError):
    """Raised when a synchronous caller needs a failed request as an exception."""

    def __init__(self, message: str, *, error: int = 0) -> None:
        super().__init__(message)
        self.error = error


class AuthenticationError(RequestFailedError):
    """Raised when an OAuth2 token could not be obtained."""


class SettingsError(QVimeoError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""


__all__ = [
    "AuthenticationError",
    "QVimeoError",
    "RequestFailedError",
    "SettingsError",
    "SettingsLoadError",
    "SettingsValidationError",
]
