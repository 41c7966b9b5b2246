from __future__ import annotations


class CoachError(Exception):
    """Base class for interview coach failures."""


class MissingCredentialError(CoachError):
    """Raised when the gateway has no provider API key configured."""

    def __init__(self, message: str = "API Key missing: set GOOGLE_API_KEY in environment or .env") -> None:
        super().__init__(message)


class ProviderError(CoachError):
    """The hosted chat model failed or returned something unusable."""


class SessionBusyError(CoachError):
    """A turn is already in flight for this session."""


class ActionUnavailableError(CoachError):
    """The requested auxiliary action is not allowed yet."""
