"""Service error types shared by the store, the providers and the transfer workflow."""
from typing import Optional


class ServiceError(Exception):
    """Base class for errors surfaced to API callers."""


class InvalidArgument(ServiceError):
    """Required input missing, or an update with nothing to apply."""


class NotFound(ServiceError):
    """A referenced record does not exist."""


class ProviderUnavailable(ServiceError):
    """The room provider or the summarizer failed."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider} unavailable: {message}")
        self.provider = provider


class StorageFailure(ServiceError):
    """A record store read or write failed.

    ``step`` names the workflow step that was running, so partially written
    transfers can be reconciled by hand.
    """

    def __init__(self, message: str, step: Optional[str] = None):
        super().__init__(message)
        self.step = step

    def __str__(self) -> str:
        message = super().__str__()
        if self.step:
            return f"{self.step}: {message}"
        return message
