from __future__ import annotations


class PromptCloudError(Exception):
    """Base class for failures surfaced by the data access layer."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PromptCloudError):
    """Caller input is incomplete or malformed."""

    status_code = 400


class NotFoundError(PromptCloudError):
    """The targeted folder or prompt does not exist."""

    status_code = 404


class InvalidReferenceError(PromptCloudError):
    """A prompt points at a folder that does not exist."""

    status_code = 400


class StoreUnavailableError(PromptCloudError):
    """The database failed in a way the caller cannot correct."""

    status_code = 500
