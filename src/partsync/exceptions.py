"""
Exceptions raised by partsync.
"""

from typing import Optional


class PartsyncError(Exception):
    """Base class for all partsync errors."""


class ConfigurationError(PartsyncError):
    """Required credentials or settings are missing."""


class InputError(PartsyncError):
    """A category source file is missing or is not a JSON array."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class MissingFileError(InputError):
    """The category source file does not exist."""


class MalformedFileError(InputError):
    """The category source file is not a well-formed JSON array."""


class UnknownCategoryError(PartsyncError, KeyError):
    """No transform is registered for a canonical category name."""

    def __str__(self) -> str:
        return f"Unknown category: {self.args[0]}"


class PublishError(PartsyncError):
    """
    An upsert batch was rejected by the remote store.

    `code` is the PostgREST error code (e.g. '23505'). `status` is the HTTP
    status when it is known: PostgREST error bodies do not carry it, so it
    is only set when the client fell back to the raw response status
    (non-JSON error body).
    """

    def __init__(self, code, detail: str, status: Optional[int] = None):
        label = f"HTTP {status}" if status is not None else f"code {code}"
        super().__init__(f"Supabase upsert failed: {label} - {detail}")
        self.code = code
        self.status = status
        self.detail = detail
