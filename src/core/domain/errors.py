"""Error taxonomy for a sync run.

Fatal errors (config, auth, locale discovery) abort the run; per-locale
errors are caught by the pipeline at the loop boundary.
"""

from __future__ import annotations

from typing import Iterable


class TraduoraSyncError(Exception):
    """Base class for every error raised by the sync core."""


class ConfigurationError(TraduoraSyncError):
    """The env file is missing or lacks required keys."""

    def __init__(
        self,
        message: str,
        *,
        missing_keys: Iterable[str] = (),
        source_missing: bool = False,
    ) -> None:
        super().__init__(message)
        self.missing_keys: tuple[str, ...] = tuple(missing_keys)
        self.source_missing = source_missing


class AuthenticationFailed(TraduoraSyncError):
    """The token endpoint rejected the credentials or answered garbage."""


class NoToken(TraduoraSyncError):
    """An authorized call was attempted before `authenticate()`."""

    def __init__(self, message: str = "not authenticated: call authenticate() first") -> None:
        super().__init__(message)


class RequestFailed(TraduoraSyncError):
    """Listing or export endpoint returned a non-200 response or a bad body."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url
