"""Custom exception hierarchy for pydink."""

from __future__ import annotations


class DinkError(Exception):
    """Base exception for all pydink errors."""


class DinkConfigError(DinkError):
    """Invalid or missing configuration."""


class DinkInputError(DinkError):
    """Manifest or lock file could not be used.

    Raised before reconciliation starts, so no side effects have been
    performed when one of these surfaces.
    """


class DinkManifestNotFoundError(DinkInputError):
    """The manifest file does not exist."""

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        super().__init__(message)


class DinkManifestError(DinkInputError):
    """The manifest file is not valid JSON or has the wrong shape."""

    def __init__(self, message: str, *, errors: list[str] | None = None) -> None:
        self.errors = list(errors or [])
        super().__init__(message)


class DinkLockFileError(DinkInputError):
    """The lock file exists but is malformed.

    A broken lock file is never treated as empty: pruning against an
    empty lock would orphan every previously vendored file.
    """

    def __init__(self, message: str, *, errors: list[str] | None = None) -> None:
        self.errors = list(errors or [])
        super().__init__(message)


class DinkPathError(DinkError):
    """A module path resolves outside the vendor directory."""


class DinkTransportError(DinkError):
    """HTTP-level failure (network, non-200, oversized body)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        specifier: str = "",
    ) -> None:
        self.status_code = status_code
        self.specifier = specifier
        super().__init__(message)


class DinkContentTooLargeError(DinkTransportError):
    """Remote file is larger than the configured ceiling."""

    def __init__(
        self,
        message: str,
        *,
        content_length: int,
        limit: int,
        specifier: str = "",
    ) -> None:
        self.content_length = content_length
        self.limit = limit
        super().__init__(message, specifier=specifier)
