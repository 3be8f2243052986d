"""
Exception hierarchy for GitLab Connections.

All exceptions inherit from GitLabConnectionError, allowing callers to
catch every library error with a single except clause.

Example:
    >>> try:
    ...     client = service.get_client("gitlab.com")
    ... except GitLabConnectionError as e:
    ...     print(f"Cannot talk to GitLab: {e}")
"""

from __future__ import annotations

from glconn.core.error_types import ErrorType


class GitLabConnectionError(Exception):
    """Base exception for all glconn errors."""

    error_type: ErrorType | None = None


class ClientConstructionError(GitLabConnectionError):
    """Raised when a GitLab client cannot be built for a profile.

    Covers unknown or unsuitable credential references and invalid
    client settings (e.g. a malformed URL rejected by httpx).

    Example:
        >>> builder.build_client("https://gitlab.example.com", "missing", False)
        >>> ClientConstructionError: Credential 'missing' not found
    """

    error_type = ErrorType.CONSTRUCTION_ERROR


class RemoteRejectedError(GitLabConnectionError):
    """Raised when GitLab answers with a non-success status.

    Attributes:
        status_code: HTTP status code returned by GitLab
        message: Message reported by GitLab (or the reason phrase)
        url: Request URL
    """

    error_type = ErrorType.REMOTE_REJECTED

    def __init__(self, status_code: int, message: str, url: str = "") -> None:
        self.status_code = status_code
        self.message = message
        self.url = url
        super().__init__(message)

    def __repr__(self) -> str:
        return (
            f"RemoteRejectedError(status_code={self.status_code!r}, "
            f"message={self.message!r}, url={self.url!r})"
        )


class TransportFailureError(GitLabConnectionError):
    """Raised when GitLab cannot be reached at all.

    Wraps the underlying httpx exception (connection refused, TLS
    handshake failure, timeout...). ``cause`` is the wrapped exception.
    """

    error_type = ErrorType.TRANSPORT_FAILURE

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__(message)

    @property
    def cause_message(self) -> str:
        """Message of the wrapped exception, falling back to our own."""
        if self.cause is not None and str(self.cause):
            return str(self.cause)
        return str(self)


class StorageError(GitLabConnectionError):
    """Raised when connection or credential storage fails.

    Covers file I/O errors, permission issues and corrupt documents.
    """


__all__ = [
    "GitLabConnectionError",
    "ClientConstructionError",
    "RemoteRejectedError",
    "TransportFailureError",
    "StorageError",
]
