"""
Exception taxonomy.

Read-path errors ('NotFoundError', 'RateLimitedError', 'RemoteError',
'NetworkError') are caught by the session manager and degraded to the default
sources. Write-path errors ('ConfigError', 'RemoteError', 'WriteError') are
surfaced to the admin verbatim. 'EmptySourcesError' guards the answering path.
"""


class NotebookError(Exception):
    """Base class for all errors raised by this package."""


class ConfigError(NotebookError):
    """The document id or the write credential is missing."""


class NotFoundError(NotebookError):
    """The remote document id does not resolve to a document."""


class RateLimitedError(NotebookError):
    """The remote API refused the request because of rate limiting."""


class RemoteError(NotebookError):
    """Any other non-success response from the remote API."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(f"GitHub API error! status: {status}, message: {message}")
        self.status = status
        self.message = message


class NetworkError(NotebookError):
    """Transport-level failure while reading from the remote store."""


class WriteError(NotebookError):
    """Transport-level failure while writing to the remote store."""


class EmptySourcesError(NotebookError):
    """A question was asked against an empty source collection."""
