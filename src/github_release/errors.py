"""Exception types raised by the release client.

Nothing in this package catches these: a missing argument or a failed API
call is meant to stop the run and show the operator what went wrong.

- ConfigurationError: a required argument was missing or empty. Raised
  before any network traffic.
- TransportError: the API answered with a non-2xx status.

Local file problems (the asset cannot be opened) are left as the
built-in OSError subclasses (FileNotFoundError, PermissionError).
"""

from __future__ import annotations

from typing import Any


class GitHubReleaseError(Exception):
    """Base class for all errors raised by github_release."""


class ConfigurationError(GitHubReleaseError, ValueError):
    """A required constructor or operation argument is missing.

    Attributes:
        field: Name of the missing argument (e.g. "tag_name")
    """

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"{field} is required")


class TransportError(GitHubReleaseError):
    """The GitHub API returned a non-success HTTP status.

    Attributes:
        method: HTTP method of the failed request
        url: URL of the failed request
        status_code: HTTP status code returned by the server
        body: Response body, decoded as JSON when possible
    """

    def __init__(self, method: str, url: str, status_code: int, body: Any) -> None:
        self.method = method
        self.url = url
        self.status_code = status_code
        self.body = body
        super().__init__(f"{method} {url} failed with HTTP {status_code}: {self._summary()}")

    def _summary(self) -> str:
        if isinstance(self.body, dict) and "message" in self.body:
            return str(self.body["message"])
        return str(self.body)
