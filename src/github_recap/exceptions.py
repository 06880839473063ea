"""Exceptions for GitHub Recap.

Exception Hierarchy:
    GitHubRecapError (base)
    ├── AuthExchangeError (authorization code could not be traded for a token)
    └── GitHubAPIError (HTTP API errors with status codes)
        ├── AuthError (401, stored or received token rejected)
        └── FetchError (any other non-success status from a required endpoint)

    PartialDataWarning (UserWarning)
        Logged when one repository's commit count is incomplete. Never raised;
        the run continues with the partial count.
"""

__all__ = [
    "GitHubRecapError",
    "AuthExchangeError",
    "GitHubAPIError",
    "AuthError",
    "FetchError",
    "PartialDataWarning",
]


class GitHubRecapError(Exception):
    """Base exception for all GitHub Recap errors."""

    pass


class AuthExchangeError(GitHubRecapError):
    """Raised when the code-for-token exchange fails or is denied."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class GitHubAPIError(GitHubRecapError):
    """Base exception for GitHub API errors (HTTP responses with error status codes)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: dict | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class AuthError(GitHubAPIError):
    """Raised when GitHub rejects the bearer token (HTTP 401).

    The caller is expected to clear the stored credential and ask the user
    to log in again.
    """

    def __init__(
        self,
        message: str = "Invalid token. Please login again.",
        status_code: int | None = 401,
        response_body: dict | None = None,
    ):
        super().__init__(message, status_code=status_code, response_body=response_body)


class FetchError(GitHubAPIError):
    """Raised when a required endpoint answers with a non-success status."""

    pass


class PartialDataWarning(UserWarning):
    """A repository's commit count was cut short by an error or the page cap."""

    def __init__(self, repo: str, count: int, reason: str):
        super().__init__(f"{repo}: commit count incomplete ({reason}), using {count}")
        self.repo = repo
        self.count = count
        self.reason = reason
