"""Exceptions for langbox.

Exception Hierarchy:
    LangBoxError (base)
    ├── ConfigurationError (missing or invalid settings, raised before any request)
    ├── GitHubAPIError (HTTP API errors with status codes)
    │   ├── GitHubRateLimitError (403 rate limit from API response)
    │   └── GitHubNotFoundError (404 not found)
    ├── AuthenticationError (token rejected, 401)
    └── RateLimitExceededError (local rate limit tracking, before making request)

Usage:
    - GitHubNotFoundError / GitHubAPIError: local to one page or one commit;
      the event fetcher and commit resolver absorb them
    - AuthenticationError, GitHubRateLimitError, RateLimitExceededError:
      structural, always propagate to the caller
"""

__all__ = [
    "LangBoxError",
    "ConfigurationError",
    "GitHubAPIError",
    "GitHubRateLimitError",
    "GitHubNotFoundError",
    "AuthenticationError",
    "RateLimitExceededError",
]


class LangBoxError(Exception):
    """Base exception for all langbox errors."""

    pass


class ConfigurationError(LangBoxError):
    """Raised when required settings are missing or invalid."""

    def __init__(self, message: str, missing: list[str] | None = None):
        super().__init__(message)
        self.missing = missing or []


class GitHubAPIError(LangBoxError):
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

    @property
    def is_client_error(self) -> bool:
        """True for 4xx responses."""
        return self.status_code is not None and 400 <= self.status_code < 500


class GitHubRateLimitError(GitHubAPIError):
    """Raised when GitHub API returns a rate limit error (HTTP 403).

    For preemptive rate limiting (before making requests), see RateLimitExceededError.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = 403,
        response_body: dict | None = None,
        reset_time: float | None = None,
    ):
        super().__init__(message, status_code=status_code, response_body=response_body)
        self.reset_time = reset_time


class GitHubNotFoundError(GitHubAPIError):
    """Raised when a GitHub resource is not found (HTTP 404)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = 404,
        response_body: dict | None = None,
    ):
        super().__init__(message, status_code=status_code, response_body=response_body)


class AuthenticationError(LangBoxError):
    """Raised when authentication fails or token is invalid."""

    pass


class RateLimitExceededError(LangBoxError):
    """Raised by local rate limiter when limits are exhausted.

    This is a preemptive exception raised before making a request when the
    local rate limit tracker indicates no remaining requests.
    """

    pass
