"""GitHub REST API client."""

import base64
import binascii
import time
from typing import Any, Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from langbox.config import Config
from langbox.exceptions import (
    AuthenticationError,
    GitHubAPIError,
    GitHubNotFoundError,
    GitHubRateLimitError,
)
from langbox.utils.rate_limiter import RateLimiter


class GitHubRestClient:
    """Async client for the handful of GitHub REST endpoints langbox needs."""

    def __init__(
        self,
        config: Config,
        rate_limiter: Optional[RateLimiter] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.rate_limiter = rate_limiter or RateLimiter()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_headers(self) -> dict[str, str]:
        """Get headers for API requests."""
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "langbox/0.1.0",
        }
        if self.config.github_token:
            headers["Authorization"] = f"Bearer {self.config.github_token}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.github_api_url,
                headers=self._get_headers(),
                timeout=self.config.request_timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "GitHubRestClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @retry(
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True,
    )
    async def _request(
        self,
        method: str,
        endpoint: str,
        **kwargs,
    ) -> httpx.Response:
        """Make an API request with rate limiting and retries."""
        await self.rate_limiter.acquire()

        client = await self._get_client()
        response = await client.request(method, endpoint, **kwargs)

        self.rate_limiter.update_from_headers(dict(response.headers))

        if response.status_code == 401:
            raise AuthenticationError(
                f"Bad credentials: {_error_body(response).get('message', 'Unauthorized')}"
            )
        elif response.status_code == 404:
            raise GitHubNotFoundError(
                f"Resource not found: {endpoint}",
                status_code=404,
                response_body=_error_body(response) or None,
            )
        elif response.status_code in (403, 429):
            # 429 and retry-after mark the secondary limit
            body = _error_body(response)
            if (
                response.status_code == 429
                or "retry-after" in response.headers
                or "rate limit" in body.get("message", "").lower()
            ):
                raise GitHubRateLimitError(
                    f"Rate limit exceeded: {body.get('message', response.status_code)}",
                    status_code=response.status_code,
                    response_body=body,
                    reset_time=_reset_time(response),
                )
            raise GitHubAPIError(
                f"Forbidden: {body.get('message', 'Unknown error')}",
                status_code=403,
                response_body=body,
            )
        elif response.status_code >= 500:
            raise GitHubAPIError(
                f"Server error: {response.status_code}",
                status_code=response.status_code,
            )
        elif response.status_code >= 400:
            body = _error_body(response)
            raise GitHubAPIError(
                f"API error: {body.get('message', 'Unknown error')}",
                status_code=response.status_code,
                response_body=body,
            )

        return response

    async def get(self, endpoint: str, **kwargs) -> Any:
        """Make a GET request and return JSON response."""
        response = await self._request("GET", endpoint, **kwargs)
        return response.json()

    # Endpoints

    async def fetch_event_page(
        self,
        username: str,
        page: int,
        per_page: int = 100,
    ) -> list[dict[str, Any]]:
        """Get one page of a user's events (newest first, max 300 events overall)."""
        return await self.get(
            f"/users/{username}/events",
            params={"per_page": per_page, "page": page},
        )

    async def fetch_commit(self, repo_name: str, sha: str) -> dict[str, Any]:
        """Get a single commit including its parents and changed files."""
        return await self.get(f"/repos/{repo_name}/commits/{sha}")

    async def get_gist(self, gist_id: str) -> dict[str, Any]:
        """Get a gist."""
        return await self.get(f"/gists/{gist_id}")

    async def update_gist(
        self,
        gist_id: str,
        files: dict[str, dict[str, str]],
    ) -> dict[str, Any]:
        """Update gist files. Keys are current filenames."""
        response = await self._request("PATCH", f"/gists/{gist_id}", json={"files": files})
        return response.json()

    async def get_file_contents(self, repo_name: str, path: str) -> tuple[str, str]:
        """Get a repository file as (decoded text, blob sha)."""
        endpoint = f"/repos/{repo_name}/contents/{path}"
        data = await self.get(endpoint)
        # Directories come back as a list, symlinks and submodules with another type
        if not isinstance(data, dict) or data.get("type", "file") != "file" or not data.get("sha"):
            raise GitHubAPIError(f"Not a file: {endpoint}")
        try:
            text = base64.b64decode(data.get("content") or "").decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise GitHubAPIError(f"Undecodable file contents: {endpoint} ({e})") from e
        return text, data["sha"]

    async def put_file_contents(
        self,
        repo_name: str,
        path: str,
        content: str,
        sha: str,
        message: str,
    ) -> dict[str, Any]:
        """Commit new contents for an existing repository file."""
        response = await self._request(
            "PUT",
            f"/repos/{repo_name}/contents/{path}",
            json={
                "message": message,
                "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
                "sha": sha,
            },
        )
        return response.json()

    async def get_rate_limit(self) -> dict[str, Any]:
        """Get current rate limit status (does not count against the quota)."""
        return await self.get("/rate_limit")


def _reset_time(response: httpx.Response) -> float | None:
    """Unix time the limit lifts, from x-ratelimit-reset or retry-after seconds."""
    reset = response.headers.get("x-ratelimit-reset")
    if reset:
        return float(reset)
    retry_after = response.headers.get("retry-after")
    if retry_after and retry_after.isdigit():
        return time.time() + int(retry_after)
    return None


def _error_body(response: httpx.Response) -> dict[str, Any]:
    """Decode an error response body, tolerating empty or non-JSON bodies."""
    if not response.content:
        return {}
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}
