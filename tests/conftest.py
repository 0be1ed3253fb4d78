"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from langbox.config import Config
from langbox.services.github_rest_client import GitHubRestClient

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def iso(dt: datetime) -> str:
    """Format a datetime the way the GitHub API does."""
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@pytest.fixture
def now():
    """Fixed clock for window calculations."""
    return NOW


@pytest.fixture
def test_config():
    """Create a test configuration."""
    return Config(
        github_token="test_token",
        gist_id="gist123",
        username="octocat",
        days=14,
    )


@pytest.fixture
def mock_client():
    """REST client double; tests set the endpoint behaviour they need."""
    return AsyncMock(spec=GitHubRestClient)


@pytest.fixture
def make_event():
    """Factory for raw Events API records."""

    def _make_event(
        age: timedelta,
        actor: str = "octocat",
        type: str = "PushEvent",
        repo: str = "octocat/hello-world",
        commits: list[dict] | None = None,
        event_id: str = "1",
    ) -> dict:
        return {
            "id": event_id,
            "type": type,
            "actor": {"login": actor},
            "repo": {"name": repo},
            "created_at": iso(NOW - age),
            "payload": {"commits": commits if commits is not None else []},
        }

    return _make_event


@pytest.fixture
def make_commit():
    """Factory for raw Commits API responses."""

    def _make_commit(
        sha: str,
        files: list[dict] | None = None,
        parents: int = 1,
    ) -> dict:
        return {
            "sha": sha,
            "parents": [{"sha": f"{sha}-parent{i}"} for i in range(parents)],
            "files": files or [],
        }

    return _make_commit


@pytest.fixture
def make_file():
    """Factory for `files` entries of a Commits API response."""

    def _make_file(
        filename: str,
        additions: int = 1,
        deletions: int = 0,
        status: str = "modified",
        patch: str | None = None,
    ) -> dict:
        return {
            "filename": filename,
            "additions": additions,
            "deletions": deletions,
            "changes": additions + deletions,
            "status": status,
            "patch": patch,
        }

    return _make_file
