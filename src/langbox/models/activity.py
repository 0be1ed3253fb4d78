"""Push event, commit and changed-file models."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

PUSH_EVENT = "PushEvent"


class FileStatus(str, Enum):
    """Status of a file in a commit diff."""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    RENAMED = "renamed"
    COPIED = "copied"
    CHANGED = "changed"
    UNCHANGED = "unchanged"


class CommitRef(BaseModel):
    """Commit reference carried in a PushEvent payload."""

    model_config = ConfigDict(frozen=True)

    sha: str
    distinct: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "CommitRef":
        """Create from a PushEvent payload commit."""
        return cls(sha=data.get("sha", ""), distinct=data.get("distinct") is True)


class PushEvent(BaseModel):
    """Event from the user events feed, reduced to what push aggregation needs."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    type: str
    actor: str
    repo: str
    created_at: datetime
    commits: list[CommitRef] = Field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "PushEvent":
        """Create from GitHub Events API response."""
        payload = data.get("payload") or {}
        return cls(
            id=str(data.get("id", "")),
            type=data.get("type", ""),
            actor=(data.get("actor") or {}).get("login", ""),
            repo=(data.get("repo") or {}).get("name", ""),
            created_at=_parse_datetime(data.get("created_at"))
            or datetime.min.replace(tzinfo=timezone.utc),
            commits=[CommitRef.from_api(c) for c in payload.get("commits") or []],
        )

    @property
    def is_push(self) -> bool:
        return self.type == PUSH_EVENT

    def is_by(self, username: str) -> bool:
        """Whether the event was authored by username (logins are case-insensitive)."""
        return self.actor.lower() == username.lower()

    @property
    def distinct_commits(self) -> list[CommitRef]:
        """Commits first introduced by this push."""
        return [c for c in self.commits if c.distinct]


class ChangedFile(BaseModel):
    """A single file entry from a commit diff."""

    path: str
    additions: int = Field(default=0, ge=0)
    deletions: int = Field(default=0, ge=0)
    changes: int = Field(default=0, ge=0)
    status: FileStatus = FileStatus.MODIFIED
    patch: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ChangedFile":
        """Create from a `files` entry of the GitHub Commits API response."""
        return cls(
            path=data["filename"],
            additions=data.get("additions", 0),
            deletions=data.get("deletions", 0),
            changes=data.get("changes", 0),
            status=_parse_status(data.get("status")),
            patch=data.get("patch"),
        )


class ResolvedCommit(BaseModel):
    """Commit with its parents and diff, fetched from the Commits API."""

    sha: str
    repo: str = ""
    parents: list[str] = Field(default_factory=list)
    files: list[ChangedFile] = Field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any], repo: str = "") -> "ResolvedCommit":
        """Create from GitHub Commits API response."""
        return cls(
            sha=data["sha"],
            repo=repo,
            parents=[p.get("sha", "") for p in data.get("parents") or []],
            files=[ChangedFile.from_api(f) for f in data.get("files") or []],
        )

    @property
    def is_merge(self) -> bool:
        """Merge commits carry no authored changes of their own."""
        return len(self.parents) > 1


@dataclass(frozen=True)
class CommitOutcome:
    """Result of fetching one commit: either a commit or the reason it failed."""

    sha: str
    repo: str
    commit: ResolvedCommit | None = None
    error: str | None = None

    @classmethod
    def success(cls, commit: ResolvedCommit) -> "CommitOutcome":
        return cls(sha=commit.sha, repo=commit.repo, commit=commit)

    @classmethod
    def failure(cls, sha: str, repo: str, reason: str) -> "CommitOutcome":
        return cls(sha=sha, repo=repo, error=reason)

    @property
    def ok(self) -> bool:
        return self.commit is not None


def _parse_status(value: str | None) -> FileStatus:
    try:
        return FileStatus(value)
    except ValueError:
        return FileStatus.MODIFIED


def _parse_datetime(value: str | None) -> datetime | None:
    """Parse ISO datetime string."""
    if not value:
        return None
    try:
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        parsed = datetime.fromisoformat(value)
    except (ValueError, TypeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
