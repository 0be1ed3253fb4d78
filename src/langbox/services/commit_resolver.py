"""Resolves push-event commit references into full commit diffs."""

import asyncio
import logging

import httpx
from pydantic import ValidationError

from langbox.exceptions import GitHubAPIError, GitHubRateLimitError
from langbox.models.activity import ChangedFile, CommitOutcome, PushEvent, ResolvedCommit
from langbox.services.github_rest_client import GitHubRestClient

logger = logging.getLogger(__name__)


class CommitResolver:
    """Fetches the diff of every distinct commit referenced by push events.

    Fetches are best effort: a commit that cannot be fetched contributes
    nothing, and the rest of the batch is unaffected.
    """

    def __init__(self, rest_client: GitHubRestClient):
        self.rest_client = rest_client

    @staticmethod
    def select_refs(events: list[PushEvent]) -> list[tuple[str, str]]:
        """Flatten events into (repo, sha) pairs, keeping only distinct commits."""
        return [(event.repo, ref.sha) for event in events for ref in event.distinct_commits]

    async def fetch_one(self, repo: str, sha: str) -> CommitOutcome:
        """Fetch one commit, turning per-commit errors into a failed outcome."""
        try:
            data = await self.rest_client.fetch_commit(repo, sha)
            return CommitOutcome.success(ResolvedCommit.from_api(data, repo))
        except GitHubRateLimitError:
            raise
        except (GitHubAPIError, httpx.HTTPError) as e:
            reason = str(e)
        except (ValidationError, KeyError, TypeError) as e:
            reason = f"malformed commit payload: {e}"

        logger.debug("Skipping commit %s@%s: %s", repo, sha[:7], reason)
        return CommitOutcome.failure(sha, repo, reason)

    async def resolve_outcomes(self, events: list[PushEvent]) -> list[CommitOutcome]:
        """Fetch all distinct commits of a batch concurrently and wait for every one."""
        refs = self.select_refs(events)
        if not refs:
            return []
        return list(await asyncio.gather(*(self.fetch_one(repo, sha) for repo, sha in refs)))

    async def resolve(self, events: list[PushEvent]) -> list[ResolvedCommit]:
        """Resolve a batch of events, keeping only the commits that were fetched."""
        outcomes = await self.resolve_outcomes(events)
        commits = [o.commit for o in outcomes if o.commit is not None]

        failed = len(outcomes) - len(commits)
        if failed:
            logger.debug("%d of %d commits could not be fetched", failed, len(outcomes))

        return commits

    @staticmethod
    def changed_files(commits: list[ResolvedCommit]) -> list[ChangedFile]:
        """Concatenate the changed files of every non-merge commit."""
        return [f for commit in commits if not commit.is_merge for f in commit.files]
