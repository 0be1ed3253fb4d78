"""Sinks that receive the rendered language summary."""

import logging
from typing import Protocol

import httpx

from langbox.exceptions import LangBoxError
from langbox.services.github_rest_client import GitHubRestClient

logger = logging.getLogger(__name__)


class Publisher(Protocol):
    """A destination for the rendered summary. Publishing never raises."""

    name: str

    async def publish(self, content: str) -> bool: ...


def marker_pair(marker: str) -> tuple[str, str]:
    """HTML comment markers delimiting the managed README region."""
    return f"<!-- {marker} start -->", f"<!-- {marker} end -->"


def replace_marker_region(
    document: str,
    start_marker: str,
    end_marker: str,
    body: str,
) -> str | None:
    """Replace the text strictly between the markers with a fenced body.

    Everything outside the markers, markers included, is kept byte for byte.

    Returns:
        The updated document, or None if a marker is missing or the end
        marker first appears before the start marker
    """
    start = document.find(start_marker)
    end = document.find(end_marker)
    if start == -1 or end < start + len(start_marker):
        return None

    head = document[: start + len(start_marker)]
    tail = document[end:]
    return f"{head}\n```\n{body}\n```\n{tail}"


class GistPublisher:
    """Writes the summary into the first file of a gist, renaming it to the title."""

    name = "gist"

    def __init__(self, rest_client: GitHubRestClient, gist_id: str, title: str):
        self.rest_client = rest_client
        self.gist_id = gist_id
        self.title = title

    async def publish(self, content: str) -> bool:
        try:
            gist = await self.rest_client.get_gist(self.gist_id)
            filenames = list((gist.get("files") or {}).keys())
            filename = filenames[0] if filenames else self.title
            await self.rest_client.update_gist(
                self.gist_id,
                {filename: {"filename": self.title, "content": content}},
            )
        except (LangBoxError, httpx.HTTPError, ValueError) as e:
            logger.warning("Failed to update gist %s: %s", self.gist_id, e)
            return False

        logger.info("Updated gist %s", self.gist_id)
        return True


class ReadmePublisher:
    """Rewrites the marker region of a repository document."""

    name = "readme"

    def __init__(
        self,
        rest_client: GitHubRestClient,
        repo: str,
        path: str = "README.md",
        marker: str = "lang-box",
        message: str = "Update recent language stats [skip ci]",
    ):
        self.rest_client = rest_client
        self.repo = repo
        self.path = path
        self.marker = marker
        self.message = message

    async def publish(self, content: str) -> bool:
        start_marker, end_marker = marker_pair(self.marker)
        try:
            document, sha = await self.rest_client.get_file_contents(self.repo, self.path)

            updated = replace_marker_region(document, start_marker, end_marker, content)
            if updated is None:
                logger.warning(
                    "No valid '%s' ... '%s' region in %s/%s",
                    start_marker,
                    end_marker,
                    self.repo,
                    self.path,
                )
                return False

            if updated == document:
                logger.info("%s/%s is already up to date", self.repo, self.path)
                return True

            await self.rest_client.put_file_contents(
                self.repo, self.path, updated, sha, self.message
            )
        except (LangBoxError, httpx.HTTPError, ValueError) as e:
            logger.warning("Failed to update %s/%s: %s", self.repo, self.path, e)
            return False

        logger.info("Updated %s/%s", self.repo, self.path)
        return True
