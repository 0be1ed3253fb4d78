"""Services for fetching activity and publishing results."""

from langbox.services.commit_resolver import CommitResolver
from langbox.services.event_fetcher import EventWindowFetcher
from langbox.services.github_rest_client import GitHubRestClient
from langbox.services.publishers import GistPublisher, ReadmePublisher

__all__ = [
    "GitHubRestClient",
    "EventWindowFetcher",
    "CommitResolver",
    "GistPublisher",
    "ReadmePublisher",
]
