"""Pipeline driver: events -> commits -> files -> language stats -> sinks."""

import logging

from langbox.analysis.aggregator import aggregate, render
from langbox.analysis.classifier import LanguageClassifier
from langbox.config import Config, parse_days
from langbox.models.activity import ResolvedCommit
from langbox.models.language import LanguageReport
from langbox.services.commit_resolver import CommitResolver
from langbox.services.event_fetcher import EventWindowFetcher
from langbox.services.github_rest_client import GitHubRestClient
from langbox.services.publishers import GistPublisher, Publisher, ReadmePublisher

logger = logging.getLogger(__name__)


def build_publishers(config: Config, rest_client: GitHubRestClient) -> list[Publisher]:
    """Create the sinks enabled by config."""
    publishers: list[Publisher] = []
    if config.gist_id:
        publishers.append(GistPublisher(rest_client, config.gist_id, config.gist_title))
    if config.readme_full_name:
        publishers.append(
            ReadmePublisher(
                rest_client,
                config.readme_full_name,
                path=config.readme_path,
                marker=config.readme_marker,
            )
        )
    return publishers


class ActivityPipeline:
    """Sequences the aggregation stages and hands the result to the sinks.

    Example usage:
        ```python
        config = Config.from_env()
        config.validate()

        async with GitHubRestClient(config) as client:
            report = await ActivityPipeline(config, client).run()
            print(report.content)
        ```
    """

    def __init__(
        self,
        config: Config,
        rest_client: GitHubRestClient,
        publishers: list[Publisher] | None = None,
        classifier: LanguageClassifier | None = None,
        fetcher: EventWindowFetcher | None = None,
    ):
        self.config = config
        self.rest_client = rest_client
        self.publishers = (
            publishers if publishers is not None else build_publishers(config, rest_client)
        )
        self.classifier = classifier or LanguageClassifier(config.exclude_patterns)
        self.fetcher = fetcher or EventWindowFetcher(
            rest_client,
            max_events=config.max_events,
            per_page=config.per_page,
        )
        self.resolver = CommitResolver(rest_client)

    async def collect(self) -> LanguageReport:
        """Fetch, resolve, classify and aggregate the user's recent pushes."""
        username = self.config.username
        days = parse_days(self.config.days)
        logger.info("Collecting push activity for %s over %d days", username, days)

        events = 0
        commits: list[ResolvedCommit] = []
        # Each page's commits are resolved before the next page is requested
        async for page_events in self.fetcher.iter_pages(username, days):
            events += len(page_events)
            commits.extend(await self.resolver.resolve(page_events))

        files = self.resolver.changed_files(commits)
        logger.info("%d events, %d commits, %d files", events, len(commits), len(files))

        languages = aggregate(files, self.classifier)
        for lang in languages:
            logger.debug("%s: %d files, %d changes", lang.name, lang.count, lang.changes)

        return LanguageReport(
            username=username,
            days=days,
            events=events,
            commits=len(commits),
            files=len(files),
            languages=languages,
            content=render(languages, days, self.config.top_n),
        )

    async def publish(self, report: LanguageReport) -> dict[str, bool]:
        """Send the rendered content to every sink, including the empty placeholder."""
        results = {}
        for publisher in self.publishers:
            results[publisher.name] = await publisher.publish(report.content)
        report.published = results
        return results

    async def run(self, dry_run: bool = False) -> LanguageReport:
        """Collect, then publish unless dry_run."""
        report = await self.collect()
        if not dry_run:
            await self.publish(report)
        return report
