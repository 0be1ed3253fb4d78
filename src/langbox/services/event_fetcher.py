"""Windowed retrieval of a user's recent push events."""

import logging
import math
from collections.abc import AsyncIterator, Callable
from datetime import datetime, timedelta, timezone

import httpx

from langbox.config import parse_days
from langbox.exceptions import GitHubAPIError, GitHubRateLimitError
from langbox.models.activity import PushEvent
from langbox.services.github_rest_client import GitHubRestClient

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EventWindowFetcher:
    """Pages through the events feed until the lookback window is exhausted.

    The feed is newest first, so once a page reaches back past the cutoff every
    later page is older still and is never requested.
    """

    def __init__(
        self,
        rest_client: GitHubRestClient,
        max_events: int = 300,
        per_page: int = 100,
        now: Callable[[], datetime] = _utcnow,
    ):
        self.rest_client = rest_client
        self.max_events = max_events
        self.per_page = per_page
        self.now = now

    @property
    def max_pages(self) -> int:
        return math.ceil(self.max_events / self.per_page)

    def cutoff(self, days: int) -> datetime:
        """Oldest instant (exclusive) still inside a window of `days`."""
        return self.now() - timedelta(days=parse_days(days))

    async def iter_pages(
        self,
        username: str,
        days: int,
    ) -> AsyncIterator[list[PushEvent]]:
        """Yield the in-window push events of username, one list per feed page.

        Pages are requested strictly one after another. Pagination ends after
        the page that crosses the window boundary, on an empty page, or when
        a page request fails. A failed page keeps everything already yielded.
        Rate limiting and rejected credentials still propagate.
        """
        cutoff = self.cutoff(days)
        logger.debug("Fetching push events for %s since %s", username, cutoff.isoformat())

        for page in range(1, self.max_pages + 1):
            try:
                raw_events = await self.rest_client.fetch_event_page(
                    username, page, self.per_page
                )
            except GitHubRateLimitError:
                raise
            except (GitHubAPIError, httpx.HTTPError) as e:
                logger.debug("No more event pages to load (page %d: %s)", page, e)
                return

            if not raw_events:
                logger.debug("Event page %d is empty", page)
                return

            events = [PushEvent.from_api(e) for e in raw_events]
            pushes = [e for e in events if e.is_push and e.is_by(username)]
            recent = [e for e in pushes if e.created_at > cutoff]
            logger.debug(
                "Page %d: %d events, %d pushes by %s, %d in window",
                page,
                len(events),
                len(pushes),
                username,
                len(recent),
            )

            yield recent

            oldest = min(e.created_at for e in events)
            if oldest <= cutoff:
                return

    async def fetch(self, username: str, days: int) -> list[PushEvent]:
        """Collect every in-window push event of username, newest first."""
        events: list[PushEvent] = []
        async for page_events in self.iter_pages(username, days):
            events.extend(page_events)
        logger.info("%d push events in the last %d days", len(events), parse_days(days))
        return events
