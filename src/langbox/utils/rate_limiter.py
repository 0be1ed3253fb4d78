"""Client-side tracking of the GitHub REST rate limit."""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from langbox.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)

# Warn when fewer requests than this remain
LOW_REMAINING_THRESHOLD = 10


def format_time_remaining(seconds: float) -> str:
    """Format seconds into a human-friendly string."""
    if seconds <= 0:
        return "now"

    seconds = int(seconds)

    if seconds < 60:
        return f"{seconds} second{'s' if seconds != 1 else ''}"
    elif seconds < 3600:
        minutes = seconds // 60
        secs = seconds % 60
        if secs > 0:
            return f"{minutes} min {secs} sec"
        return f"{minutes} minute{'s' if minutes != 1 else ''}"
    else:
        hours = seconds // 3600
        minutes = (seconds % 3600) // 60
        if minutes > 0:
            return f"{hours} hr {minutes} min"
        return f"{hours} hour{'s' if hours != 1 else ''}"


def format_reset_time(reset_timestamp: float) -> str:
    """Format reset timestamp to a human-readable local time."""
    reset_dt = datetime.fromtimestamp(reset_timestamp)
    return reset_dt.strftime("%H:%M:%S")


@dataclass
class RateLimitState:
    """Track rate limit state for an API."""

    limit: int
    remaining: int
    reset_time: float  # Unix timestamp

    @property
    def is_exhausted(self) -> bool:
        """Check if rate limit is exhausted."""
        return self.remaining <= 0

    @property
    def seconds_until_reset(self) -> float:
        """Get seconds until rate limit resets."""
        return max(0, self.reset_time - time.time())

    def update_from_headers(self, headers: dict) -> None:
        """Update state from GitHub API response headers."""
        if "x-ratelimit-limit" in headers:
            self.limit = int(headers["x-ratelimit-limit"])
        if "x-ratelimit-remaining" in headers:
            self.remaining = int(headers["x-ratelimit-remaining"])
        if "x-ratelimit-reset" in headers:
            self.reset_time = float(headers["x-ratelimit-reset"])


@dataclass
class RateLimiter:
    """Rate limiter for the REST API (5000/hour authenticated, 60/hour without)."""

    rest: RateLimitState = field(
        default_factory=lambda: RateLimitState(
            limit=5000, remaining=5000, reset_time=time.time() + 3600
        )
    )

    # Commit fetches for one page run concurrently
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    async def acquire(self, cost: int = 1) -> None:
        """Acquire permission for a REST API request, failing fast when exhausted."""
        async with self._lock:
            state = self.rest
            if state.remaining < cost:
                wait_time = state.seconds_until_reset
                if wait_time > 0:
                    human_time = format_time_remaining(wait_time)
                    reset_at = format_reset_time(state.reset_time)
                    raise RateLimitExceededError(
                        f"Rate limit exceeded. Resets in {human_time} (at {reset_at})"
                    )

            state.remaining -= cost

    def update_from_headers(self, headers: dict) -> None:
        """Update REST rate limit state from response headers."""
        self.rest.update_from_headers(headers)

    def get_status(self) -> dict[str, Any]:
        """Get current rate limit status."""
        return {
            "remaining": self.rest.remaining,
            "limit": self.rest.limit,
            "reset_in": self.rest.seconds_until_reset,
        }


def check_and_report_rate_limit(rate_info: dict, is_authenticated: bool) -> bool:
    """Check the quota reported by /rate_limit and log its state.

    Args:
        rate_info: Response body of GET /rate_limit
        is_authenticated: Whether using authenticated access

    Returns:
        True if OK to proceed, False if rate limit exhausted
    """
    core = rate_info.get("resources", {}).get("core", {})
    remaining = core.get("remaining", 0)
    limit = core.get("limit", 0)
    reset_time = core.get("reset", time.time())

    if remaining == 0:
        logger.error(
            "Rate limit exhausted (0/%d requests remaining), resets in %s (at %s)",
            limit,
            format_time_remaining(reset_time - time.time()),
            format_reset_time(reset_time),
        )
        if not is_authenticated:
            logger.error("Set GH_TOKEN for 5,000 requests/hour instead of 60")
        return False

    if remaining < LOW_REMAINING_THRESHOLD:
        logger.warning("Only %d/%d API requests remaining", remaining, limit)

    return True
