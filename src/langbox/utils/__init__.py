"""Utility modules for langbox."""

from langbox.utils.rate_limiter import (
    RateLimiter,
    check_and_report_rate_limit,
    format_reset_time,
    format_time_remaining,
)

__all__ = [
    "RateLimiter",
    "check_and_report_rate_limit",
    "format_reset_time",
    "format_time_remaining",
]
