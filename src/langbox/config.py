"""Configuration management for langbox."""

import math
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from langbox.exceptions import ConfigurationError

DEFAULT_DAYS = 14
MIN_DAYS = 1
MAX_DAYS = 30


def parse_days(value: object) -> int:
    """Turn a raw lookback value into a window clamped to [1, 30].

    Absent, empty, non-numeric or non-finite values fall back to 14.
    """
    if value is None or value == "":
        return DEFAULT_DAYS
    try:
        number = float(value)
    except (TypeError, ValueError):
        return DEFAULT_DAYS
    if not math.isfinite(number):
        return DEFAULT_DAYS
    return max(MIN_DAYS, min(MAX_DAYS, int(number)))


def parse_top_n(value: object) -> int | None:
    """Parse the render cap. None, 0 and garbage all mean "show everything"."""
    if value is None or value == "":
        return None
    try:
        top_n = int(value)
    except (TypeError, ValueError):
        return None
    return top_n if top_n > 0 else None


def _split_patterns(value: str | None) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(p.strip() for p in value.split(",") if p.strip())


@dataclass
class Config:
    """Application configuration, built once at startup and passed around."""

    github_token: str | None
    gist_id: str | None
    username: str | None
    days: int = DEFAULT_DAYS
    github_api_url: str = "https://api.github.com"

    # README section sink (disabled when readme_repo is None)
    readme_repo: str | None = None
    readme_path: str = "README.md"
    readme_marker: str = "lang-box"

    # Rendering
    top_n: int | None = None
    exclude_patterns: tuple[str, ...] = field(default_factory=tuple)
    gist_title: str = "💻 Recent coding in languages"

    # Events API returns at most 300 events
    max_events: int = 300
    per_page: int = 100

    # Timeouts
    request_timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        # override=False ensures environment variables take precedence over .env
        load_dotenv(override=False)

        return cls(
            github_token=os.getenv("GH_TOKEN") or os.getenv("GITHUB_TOKEN"),
            gist_id=os.getenv("GIST_ID") or None,
            username=os.getenv("USERNAME") or os.getenv("GITHUB_USERNAME"),
            days=parse_days(os.getenv("DAYS")),
            github_api_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
            readme_repo=os.getenv("README_REPO") or None,
            readme_path=os.getenv("README_PATH") or "README.md",
            readme_marker=os.getenv("README_MARKER") or "lang-box",
            top_n=parse_top_n(os.getenv("TOP_N")),
            exclude_patterns=_split_patterns(os.getenv("EXCLUDE_PATTERNS")),
        )

    def validate(self, require_gist: bool = True) -> None:
        """Raise ConfigurationError naming every missing required setting."""
        missing = []
        if not self.github_token:
            missing.append("GH_TOKEN")
        if require_gist and not self.gist_id:
            missing.append("GIST_ID")
        if not self.username:
            missing.append("USERNAME")
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}",
                missing=missing,
            )

    @property
    def is_authenticated(self) -> bool:
        """Check if a GitHub token is configured."""
        return bool(self.github_token)

    @property
    def readme_full_name(self) -> str | None:
        """README repository as owner/repo, defaulting the owner to the target user."""
        if not self.readme_repo:
            return None
        if "/" in self.readme_repo:
            return self.readme_repo
        return f"{self.username}/{self.readme_repo}"

    @property
    def max_pages(self) -> int:
        """Number of event pages the window may span."""
        return math.ceil(self.max_events / self.per_page)
