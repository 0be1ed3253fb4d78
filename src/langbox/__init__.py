"""langbox - Recent coding activity by language.

Aggregates a GitHub user's recent public pushes into per-language change
statistics and publishes the rendered summary to a gist and a README section.

Example usage:
    ```python
    from langbox import ActivityPipeline, Config, GitHubRestClient

    config = Config.from_env()
    config.validate()

    async with GitHubRestClient(config) as client:
        report = await ActivityPipeline(config, client).run(dry_run=True)
        print(report.content)
    ```
"""

from langbox.config import Config
from langbox.exceptions import (
    AuthenticationError,
    ConfigurationError,
    GitHubAPIError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    LangBoxError,
    RateLimitExceededError,
)
from langbox.models import (
    ChangedFile,
    CommitOutcome,
    CommitRef,
    LanguageReport,
    LanguageStat,
    PushEvent,
    ResolvedCommit,
)
from langbox.pipeline import ActivityPipeline
from langbox.services.github_rest_client import GitHubRestClient

try:
    from langbox._version import version as __version__
except ImportError:
    __version__ = "0.0.0.dev0"

__all__ = [
    # Pipeline
    "ActivityPipeline",
    "GitHubRestClient",
    # Configuration
    "Config",
    # Exceptions
    "LangBoxError",
    "ConfigurationError",
    "GitHubAPIError",
    "GitHubRateLimitError",
    "GitHubNotFoundError",
    "RateLimitExceededError",
    "AuthenticationError",
    # Models
    "PushEvent",
    "CommitRef",
    "ResolvedCommit",
    "ChangedFile",
    "CommitOutcome",
    "LanguageStat",
    "LanguageReport",
]
