"""Contribution Digest - Slack digests of what the people you follow built on GitHub.

This SDK collects the recent public activity of the accounts the
authenticated GitHub user follows and posts it as one Slack message:
- New repositories
- Commits pushed, per repository
- Pull requests opened and reviewed
- Issues opened

Example usage:
    ```python
    from contribution_digest import ContributionDigest, Config

    async with ContributionDigest(Config.from_env()) as digest:
        message = await digest.run(days=7)
    ```
"""

from importlib.metadata import PackageNotFoundError, version

from contribution_digest.config import Config
from contribution_digest.exceptions import (
    ConfigError,
    ContributionDigestError,
    GitHubGraphQLError,
    MalformedLinkError,
    MissingRequiredFieldError,
    SlackDeliveryError,
)
from contribution_digest.models import (
    Commit,
    ContributionLink,
    ContributionSummary,
    Repo,
    RepoIssues,
    RepoPullRequests,
)
from contribution_digest.output.message import render_digest
from contribution_digest.sdk import ContributionDigest
from contribution_digest.utils.text import format_list

try:
    __version__ = version("contribution-digest")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"

__all__ = [
    # Main SDK class
    "ContributionDigest",
    # Configuration
    "Config",
    # Exceptions
    "ContributionDigestError",
    "ConfigError",
    "GitHubGraphQLError",
    "MissingRequiredFieldError",
    "MalformedLinkError",
    "SlackDeliveryError",
    # Models
    "Repo",
    "ContributionLink",
    "Commit",
    "RepoIssues",
    "RepoPullRequests",
    "ContributionSummary",
    # Rendering
    "render_digest",
    "format_list",
]
