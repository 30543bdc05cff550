"""Configuration management for Contribution Digest."""

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path

from dotenv import load_dotenv

from contribution_digest.exceptions import ConfigError

DEFAULT_CONFIG_FILE = "slack-github-config.toml"


@dataclass
class Config:
    """Application configuration."""

    github_token: str | None = None
    github_graphql_url: str = "https://api.github.com/graphql"
    report_days_in_past: int = 7

    # Slack incoming webhook
    slack_hook_url: str | None = None
    slack_username: str = "GitHub Digest"
    slack_channel: str = "#general"
    slack_icon: str = ":octocat:"

    # Followers are fetched 100 per page
    max_follower_pages: int = 10

    # Timeouts
    request_timeout: float = 30.0

    @classmethod
    def from_env(cls, base: "Config | None" = None) -> "Config":
        """Load configuration from environment variables.

        Args:
            base: Values used where no environment variable is set
        """
        # override=False ensures environment variables take precedence over .env
        load_dotenv(override=False)

        config = base or cls()

        # Support both CONTRIBUTION_DIGEST_GITHUB_TOKEN (preferred) and GITHUB_TOKEN (fallback)
        token = os.getenv("CONTRIBUTION_DIGEST_GITHUB_TOKEN") or os.getenv("GITHUB_TOKEN")
        days = os.getenv("REPORT_DAYS_IN_PAST")

        return replace(
            config,
            github_token=token or config.github_token,
            github_graphql_url=os.getenv("GITHUB_GRAPHQL_URL", config.github_graphql_url),
            report_days_in_past=_parse_days(days) if days else config.report_days_in_past,
            slack_hook_url=os.getenv("SLACK_HOOK_URL") or config.slack_hook_url,
            slack_username=os.getenv("SLACK_USERNAME", config.slack_username),
            slack_channel=os.getenv("SLACK_CHANNEL", config.slack_channel),
            slack_icon=os.getenv("SLACK_ICON", config.slack_icon),
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "Config":
        """Load configuration from a TOML file, then apply environment overrides.

        Expected layout:

            [github]
            token = "ghp_xxx"
            report_days_in_past = 7

            [slack]
            hook_url = "https://hooks.slack.com/services/..."
            username = "GitHub Digest"
            channel = "#open-source"
            icon = ":octocat:"
        """
        path = Path(path)
        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except FileNotFoundError as e:
            raise ConfigError(f"Config file not found: {path}") from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Could not parse config file {path}: {e}") from e

        github = data.get("github", {})
        slack = data.get("slack", {})
        defaults = cls()

        base = cls(
            github_token=github.get("token"),
            github_graphql_url=github.get("graphql_url", defaults.github_graphql_url),
            report_days_in_past=_parse_days(
                github.get("report_days_in_past", defaults.report_days_in_past)
            ),
            slack_hook_url=slack.get("hook_url"),
            slack_username=slack.get("username", defaults.slack_username),
            slack_channel=slack.get("channel", defaults.slack_channel),
            slack_icon=slack.get("icon", defaults.slack_icon),
        )
        return cls.from_env(base)

    @property
    def is_authenticated(self) -> bool:
        """Check if a GitHub token is configured."""
        return bool(self.github_token)

    @property
    def can_deliver(self) -> bool:
        """Check if a Slack webhook is configured."""
        return bool(self.slack_hook_url)

    def validate_for_fetch(self) -> None:
        """Ensure the settings needed to query GitHub are present."""
        if not self.is_authenticated:
            raise ConfigError(
                "GitHub token is required. Set GITHUB_TOKEN or [github] token in the config file."
            )

    def validate_for_delivery(self) -> None:
        """Ensure the settings needed to post to Slack are present."""
        if not self.can_deliver:
            raise ConfigError(
                "Slack webhook URL is required. Set SLACK_HOOK_URL or [slack] hook_url."
            )


def _parse_days(value: object) -> int:
    try:
        days = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"report_days_in_past must be an integer, got {value!r}") from e
    if days < 0:
        raise ConfigError(f"report_days_in_past must not be negative, got {days}")
    return days


# Global config instance
_config: Config | None = None


def get_config() -> Config:
    """Get or create the global configuration instance.

    Reads the default config file when it exists in the working directory,
    otherwise the environment only.
    """
    global _config
    if _config is None:
        if Path(DEFAULT_CONFIG_FILE).exists():
            _config = Config.from_file(DEFAULT_CONFIG_FILE)
        else:
            _config = Config.from_env()
    return _config


def set_config(config: Config | None) -> None:
    """Set the global configuration instance (useful for testing)."""
    global _config
    _config = config
