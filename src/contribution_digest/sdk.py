"""Contribution Digest SDK - High-level API for building and sending digests."""

import logging

from contribution_digest.config import Config, get_config
from contribution_digest.exceptions import ContributionDigestError
from contribution_digest.models.contribution import ContributionSummary
from contribution_digest.output.message import render_digest
from contribution_digest.services.digest_collector import DigestCollector
from contribution_digest.services.github_graphql_client import GitHubGraphQLClient
from contribution_digest.services.slack_client import SlackWebhookClient

logger = logging.getLogger(__name__)


class ContributionDigest:
    """High-level SDK for the follower contribution digest.

    Example usage:
        ```python
        from contribution_digest import Config, ContributionDigest

        config = Config.from_file("slack-github-config.toml")
        async with ContributionDigest(config) as digest:
            # Fetch, render and post in one go
            await digest.run()

            # Or step by step
            summaries = await digest.collect(days=14)
            message = digest.render(summaries)
            await digest.send(message)
        ```

    Args:
        config: Configuration (defaults to the global configuration)
    """

    def __init__(self, config: Config | None = None):
        self._config = config or get_config()
        self._graphql_client: GitHubGraphQLClient | None = None
        self._slack_client: SlackWebhookClient | None = None
        self._initialized = False

    @property
    def config(self) -> Config:
        return self._config

    async def __aenter__(self) -> "ContributionDigest":
        """Async context manager entry."""
        await self._initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def _initialize(self) -> None:
        """Initialize clients."""
        if self._initialized:
            return

        self._graphql_client = GitHubGraphQLClient(config=self._config)
        self._slack_client = SlackWebhookClient(config=self._config)

        self._initialized = True
        logger.debug(
            "ContributionDigest initialized (authenticated=%s, delivery=%s)",
            self._config.is_authenticated,
            self._config.can_deliver,
        )

    async def close(self) -> None:
        """Close all HTTP connections."""
        if self._graphql_client:
            await self._graphql_client.close()
        if self._slack_client:
            await self._slack_client.close()
        self._initialized = False
        logger.debug("ContributionDigest closed")

    def _ensure_initialized(self) -> None:
        """Ensure the client is initialized."""
        if not self._initialized:
            raise ContributionDigestError(
                "Client not initialized. Use 'async with ContributionDigest(...) as digest:'"
            )

    async def collect(self, days: int | None = None) -> list[ContributionSummary]:
        """Collect a contribution summary for every follower.

        Args:
            days: Reporting window in days (defaults to config.report_days_in_past)

        Returns:
            One ContributionSummary per follower, in follower order

        Raises:
            ConfigError: If no GitHub token is configured
        """
        self._ensure_initialized()
        self._config.validate_for_fetch()

        if days is None:
            days = self._config.report_days_in_past

        collector = DigestCollector(
            self._graphql_client,
            max_pages=self._config.max_follower_pages,
        )
        return await collector.collect_summaries(days)

    def render(self, summaries: list[ContributionSummary]) -> str:
        """Render summaries into the digest message."""
        return render_digest(summaries)

    async def send(self, message: str) -> None:
        """Post a rendered digest to Slack.

        Raises:
            ConfigError: If no webhook is configured
            SlackDeliveryError: If Slack rejects the message
        """
        self._ensure_initialized()
        self._config.validate_for_delivery()
        await self._slack_client.send_message(message)

    async def run(self, days: int | None = None, dry_run: bool = False) -> str:
        """Collect, render and (unless dry_run) deliver the digest.

        Nothing is delivered when collecting or mapping fails.

        Returns:
            The rendered message
        """
        self._ensure_initialized()
        if not dry_run:
            # Fail before spending API calls on a digest that cannot be delivered
            self._config.validate_for_delivery()

        summaries = await self.collect(days)
        message = self.render(summaries)

        if dry_run:
            logger.info("Dry run; digest not delivered")
        else:
            await self.send(message)

        return message
