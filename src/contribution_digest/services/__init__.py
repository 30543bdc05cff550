"""Services for collecting and delivering contribution digests."""

from contribution_digest.services.digest_collector import DigestCollector
from contribution_digest.services.github_graphql_client import GitHubGraphQLClient
from contribution_digest.services.slack_client import SlackWebhookClient

__all__ = [
    "DigestCollector",
    "GitHubGraphQLClient",
    "SlackWebhookClient",
]
