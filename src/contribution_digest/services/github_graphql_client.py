"""GitHub GraphQL API client for follower contribution data."""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from contribution_digest.config import Config, get_config
from contribution_digest.exceptions import GitHubGraphQLError

logger = logging.getLogger(__name__)

FOLLOWERS_PER_PAGE = 100
CONTRIBUTIONS_PER_REPO = 100

# Contributions of everyone the authenticated user follows
FOLLOWER_DIGEST_QUERY = """
query FollowerDigest($from: DateTime!, $after: String) {
  viewer {
    followers(first: %(followers)d, after: $after) {
      pageInfo {
        hasNextPage
        endCursor
      }
      nodes {
        login
        name
        contributionsCollection(from: $from) {
          repositoryContributions(first: %(contributions)d) {
            nodes {
              repository { ...repo }
            }
          }
          commitContributionsByRepository {
            contributions { totalCount }
            repository { ...repo }
          }
          issueContributionsByRepository {
            repository { ...repo }
            contributions(first: %(contributions)d) {
              nodes {
                issue { number url }
              }
            }
          }
          pullRequestContributionsByRepository {
            repository { ...repo }
            contributions(first: %(contributions)d) {
              nodes {
                pullRequest { number url }
              }
            }
          }
          pullRequestReviewContributionsByRepository {
            repository { ...repo }
            contributions(first: %(contributions)d) {
              nodes {
                pullRequest { number url }
              }
            }
          }
        }
      }
    }
  }
}

fragment repo on Repository {
  name
  url
  isFork
  primaryLanguage { name }
}
""" % {"followers": FOLLOWERS_PER_PAGE, "contributions": CONTRIBUTIONS_PER_REPO}


def window_start(days_in_past: int, today: date | None = None) -> str:
    """Get the reporting window start as a GraphQL DateTime (midnight UTC).

    Args:
        days_in_past: Number of days the window reaches back
        today: Reference day (defaults to the current UTC date)
    """
    if today is None:
        today = datetime.now(timezone.utc).date()
    start = today - timedelta(days=days_in_past)
    return f"{start.isoformat()}T00:00:00Z"


class GitHubGraphQLClient:
    """Async client for GitHub GraphQL API."""

    def __init__(self, config: Config | None = None):
        self.config = config or get_config()
        self._client: httpx.AsyncClient | None = None

    def _get_headers(self) -> dict[str, str]:
        """Get headers for API requests."""
        if not self.config.github_token:
            raise GitHubGraphQLError(
                "GitHub token is required for GraphQL API. "
                "Set GITHUB_TOKEN environment variable."
            )

        return {
            "Authorization": f"Bearer {self.config.github_token}",
            "Content-Type": "application/json",
            "User-Agent": "contribution-digest/0.1.0",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.github_graphql_url,
                headers=self._get_headers(),
                timeout=self.config.request_timeout,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "GitHubGraphQLClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @retry(
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
    )
    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Execute a GraphQL query.

        Args:
            query: GraphQL query string
            variables: Query variables

        Returns:
            Full response body, including the "data" object

        Raises:
            GitHubGraphQLError: If the query fails
        """
        client = await self._get_client()
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        response = await client.post("", json=payload)

        if response.status_code != 200:
            raise GitHubGraphQLError(
                f"GraphQL request failed with status {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        result = response.json()

        # Check for GraphQL errors
        if result.get("errors"):
            error_messages = [e.get("message", "Unknown error") for e in result["errors"]]
            raise GitHubGraphQLError(
                f"GraphQL errors: {'; '.join(error_messages)}",
                errors=result["errors"],
            )

        return result

    async def get_follower_digest_page(
        self,
        from_datetime: str,
        after: str | None = None,
    ) -> dict[str, Any]:
        """Get one page of followers with their contributions.

        Args:
            from_datetime: Reporting window start (GraphQL DateTime)
            after: Cursor of the previous page

        Returns:
            The raw response body, ``{"data": {"viewer": {"followers": ...}}}``
        """
        variables: dict[str, Any] = {"from": from_datetime}
        if after:
            variables["after"] = after

        logger.debug("Fetching follower page (after=%s)", after)
        return await self.execute(FOLLOWER_DIGEST_QUERY, variables)
