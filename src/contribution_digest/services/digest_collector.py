"""Follower contribution collector service."""

import logging
from typing import Any

from contribution_digest.exceptions import GitHubGraphQLError, MissingRequiredFieldError
from contribution_digest.models.contribution import ContributionSummary
from contribution_digest.services.github_graphql_client import (
    GitHubGraphQLClient,
    window_start,
)

logger = logging.getLogger(__name__)


def extract_followers(response: dict[str, Any]) -> dict[str, Any]:
    """Get the followers connection from a digest query response.

    Raises:
        MissingRequiredFieldError: If data, viewer or followers is absent
    """
    data = response.get("data")
    if not data:
        raise MissingRequiredFieldError("data", "GraphQL response")
    viewer = data.get("viewer")
    if not viewer:
        raise MissingRequiredFieldError("viewer", "GraphQL response")
    followers = viewer.get("followers")
    if not followers or followers.get("nodes") is None:
        raise MissingRequiredFieldError("followers", "viewer")
    return followers


def map_followers(nodes: list[dict[str, Any] | None]) -> list[ContributionSummary]:
    """Map follower nodes to summaries, keeping their order.

    Raises:
        MissingRequiredFieldError: If a follower node is null or unnamed
        MalformedLinkError: If an issue or pull request node is incomplete
    """
    summaries = []
    for index, node in enumerate(nodes):
        if node is None:
            raise MissingRequiredFieldError(f"followers.nodes[{index}]", "viewer")
        summaries.append(ContributionSummary.from_graphql(node))
    return summaries


class DigestCollector:
    """Collects follower contributions via GraphQL."""

    def __init__(self, graphql_client: GitHubGraphQLClient, max_pages: int = 10):
        self.graphql_client = graphql_client
        self.max_pages = max(1, max_pages)

    async def collect_follower_nodes(self, from_datetime: str) -> list[dict[str, Any] | None]:
        """Fetch every follower node, following pagination.

        Args:
            from_datetime: Reporting window start (GraphQL DateTime)

        Returns:
            Raw follower nodes in the order GitHub returned them
        """
        nodes: list[dict[str, Any] | None] = []
        cursor = None

        for page in range(1, self.max_pages + 1):
            response = await self.graphql_client.get_follower_digest_page(
                from_datetime, after=cursor
            )
            followers = extract_followers(response)
            nodes.extend(followers["nodes"])

            page_info = followers.get("pageInfo") or {}
            cursor = page_info.get("endCursor")
            if not page_info.get("hasNextPage") or not cursor:
                break
        else:
            logger.warning(
                "Stopped after %d follower pages; remaining followers are not included",
                self.max_pages,
            )

        logger.debug("Fetched %d followers in %d page(s)", len(nodes), page)
        return nodes

    async def collect_summaries(self, days_in_past: int) -> list[ContributionSummary]:
        """Collect a contribution summary for every follower.

        Args:
            days_in_past: Length of the reporting window in days

        Returns:
            One ContributionSummary per follower, in follower order
        """
        from_datetime = window_start(days_in_past)
        logger.info("Collecting follower contributions since %s", from_datetime)

        try:
            nodes = await self.collect_follower_nodes(from_datetime)
        except GitHubGraphQLError as e:
            logger.error("Failed to fetch follower contributions: %s", e)
            raise

        summaries = map_followers(nodes)
        active = sum(1 for s in summaries if s.has_activity)
        logger.info("Mapped %d followers (%d with activity)", len(summaries), active)

        return summaries
