"""Data models for Contribution Digest."""

from contribution_digest.models.contribution import (
    UNKNOWN_LANGUAGE,
    Commit,
    ContributionLink,
    ContributionSummary,
    Repo,
    RepoIssues,
    RepoPullRequests,
)

__all__ = [
    "UNKNOWN_LANGUAGE",
    "Repo",
    "ContributionLink",
    "Commit",
    "RepoIssues",
    "RepoPullRequests",
    "ContributionSummary",
]
