"""Pytest configuration and fixtures."""

import pytest

from contribution_digest.config import Config, set_config


@pytest.fixture(autouse=True)
def reset_globals(monkeypatch):
    """Reset global state and digest environment variables before each test."""
    for name in (
        "CONTRIBUTION_DIGEST_GITHUB_TOKEN",
        "GITHUB_TOKEN",
        "GITHUB_GRAPHQL_URL",
        "REPORT_DAYS_IN_PAST",
        "SLACK_HOOK_URL",
        "SLACK_USERNAME",
        "SLACK_CHANNEL",
        "SLACK_ICON",
    ):
        monkeypatch.delenv(name, raising=False)
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def test_config():
    """Create a test configuration."""
    config = Config(
        github_token="test_token",
        github_graphql_url="https://api.github.com/graphql",
        report_days_in_past=7,
        slack_hook_url="https://hooks.slack.com/services/T000/B000/XXXX",
        slack_username="Digest Bot",
        slack_channel="#open-source",
        slack_icon=":robot_face:",
    )
    set_config(config)
    return config


@pytest.fixture
def make_repo():
    """Factory for GraphQL Repository objects."""

    def _make_repo(name: str, is_fork: bool = False, language: str | None = "Python") -> dict:
        return {
            "name": name,
            "url": f"https://github.com/someone/{name}",
            "isFork": is_fork,
            "primaryLanguage": {"name": language} if language else None,
        }

    return _make_repo


@pytest.fixture
def make_follower():
    """Factory for follower nodes of the digest query."""

    def _make_follower(
        login: str = "octocat",
        name: str | None = None,
        created: list[dict] | None = None,
        commits: list[dict] | None = None,
        issues: list[dict] | None = None,
        pull_requests: list[dict] | None = None,
        reviews: list[dict] | None = None,
    ) -> dict:
        return {
            "login": login,
            "name": name,
            "contributionsCollection": {
                "repositoryContributions": {
                    "nodes": [{"repository": repo} for repo in created or []],
                },
                "commitContributionsByRepository": commits or [],
                "issueContributionsByRepository": issues or [],
                "pullRequestContributionsByRepository": pull_requests or [],
                "pullRequestReviewContributionsByRepository": reviews or [],
            },
        }

    return _make_follower


def commit_entry(repo: dict, count: int) -> dict:
    """Build a commitContributionsByRepository entry."""
    return {"contributions": {"totalCount": count}, "repository": repo}


def issue_entry(repo: dict, numbers: list[int]) -> dict:
    """Build an issueContributionsByRepository entry."""
    return {
        "repository": repo,
        "contributions": {
            "nodes": [
                {"issue": {"number": n, "url": f"{repo['url']}/issues/{n}"}} for n in numbers
            ]
        },
    }


def pull_request_entry(repo: dict, numbers: list[int]) -> dict:
    """Build a pullRequest(Review)ContributionsByRepository entry."""
    return {
        "repository": repo,
        "contributions": {
            "nodes": [
                {"pullRequest": {"number": n, "url": f"{repo['url']}/pull/{n}"}}
                for n in numbers
            ]
        },
    }


@pytest.fixture
def entries():
    """Builders for per-repository contribution entries."""

    class Entries:
        commit = staticmethod(commit_entry)
        issue = staticmethod(issue_entry)
        pull_request = staticmethod(pull_request_entry)

    return Entries
