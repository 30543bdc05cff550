"""Contribution summary models mapped from the follower digest GraphQL query."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from contribution_digest.exceptions import MalformedLinkError, MissingRequiredFieldError

UNKNOWN_LANGUAGE = "unknown"


class Repo(BaseModel):
    """Repository touched by a follower."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    language: str = UNKNOWN_LANGUAGE
    is_fork: bool = False

    @classmethod
    def from_graphql(cls, data: dict[str, Any] | None) -> "Repo":
        """Create from a GraphQL Repository object."""
        if not data:
            raise MissingRequiredFieldError("repository", "contribution entry")

        primary_lang = data.get("primaryLanguage") or {}
        try:
            return cls(
                name=_require(data, "name", "repository"),
                url=_require(data, "url", "repository"),
                language=primary_lang.get("name") or UNKNOWN_LANGUAGE,
                is_fork=bool(data.get("isFork", False)),
            )
        except ValidationError as e:
            raise MissingRequiredFieldError("name/url", f"repository {data!r}") from e


class ContributionLink(BaseModel):
    """Reference to a single issue or pull request."""

    model_config = ConfigDict(frozen=True)

    number: int = Field(ge=1)
    url: str

    @classmethod
    def from_graphql(cls, node: dict[str, Any] | None, key: str) -> "ContributionLink":
        """Create from a contribution node.

        Args:
            node: Contribution node, e.g. ``{"issue": {"number": 2, "url": "..."}}``
            key: Field holding the linked object ("issue" or "pullRequest")

        Raises:
            MalformedLinkError: If the node, its target, number or url is missing
        """
        target = (node or {}).get(key)
        if not target or target.get("number") is None or not target.get("url"):
            raise MalformedLinkError(key, node)

        try:
            return cls(number=target["number"], url=target["url"])
        except ValidationError as e:
            raise MalformedLinkError(key, node) from e


class Commit(BaseModel):
    """Commits pushed to one repository during the reporting window."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(default=0, ge=0)
    repo: Repo

    @classmethod
    def from_graphql(cls, data: dict[str, Any]) -> "Commit":
        """Create from a commitContributionsByRepository entry."""
        contributions = data.get("contributions") or {}
        return cls(
            count=contributions.get("totalCount", 0),
            repo=Repo.from_graphql(data.get("repository")),
        )


class RepoIssues(BaseModel):
    """Issues opened in one repository."""

    model_config = ConfigDict(frozen=True)

    repo: Repo
    issues: list[ContributionLink] = Field(default_factory=list)

    @classmethod
    def from_graphql(cls, data: dict[str, Any]) -> "RepoIssues":
        """Create from an issueContributionsByRepository entry."""
        return cls(
            repo=Repo.from_graphql(data.get("repository")),
            issues=[
                ContributionLink.from_graphql(node, "issue")
                for node in _nodes(data.get("contributions"))
            ],
        )


class RepoPullRequests(BaseModel):
    """Pull requests opened or reviewed in one repository."""

    model_config = ConfigDict(frozen=True)

    repo: Repo
    pull_requests: list[ContributionLink] = Field(default_factory=list)

    @classmethod
    def from_graphql(cls, data: dict[str, Any]) -> "RepoPullRequests":
        """Create from a pullRequest(Review)ContributionsByRepository entry.

        Authored and reviewed entries share the same node shape.
        """
        return cls(
            repo=Repo.from_graphql(data.get("repository")),
            pull_requests=[
                ContributionLink.from_graphql(node, "pullRequest")
                for node in _nodes(data.get("contributions"))
            ],
        )


class ContributionSummary(BaseModel):
    """Everything one follower did during the reporting window."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    new_repos: list[Repo] = Field(default_factory=list)
    forked_repos: list[Repo] = Field(default_factory=list)
    commits: list[Commit] = Field(default_factory=list)
    issues: list[RepoIssues] = Field(default_factory=list)
    pull_requests: list[RepoPullRequests] = Field(default_factory=list)

    @classmethod
    def from_graphql(cls, data: dict[str, Any]) -> "ContributionSummary":
        """Create from a follower node of the digest query.

        Missing per-category containers map to empty lists. Reviewed pull
        requests are appended after authored ones and never merged with them.

        Raises:
            MissingRequiredFieldError: If the follower has neither name nor login
            MalformedLinkError: If an issue or pull request node is incomplete
        """
        name = data.get("name") or data.get("login")
        if not name:
            raise MissingRequiredFieldError("name/login", "follower")

        collection = data.get("contributionsCollection") or {}

        repos = [
            Repo.from_graphql((node or {}).get("repository"))
            for node in _nodes(collection.get("repositoryContributions"))
        ]

        pull_requests = [
            RepoPullRequests.from_graphql(entry)
            for entry in collection.get("pullRequestContributionsByRepository") or []
        ]
        pull_requests.extend(
            RepoPullRequests.from_graphql(entry)
            for entry in collection.get("pullRequestReviewContributionsByRepository") or []
        )

        return cls(
            name=name,
            new_repos=[repo for repo in repos if not repo.is_fork],
            forked_repos=[repo for repo in repos if repo.is_fork],
            commits=[
                Commit.from_graphql(entry)
                for entry in collection.get("commitContributionsByRepository") or []
            ],
            issues=[
                RepoIssues.from_graphql(entry)
                for entry in collection.get("issueContributionsByRepository") or []
            ],
            pull_requests=pull_requests,
        )

    @property
    def has_activity(self) -> bool:
        """Whether any rendered category is non-empty (forks are not rendered)."""
        return bool(self.new_repos or self.commits or self.pull_requests or self.issues)


def _nodes(container: dict[str, Any] | None) -> list:
    """Get the nodes of a connection, treating a missing connection as empty."""
    return (container or {}).get("nodes") or []


def _require(data: dict[str, Any], key: str, context: str) -> Any:
    """Get a required value or raise MissingRequiredFieldError."""
    value = data.get(key)
    if value is None:
        raise MissingRequiredFieldError(key, context)
    return value
