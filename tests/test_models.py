"""Tests for data models and GraphQL mapping."""

import pytest
from pydantic import ValidationError

from contribution_digest.exceptions import MalformedLinkError, MissingRequiredFieldError
from contribution_digest.models.contribution import (
    UNKNOWN_LANGUAGE,
    Commit,
    ContributionLink,
    ContributionSummary,
    Repo,
    RepoIssues,
)


class TestRepo:
    """Tests for Repo model."""

    def test_from_graphql(self, make_repo):
        """Test creating Repo from a GraphQL Repository."""
        repo = Repo.from_graphql(make_repo("serde", language="Rust"))

        assert repo.name == "serde"
        assert repo.url == "https://github.com/someone/serde"
        assert repo.language == "Rust"
        assert repo.is_fork is False

    def test_missing_language_defaults_to_unknown(self, make_repo):
        """Test that a repo without primary language gets the sentinel."""
        repo = Repo.from_graphql(make_repo("notes", language=None))

        assert repo.language == UNKNOWN_LANGUAGE == "unknown"

    def test_missing_name_raises(self):
        """Test that a repository without a name is rejected."""
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            Repo.from_graphql({"url": "https://github.com/x/y", "isFork": False})

        assert exc_info.value.field == "name"

    def test_invalid_name_type_raises(self):
        """Test that a repository with a non-string name is rejected."""
        with pytest.raises(MissingRequiredFieldError):
            Repo.from_graphql({"name": 42, "url": "https://github.com/x/y", "isFork": False})

    def test_missing_repository_raises(self):
        """Test that a null repository reference is rejected."""
        with pytest.raises(MissingRequiredFieldError):
            Repo.from_graphql(None)

    def test_is_immutable(self, make_repo):
        """Test that repos cannot be modified after creation."""
        repo = Repo.from_graphql(make_repo("serde"))

        with pytest.raises(ValidationError):
            repo.name = "other"


class TestContributionLink:
    """Tests for ContributionLink model."""

    def test_from_issue_node(self):
        """Test creating a link from an issue node."""
        link = ContributionLink.from_graphql(
            {"issue": {"number": 2, "url": "https://github.com/a/b/issues/2"}}, "issue"
        )

        assert link.number == 2
        assert link.url == "https://github.com/a/b/issues/2"

    def test_missing_number_raises(self):
        """Test that a node without number is malformed."""
        with pytest.raises(MalformedLinkError):
            ContributionLink.from_graphql({"pullRequest": {"url": "u"}}, "pullRequest")

    def test_missing_url_raises(self):
        """Test that a node without url is malformed."""
        with pytest.raises(MalformedLinkError):
            ContributionLink.from_graphql({"issue": {"number": 3}}, "issue")

    def test_null_node_raises(self):
        """Test that a null node is malformed."""
        with pytest.raises(MalformedLinkError):
            ContributionLink.from_graphql(None, "issue")

    def test_zero_number_node_is_malformed(self):
        """Test that a node numbered 0 is reported as malformed."""
        with pytest.raises(MalformedLinkError):
            ContributionLink.from_graphql({"issue": {"number": 0, "url": "u"}}, "issue")

    def test_non_integer_number_node_is_malformed(self):
        """Test that a node with a non-numeric number is reported as malformed."""
        with pytest.raises(MalformedLinkError):
            ContributionLink.from_graphql(
                {"pullRequest": {"number": "five", "url": "u"}}, "pullRequest"
            )

    def test_number_must_be_positive(self):
        """Test that issue numbers start at 1."""
        with pytest.raises(ValidationError):
            ContributionLink(number=0, url="u")


class TestCommit:
    """Tests for Commit model."""

    def test_from_graphql(self, make_repo, entries):
        """Test that the commit count comes from totalCount."""
        commit = Commit.from_graphql(entries.commit(make_repo("linux"), 12))

        assert commit.count == 12
        assert commit.repo.name == "linux"

    def test_negative_count_rejected(self, make_repo):
        """Test that commit counts cannot be negative."""
        with pytest.raises(ValidationError):
            Commit(count=-1, repo=Repo.from_graphql(make_repo("linux")))


class TestRepoIssues:
    """Tests for RepoIssues model."""

    def test_missing_nodes_yield_empty_list(self, make_repo):
        """Test that an entry without nodes keeps the repo with no issues."""
        entry = RepoIssues.from_graphql(
            {"repository": make_repo("bor"), "contributions": {"nodes": None}}
        )

        assert entry.repo.name == "bor"
        assert entry.issues == []


class TestContributionSummary:
    """Tests for ContributionSummary mapping."""

    def test_full_mapping(self, make_follower, make_repo, entries):
        """Test mapping a follower with every kind of activity."""
        foo, bar = make_repo("foo"), make_repo("bar")
        follower = make_follower(
            login="joe",
            name="Joe",
            created=[foo, make_repo("fork", is_fork=True)],
            commits=[entries.commit(foo, 5), entries.commit(bar, 2)],
            issues=[entries.issue(bar, [2])],
            pull_requests=[entries.pull_request(foo, [5, 7])],
        )

        summary = ContributionSummary.from_graphql(follower)

        assert summary.name == "Joe"
        assert [r.name for r in summary.new_repos] == ["foo"]
        assert [r.name for r in summary.forked_repos] == ["fork"]
        assert [(c.repo.name, c.count) for c in summary.commits] == [("foo", 5), ("bar", 2)]
        assert [i.number for i in summary.issues[0].issues] == [2]
        assert [p.number for p in summary.pull_requests[0].pull_requests] == [5, 7]
        assert summary.has_activity is True

    def test_name_falls_back_to_login(self, make_follower):
        """Test that login is used when the display name is absent."""
        summary = ContributionSummary.from_graphql(make_follower(login="octocat", name=None))

        assert summary.name == "octocat"

    def test_empty_name_falls_back_to_login(self, make_follower):
        """Test that an empty display name is treated as absent."""
        summary = ContributionSummary.from_graphql(make_follower(login="octocat", name=""))

        assert summary.name == "octocat"

    def test_missing_name_and_login_raises(self, make_follower):
        """Test that a follower without any identifier is fatal."""
        follower = make_follower()
        follower["login"] = None

        with pytest.raises(MissingRequiredFieldError):
            ContributionSummary.from_graphql(follower)

    def test_partition_new_and_forked(self, make_follower, make_repo):
        """Test that created repos are split by fork flag, preserving order."""
        created = [
            make_repo("a"),
            make_repo("b", is_fork=True),
            make_repo("c"),
            make_repo("d", is_fork=True),
            make_repo("e"),
        ]

        summary = ContributionSummary.from_graphql(make_follower(created=created))

        new_names = [r.name for r in summary.new_repos]
        forked_names = [r.name for r in summary.forked_repos]
        assert new_names == ["a", "c", "e"]
        assert forked_names == ["b", "d"]
        assert set(new_names).isdisjoint(forked_names)
        assert sorted(new_names + forked_names) == [r["name"] for r in created]
        assert all(r.is_fork for r in summary.forked_repos)
        assert not any(r.is_fork for r in summary.new_repos)

    def test_reviews_appended_after_authored(self, make_follower, make_repo, entries):
        """Test that reviewed PRs follow authored PRs without merging."""
        foo = make_repo("foo")
        follower = make_follower(
            pull_requests=[entries.pull_request(foo, [5])],
            reviews=[entries.pull_request(make_repo("bar"), [9]), entries.pull_request(foo, [5])],
        )

        summary = ContributionSummary.from_graphql(follower)

        assert [(p.repo.name, [l.number for l in p.pull_requests]) for p in summary.pull_requests] == [
            ("foo", [5]),
            ("bar", [9]),
            ("foo", [5]),
        ]

    def test_missing_containers_are_empty(self):
        """Test that absent category containers map to empty lists."""
        summary = ContributionSummary.from_graphql({"login": "quiet", "name": "Quiet"})

        assert summary.new_repos == []
        assert summary.forked_repos == []
        assert summary.commits == []
        assert summary.issues == []
        assert summary.pull_requests == []
        assert summary.has_activity is False

    def test_null_containers_are_empty(self):
        """Test that null category containers map to empty lists."""
        summary = ContributionSummary.from_graphql(
            {
                "login": "quiet",
                "contributionsCollection": {
                    "repositoryContributions": {"nodes": None},
                    "commitContributionsByRepository": None,
                    "issueContributionsByRepository": None,
                    "pullRequestContributionsByRepository": None,
                    "pullRequestReviewContributionsByRepository": None,
                },
            }
        )

        assert summary.has_activity is False

    def test_malformed_issue_node_is_fatal(self, make_follower, make_repo):
        """Test that an incomplete issue node aborts mapping."""
        follower = make_follower(
            issues=[
                {
                    "repository": make_repo("bor"),
                    "contributions": {"nodes": [{"issue": {"number": 2}}]},
                }
            ]
        )

        with pytest.raises(MalformedLinkError):
            ContributionSummary.from_graphql(follower)

    def test_forks_only_is_not_activity(self, make_follower, make_repo):
        """Test that forks alone do not count as reportable activity."""
        summary = ContributionSummary.from_graphql(
            make_follower(created=[make_repo("fork", is_fork=True)])
        )

        assert summary.forked_repos
        assert summary.has_activity is False

    def test_mapping_is_deterministic(self, make_follower, make_repo, entries):
        """Test that mapping the same input twice gives equal summaries."""
        follower = make_follower(
            created=[make_repo("a")],
            commits=[entries.commit(make_repo("b"), 1)],
        )

        assert ContributionSummary.from_graphql(follower) == ContributionSummary.from_graphql(follower)
