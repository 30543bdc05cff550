"""Slack message rendering for contribution digests.

Example output:

    Recent Open Source Contributions!
    - Joe created the repos <u|Foo> and <u|Bar>; pushed commits to <u|Foo>; contributed to PRs in <u|Baz> (<u|#5> and <u|#7>).
    - Bob helped out with issues in <u|Bor> (<u|#2>).
"""

from collections.abc import Iterable, Sequence

from contribution_digest.models.contribution import (
    ContributionLink,
    ContributionSummary,
    Repo,
    RepoIssues,
    RepoPullRequests,
)
from contribution_digest.utils.text import format_list, pluralize

DIGEST_HEADER = "Recent Open Source Contributions!"


def link(url: str, text: str) -> str:
    """Format a Slack mrkdwn hyperlink."""
    return f"<{url}|{text}>"


def link_repo(repo: Repo) -> str:
    """Link to a repository, labelled with its name."""
    return link(repo.url, repo.name)


def link_contribution(contribution: ContributionLink) -> str:
    """Link to an issue or pull request, labelled with its number."""
    return link(contribution.url, f"#{contribution.number}")


def _repo_with_links(repo: Repo, links: Sequence[ContributionLink]) -> str:
    return f"{link_repo(repo)} ({format_list([link_contribution(c) for c in links])})"


def _pull_request_entry(entry: RepoPullRequests) -> str:
    return _repo_with_links(entry.repo, entry.pull_requests)


def _issue_entry(entry: RepoIssues) -> str:
    return _repo_with_links(entry.repo, entry.issues)


def build_clauses(summary: ContributionSummary) -> list[str]:
    """Build the activity clauses for one follower, in rendering order.

    Forked repositories and commit counts are kept on the summary but
    are not part of the message.
    """
    clauses = []

    if summary.new_repos:
        clauses.append(
            f"created the {pluralize('repo', len(summary.new_repos))} "
            + format_list([link_repo(r) for r in summary.new_repos])
        )

    if summary.commits:
        clauses.append(
            "pushed commits to " + format_list([link_repo(c.repo) for c in summary.commits])
        )

    if summary.pull_requests:
        clauses.append(
            "contributed to PRs in "
            + format_list([_pull_request_entry(pr) for pr in summary.pull_requests])
        )

    if summary.issues:
        clauses.append(
            "helped out with issues in "
            + format_list([_issue_entry(i) for i in summary.issues])
        )

    return clauses


def render_summary(summary: ContributionSummary) -> str:
    """Render one follower's line, or an empty string when there is nothing to report."""
    clauses = build_clauses(summary)
    if not clauses:
        return ""
    return f"- {summary.name} {'; '.join(clauses)}.\n"


def render_digest(summaries: Iterable[ContributionSummary]) -> str:
    """Render the full digest message.

    Args:
        summaries: Follower summaries, in the order they should appear

    Returns:
        Header line followed by one line per follower with reportable activity
    """
    return f"{DIGEST_HEADER}\n" + "".join(render_summary(s) for s in summaries)
