"""Exceptions for Contribution Digest.

Exception Hierarchy:
    ContributionDigestError (base)
    ├── ConfigError (missing or invalid configuration)
    ├── GitHubGraphQLError (GraphQL transport or response errors)
    ├── MissingRequiredFieldError (record or response lacks a required field)
    ├── MalformedLinkError (issue/PR node without number or url)
    └── SlackDeliveryError (webhook rejected the message)

Usage:
    - MissingRequiredFieldError and MalformedLinkError abort the whole run:
      a digest is never rendered from partially mapped followers.
    - Absent per-category containers are not errors; they map to empty lists.
"""

__all__ = [
    "ContributionDigestError",
    "ConfigError",
    "GitHubGraphQLError",
    "MissingRequiredFieldError",
    "MalformedLinkError",
    "SlackDeliveryError",
]


class ContributionDigestError(Exception):
    """Base exception for all Contribution Digest errors."""

    pass


class ConfigError(ContributionDigestError):
    """Raised when a required setting is missing or invalid."""

    pass


class GitHubGraphQLError(ContributionDigestError):
    """Exception for GraphQL API errors."""

    def __init__(
        self,
        message: str,
        errors: list | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.errors = errors or []
        self.status_code = status_code


class MissingRequiredFieldError(ContributionDigestError):
    """Raised when a record lacks a field the digest cannot do without."""

    def __init__(self, field: str, context: str = "record"):
        super().__init__(f"Missing required field '{field}' in {context}")
        self.field = field
        self.context = context


class MalformedLinkError(ContributionDigestError):
    """Raised when an issue or pull request node lacks its number or url."""

    def __init__(self, kind: str, node: object):
        super().__init__(f"Malformed {kind} node: {node!r}")
        self.kind = kind
        self.node = node


class SlackDeliveryError(ContributionDigestError):
    """Raised when the Slack webhook rejects the digest message."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
