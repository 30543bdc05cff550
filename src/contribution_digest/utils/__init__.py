"""Utility modules for Contribution Digest."""

from contribution_digest.utils.text import format_list, pluralize

__all__ = [
    "format_list",
    "pluralize",
]
