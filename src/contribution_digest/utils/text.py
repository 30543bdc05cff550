"""Text helpers for building English sentences."""

from collections.abc import Sequence


def format_list(items: Sequence[str]) -> str:
    """Join items into an English list.

    Examples:
        [] -> ""
        ["a"] -> "a"
        ["a", "b"] -> "a and b"
        ["a", "b", "c"] -> "a, b and c"

    No Oxford comma is placed before the final "and".
    """
    if not items:
        return ""
    if len(items) == 1:
        return items[0]

    *rest, last = items
    return f"{', '.join(rest)} and {last}"


def pluralize(word: str, count: int) -> str:
    """Append an "s" to word unless count is exactly one."""
    return word if count == 1 else f"{word}s"
