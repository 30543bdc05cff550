"""Output handlers for Contribution Digest."""

from contribution_digest.output.console import Console
from contribution_digest.output.message import render_digest, render_summary

__all__ = [
    "render_digest",
    "render_summary",
    "Console",
]
