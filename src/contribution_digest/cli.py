"""CLI interface for Contribution Digest."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from contribution_digest import __version__
from contribution_digest.config import Config, get_config, set_config
from contribution_digest.output.console import Console as OutputConsole
from contribution_digest.output.message import render_digest
from contribution_digest.sdk import ContributionDigest
from contribution_digest.services.digest_collector import extract_followers, map_followers

app = typer.Typer(
    name="contribution-digest",
    help="Post a Slack digest of what the people you follow did on GitHub",
    add_completion=False,
)

console = Console()


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"contribution-digest version {__version__}")
        raise typer.Exit()


def setup_logging(verbose: bool = False, debug: bool = False):
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def load_config(config_path: Optional[Path]) -> Config:
    """Load the config file if given, otherwise the default configuration."""
    if config_path is not None:
        set_config(Config.from_file(config_path))
    return get_config()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """Contribution Digest - Slack digests of your GitHub followers' activity."""
    pass


ConfigOption = typer.Option(
    None,
    "--config",
    "-c",
    help="TOML config file (default: ./slack-github-config.toml if present)",
)
DaysOption = typer.Option(
    None,
    "--days",
    "-d",
    min=0,
    help="Days to look back (default: report_days_in_past from config)",
)
VerboseOption = typer.Option(False, "--verbose", "-v", help="Verbose output")
DebugOption = typer.Option(False, "--debug", help="Debug logging")


@app.command()
def send(
    config_path: Optional[Path] = ConfigOption,
    days: Optional[int] = DaysOption,
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Render the digest without posting it to Slack",
    ),
    verbose: bool = VerboseOption,
    debug: bool = DebugOption,
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Minimal output"),
):
    """Fetch follower activity, render the digest and post it to Slack.

    Examples:
        contribution-digest send
        contribution-digest send --days 14 --config team.toml
        contribution-digest send --dry-run
    """
    setup_logging(verbose, debug)
    output_console = OutputConsole(quiet=quiet)

    try:
        config = load_config(config_path)
        with output_console.create_progress() as progress:
            progress.add_task("Collecting follower contributions...", total=None)
            message = asyncio.run(_run_digest(config, days, dry_run))
    except KeyboardInterrupt:
        console.print("\n[yellow]Digest cancelled[/yellow]")
        raise typer.Exit(1)
    except Exception as e:
        output_console.print_error(str(e))
        if verbose or debug:
            import traceback
            traceback.print_exc()
        raise typer.Exit(1)

    if dry_run:
        output_console.print_digest(message, title="Digest (not sent)")
    else:
        if verbose:
            output_console.print_digest(message)
        output_console.print_success(f"Digest posted to {config.slack_channel}")


@app.command()
def preview(
    config_path: Optional[Path] = ConfigOption,
    days: Optional[int] = DaysOption,
    verbose: bool = VerboseOption,
    debug: bool = DebugOption,
):
    """Render the digest without posting it (same as send --dry-run)."""
    send(
        config_path=config_path,
        days=days,
        dry_run=True,
        verbose=verbose,
        debug=debug,
        quiet=False,
    )


async def _run_digest(config: Config, days: Optional[int], dry_run: bool) -> str:
    """Run the digest asynchronously."""
    async with ContributionDigest(config) as digest:
        return await digest.run(days=days, dry_run=dry_run)


@app.command()
def render(
    input_path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        help="Saved GraphQL response (JSON) of the follower digest query",
    ),
    verbose: bool = VerboseOption,
):
    """Render a digest from a saved GraphQL response, without network access.

    The file may hold the full response ({"data": {"viewer": ...}}) or
    just a list of follower nodes.
    """
    setup_logging(verbose)

    try:
        with input_path.open(encoding="utf-8") as f:
            payload = json.load(f)

        nodes = payload if isinstance(payload, list) else extract_followers(payload)["nodes"]
        message = render_digest(map_followers(nodes))
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    # Plain output so it can be piped
    typer.echo(message, nl=False)


@app.command()
def check_config(config_path: Optional[Path] = ConfigOption):
    """Check which settings are configured."""
    output_console = OutputConsole()

    try:
        config = load_config(config_path)
    except Exception as e:
        output_console.print_error(str(e))
        raise typer.Exit(1)

    output_console.print_config(config)

    if not config.is_authenticated:
        console.print()
        console.print("To configure a token:")
        console.print("  export GITHUB_TOKEN=your_token_here")
        console.print("Create a token at: https://github.com/settings/tokens")
        console.print("The read:user scope is enough to list followers.")
    if not config.can_deliver:
        console.print()
        console.print("To configure delivery:")
        console.print("  export SLACK_HOOK_URL=https://hooks.slack.com/services/...")

    if not (config.is_authenticated and config.can_deliver):
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
