"""Rich console output for the digest CLI."""

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.text import Text

from contribution_digest.config import Config


class Console:
    """Wrapper for rich console output."""

    def __init__(self, quiet: bool = False):
        self.console = RichConsole()
        self.quiet = quiet

    def print_error(self, message: str):
        """Print error message."""
        self.console.print(f"[red]Error:[/red] {message}")

    def print_success(self, message: str):
        """Print success message."""
        if not self.quiet:
            self.console.print(f"[green]{message}[/green]")

    def create_progress(self) -> Progress:
        """Create a spinner context for network calls."""
        return Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=True,
            disable=self.quiet,
        )

    def print_digest(self, message: str, title: str = "Digest"):
        """Print a rendered digest.

        The message is printed without rich markup so Slack link syntax
        is shown exactly as it will be posted.
        """
        if self.quiet:
            return

        self.console.print(Panel(Text(message.rstrip("\n")), title=title, expand=False))

    def print_config(self, config: Config):
        """Print which settings are configured."""
        table = Table(title="Configuration", show_header=False, expand=False)
        table.add_column("Setting", style="dim")
        table.add_column("Value")

        table.add_row(
            "GitHub token",
            "[green]configured[/green]" if config.is_authenticated else "[red]missing[/red]",
        )
        table.add_row("GraphQL URL", config.github_graphql_url)
        table.add_row("Report window", f"{config.report_days_in_past} days")
        table.add_row(
            "Slack webhook",
            "[green]configured[/green]" if config.can_deliver else "[red]missing[/red]",
        )
        table.add_row("Slack channel", config.slack_channel)
        table.add_row("Slack username", config.slack_username)
        table.add_row("Slack icon", config.slack_icon)

        self.console.print(table)
