"""Rich console rendering of the dashboard views."""

from typing import Optional

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.status import Status
from rich.table import Table

from github_recap.dashboard import Dashboard, ViewState
from github_recap.models.stats import Recap

MEDALS = ["🥇", "🥈", "🥉"]
BAR_WIDTH = 20


def language_bar(count: int, top_count: int, width: int = BAR_WIDTH) -> str:
    """Bar whose length is ``count`` relative to the leading language."""
    if top_count <= 0:
        return ""
    filled = round(width * count / top_count)
    return "█" * filled + "░" * (width - filled)


def pluralize(count: int, word: str, plural: str) -> str:
    return f"{count} {word if count == 1 else plural}"


class Console:
    """Wrapper for rich console output."""

    def __init__(self, verbose: bool = False, quiet: bool = False):
        self.console = RichConsole()
        self.verbose = verbose
        self.quiet = quiet
        self._status: Optional[Status] = None

    def print(self, *args, **kwargs):
        """Print to console (respects quiet mode)."""
        if not self.quiet:
            self.console.print(*args, **kwargs)

    def print_error(self, message: str):
        """Print error message."""
        self.console.print(f"[red]Error:[/red] {message}")

    def print_warning(self, message: str):
        """Print warning message."""
        self.console.print(f"[yellow]Warning:[/yellow] {message}")

    def render(self, dashboard: Dashboard) -> None:
        """Show the view matching the dashboard's state.

        Suitable as the dashboard's ``on_change`` callback.
        """
        self._stop_status()

        if dashboard.state is ViewState.LOADING:
            if not self.quiet:
                self._status = self.console.status("Analyzing your year...")
                self._status.start()
        elif dashboard.state is ViewState.UNAUTHENTICATED:
            self.print_login_view(dashboard.login_url(), dashboard.error)
        elif dashboard.state is ViewState.ERROR:
            self.print_error_view(dashboard.error or "Unknown error", dashboard.login_url())
        elif dashboard.state is ViewState.RESULTS and dashboard.recap:
            self.print_results(dashboard.recap)

    def _stop_status(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None

    def print_login_view(self, login_url: str, error: Optional[str] = None):
        """Print the connect-with-GitHub view."""
        if error:
            self.print_error(error)
        if self.quiet:
            return

        self.console.print()
        self.console.print(
            Panel(
                "[bold]GitHub Recap[/bold]\n"
                "[dim]Discover your coding journey this year[/dim]\n\n"
                f"Connect with GitHub:\n[link={login_url}]{login_url}[/link]\n\n"
                "[dim]Then run: github-recap recap --code <callback URL or code>[/dim]",
                expand=False,
            )
        )

    def print_error_view(self, message: str, login_url: str):
        """Print the error view with a way to log in again."""
        self.console.print(
            Panel(
                f"[red]{message}[/red]\n\n"
                f"[dim]Log in again to retry:[/dim]\n{login_url}",
                title="Error",
                border_style="red",
                expand=False,
            )
        )

    def print_results(self, recap: Recap):
        """Print the year-in-review results."""
        if self.quiet:
            return

        stats = recap.stats
        year = stats.year

        self.console.print()
        self.console.print(
            Panel(
                f"[bold magenta]{recap.profile.display_name}'s {year}[/bold magenta]\n"
                "[dim]Year in Code[/dim]",
                expand=False,
            )
        )

        table = Table(show_header=False, expand=False)
        table.add_column("Metric", style="dim")
        table.add_column("Value", justify="right", style="bold")

        table.add_row("Total Repositories", str(stats.total_repos))
        table.add_row(f"New in {year}", str(stats.repos_created_this_year))
        table.add_row(f"Commits in {year}", str(stats.total_commits))
        table.add_row("Total Stars", str(stats.total_stars))
        table.add_row("Total Forks", str(stats.total_forks))
        table.add_row("Top Language", stats.top_language)
        table.add_row("Languages Used", str(stats.distinct_language_count))

        self.console.print(table)
        self.console.print()

        self.console.print(
            Panel(
                f"[bold]{stats.most_active_repo}[/bold]\n"
                f"{stats.most_active_repo_commit_count} commits in {year}",
                title="Most Active Repository",
                expand=False,
            )
        )

        if stats.top3_languages:
            top_count = stats.top3_languages[0].count
            lang_table = Table(title="Top 3 Programming Languages", expand=False)
            lang_table.add_column("")
            lang_table.add_column("Language")
            lang_table.add_column("Repositories", justify="right")
            lang_table.add_column("")

            for medal, lang in zip(MEDALS, stats.top3_languages):
                lang_table.add_row(
                    medal,
                    lang.language,
                    pluralize(lang.count, "repository", "repositories"),
                    language_bar(lang.count, top_count),
                )

            self.console.print()
            self.console.print(lang_table)

        if self.verbose:
            for warning in recap.warnings:
                self.print_warning(warning)

        self.console.print()
        self.console.print("[dim]Keep coding and making amazing things![/dim]")

    def print_output_path(self, path: str):
        """Print output file path."""
        if not self.quiet:
            self.console.print(f"\n[green]Recap saved to:[/green] {path}")
