"""CLI interface for GitHub Recap."""

import asyncio
import logging
import webbrowser
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from github_recap import __version__
from github_recap.auth.credentials import CredentialStore
from github_recap.auth.token_exchange import build_authorize_url, extract_code
from github_recap.config import get_config
from github_recap.dashboard import Dashboard, ViewState
from github_recap.output.console import Console as OutputConsole
from github_recap.output.json_writer import build_report, write_json_report

app = typer.Typer(
    name="github-recap",
    help="Your year in code, from your GitHub activity",
    add_completion=False,
)

console = Console()


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"github-recap version {__version__}")
        raise typer.Exit()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


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
    """GitHub Recap - Your year in code."""
    pass


@app.command()
def recap(
    code: Optional[str] = typer.Option(
        None,
        "--code",
        "-c",
        help="OAuth callback URL or authorization code",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Also write the recap to this JSON file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose output",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Minimal output",
    ),
):
    """Show your year in review.

    Uses the stored session if there is one; otherwise exchanges the code
    GitHub sent back after login.

    Examples:
        github-recap recap
        github-recap recap --code "http://localhost:3000/?code=abc123"
    """
    setup_logging(verbose)

    auth_code = None
    if code:
        auth_code = extract_code(code)
        if not auth_code:
            console.print(f"[red]No authorization code found in: {code}[/red]")
            raise typer.Exit(1)

    output_console = OutputConsole(verbose=verbose, quiet=quiet)
    dashboard = Dashboard(config=get_config(), on_change=output_console.render)

    try:
        state = asyncio.run(dashboard.initialize(auth_code))
    except KeyboardInterrupt:
        console.print("\n[yellow]Recap cancelled[/yellow]")
        raise typer.Exit(1)

    if state is ViewState.UNAUTHENTICATED and dashboard.error is None:
        # Nothing stored and no code given: the initial view
        output_console.render(dashboard)

    if state is ViewState.ERROR:
        raise typer.Exit(1)

    if state is ViewState.RESULTS and output:
        report = build_report(dashboard.recap)
        output_file = write_json_report(report, output)
        output_console.print_output_path(str(output_file))


@app.command()
def login(
    no_browser: bool = typer.Option(
        False,
        "--no-browser",
        help="Only print the login URL",
    ),
):
    """Open GitHub's consent page for this app."""
    config = get_config()

    if not config.is_configured:
        console.print(
            "[yellow]No OAuth client id configured. "
            "Set GITHUB_RECAP_CLIENT_ID.[/yellow]"
        )
        raise typer.Exit(1)

    url = build_authorize_url(config)
    console.print(f"Log in at: {url}")
    if not no_browser:
        webbrowser.open(url)
    console.print(
        "[dim]After approving, run: github-recap recap --code <callback URL>[/dim]"
    )


@app.command()
def logout():
    """Forget the stored GitHub session."""
    config = get_config()
    CredentialStore(config.credentials_path).clear()
    console.print("[green]Logged out[/green]")


if __name__ == "__main__":
    app()
