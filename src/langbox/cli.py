"""CLI interface for langbox."""

import asyncio
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from langbox import __version__
from langbox.config import Config, parse_days
from langbox.exceptions import ConfigurationError
from langbox.output.console import Console as OutputConsole

app = typer.Typer(
    name="langbox",
    help="Summarize recent coding activity by language and publish it to a gist and README",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True, show_path=debug)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"langbox version {__version__}")
        raise typer.Exit()


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
    """langbox - Recent coding activity by language."""
    pass


@app.command()
def run(
    days: Optional[int] = typer.Option(
        None,
        "--days",
        "-d",
        help="Lookback window in days, clamped to 1-30 (overrides DAYS)",
    ),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        "-n",
        help="Show at most N languages, 0 for all (overrides TOP_N)",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Compute and print the summary without publishing it",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose output",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Minimal output",
    ),
):
    """Aggregate recent pushes by language and update the gist and README.

    Configuration comes from the environment (or a .env file):
    GH_TOKEN, GIST_ID and USERNAME are required; DAYS, TOP_N,
    EXCLUDE_PATTERNS, README_REPO, README_PATH and README_MARKER are optional.

    Examples:
        langbox run
        langbox run --days 7 --dry-run
    """
    setup_logging(verbose=verbose, debug=debug)
    output_console = OutputConsole(verbose=verbose, quiet=quiet)

    config = Config.from_env()
    if days is not None:
        config.days = parse_days(days)
    if top is not None:
        config.top_n = top if top > 0 else None

    try:
        config.validate(require_gist=not dry_run)
    except ConfigurationError as e:
        output_console.print_error(str(e))
        raise typer.Exit(1)

    try:
        asyncio.run(_run_pipeline(config, output_console, dry_run=dry_run))
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled[/yellow]")
        raise typer.Exit(1)
    except Exception as e:
        output_console.print_error(str(e))
        if verbose or debug:
            err_console.print_exception()
        raise typer.Exit(1)


async def _run_pipeline(config: Config, output_console: OutputConsole, dry_run: bool) -> None:
    """Run the pipeline asynchronously."""
    from langbox.pipeline import ActivityPipeline
    from langbox.services.github_rest_client import GitHubRestClient

    output_console.print_header(config.username, config.days)

    async with GitHubRestClient(config) as rest_client:
        pipeline = ActivityPipeline(config, rest_client)

        with output_console.create_progress() as progress:
            task = progress.add_task("Collecting push activity...", total=None)
            report = await pipeline.collect()
            progress.update(task, completed=True)

        output_console.print_language_table(report)
        output_console.print_content(report.content)

        if dry_run:
            output_console.print("[dim]Dry run: nothing published[/dim]")
            return

        results = await pipeline.publish(report)
        output_console.print_publish_results(results)


@app.command()
def check_token():
    """Check GitHub token configuration and rate limits."""
    setup_logging()
    config = Config.from_env()

    if config.is_authenticated:
        console.print("[green]GitHub token is configured[/green]")
    else:
        console.print("[yellow]No GitHub token configured[/yellow]")
        console.print("To configure a token:")
        console.print("  export GH_TOKEN=your_token_here")

    try:
        rate_info = asyncio.run(_fetch_rate_limit(config))
    except Exception as e:
        console.print(f"[red]Could not check rate limit: {e}[/red]")
        raise typer.Exit(1)

    core = rate_info.get("resources", {}).get("core", {})
    console.print(
        f"Rate limit: {core.get('remaining', '?')}/{core.get('limit', '?')} requests remaining"
    )


async def _fetch_rate_limit(config: Config) -> dict:
    from langbox.services.github_rest_client import GitHubRestClient
    from langbox.utils.rate_limiter import check_and_report_rate_limit

    async with GitHubRestClient(config) as rest_client:
        rate_info = await rest_client.get_rate_limit()
    check_and_report_rate_limit(rate_info, config.is_authenticated)
    return rate_info


if __name__ == "__main__":
    app()
