"""Rich console output for language reports."""

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.text import Text

from langbox.models.language import LanguageReport


class Console:
    """Wrapper for rich console output."""

    def __init__(
        self,
        verbose: bool = False,
        quiet: bool = False,
        console: RichConsole | None = None,
    ):
        self.console = console or RichConsole()
        self.verbose = verbose
        self.quiet = quiet

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

    def print_success(self, message: str):
        """Print success message."""
        if not self.quiet:
            self.console.print(f"[green]{message}[/green]")

    def create_progress(self) -> Progress:
        """Create a spinner context for the collection stage."""
        return Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            disable=self.quiet,
            transient=True,
        )

    def print_header(self, username: str, days: int):
        """Print run header."""
        if self.quiet:
            return

        self.console.print()
        self.console.print(
            Panel(
                f"[bold blue]Recent coding in languages[/bold blue]\n"
                f"[dim]User: {username} · last {days} days[/dim]",
                expand=False,
            )
        )
        self.console.print()

    def print_language_table(self, report: LanguageReport):
        """Print per-language statistics."""
        if self.quiet:
            return

        self.console.print(
            f"[dim]{report.events} push events, {report.commits} commits, "
            f"{report.files} files[/dim]"
        )

        if not report.languages:
            self.console.print("[yellow]No languages to report[/yellow]")
            self.console.print()
            return

        table = Table(title="Languages", expand=False)
        table.add_column("Language")
        table.add_column("Files", justify="right")
        table.add_column("Additions", justify="right", style="green")
        table.add_column("Deletions", justify="right", style="red")
        table.add_column("Changes", justify="right")

        for lang in report.languages:
            table.add_row(
                lang.name,
                str(lang.count),
                f"+{lang.additions:,}",
                f"-{lang.deletions:,}",
                f"{lang.changes:,}",
            )

        self.console.print(table)
        self.console.print()

    def print_content(self, content: str):
        """Print the rendered block exactly as the sinks receive it."""
        if not self.quiet:
            self.console.print(Panel(Text(content), title="Rendered", expand=False))
            self.console.print()

    def print_publish_results(self, results: dict[str, bool]):
        """Print per-sink outcome."""
        if not results:
            self.print("[dim]No sinks configured[/dim]")
            return
        for name, ok in results.items():
            if ok:
                self.print_success(f"Updated {name}")
            else:
                self.print_warning(f"Could not update {name} (see log)")
