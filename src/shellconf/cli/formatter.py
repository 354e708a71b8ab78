# src/shellconf/cli/formatter.py
import difflib
from typing import List, Tuple

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from shellconf.core.models import LineResult

# Diagnostics go to stderr so stdout stays machine-readable
console = Console(stderr=True)


class ConfFormatter:
    """
    ConfFormatter: renders parse failures, file summaries and diffs for
    the CLI. Never writes to stdout.
    """

    def __init__(self, console: Console = console):
        self.console = console

    def display_diff(self, original_text: str, new_text: str, file_name: str) -> bool:
        """
        Renders a colorized unified diff. Returns False when there is
        nothing to show.
        """
        diff = list(difflib.unified_diff(
            original_text.splitlines(),
            new_text.splitlines(),
            fromfile=f"original/{file_name}",
            tofile=f"canonical/{file_name}",
            lineterm=""
        ))

        if not diff:
            self.console.print(f"[dim]No changes needed for {file_name}.[/dim]")
            return False

        syntax = Syntax("\n".join(diff), "diff", theme="monokai", background_color="default")
        self.console.print(Panel(syntax, title=f"Proposed rewrite: {escape(file_name)}", border_style="green"))
        return True

    def print_error(self, message: str):
        self.console.print(f"[bold red]Error:[/bold red] {escape(message)}")

    def print_failures(self, failures: List[Tuple[str, LineResult]]):
        """One row per bad line, with the file it came from."""
        table = Table(title="ShellConf Check Report", show_lines=True, header_style="bold magenta")
        table.add_column("Location", style="cyan", no_wrap=True)
        table.add_column("Error", style="bold red")
        table.add_column("Line", style="white")

        for source, result in failures:
            error = result.error
            table.add_row(
                f"{source}:{result.line_no}",
                type(error).__name__,
                escape(result.raw_line),
            )

        self.console.print(table)

    def print_summary(self, files: int, variables: int, failures: int):
        color = "green" if failures == 0 else "red"
        self.console.print(Panel(
            f"Files Checked:  {files}\n"
            f"Variables:      {variables}\n"
            f"Bad Lines:      [{color}]{failures}[/{color}]",
            title="[bold white]Summary[/bold white]",
            border_style="dim",
            expand=False
        ))

    def print_dropped(self, result: LineResult):
        self.console.print(f"[yellow]Dropping line {result.line_no}:[/yellow] {escape(str(result.error))}")
