"""Console and message styling shared by all CLI commands."""

from rich.console import Console
from rich.markup import escape

console = Console()


class Messages:
    """Rich markup helpers for semantic messages."""

    @staticmethod
    def success(text: str) -> str:
        return f"[green]✓ {escape(text)}[/green]"

    @staticmethod
    def error(text: str) -> str:
        return f"[bold red]✗ {escape(text)}[/bold red]"

    @staticmethod
    def warning(text: str) -> str:
        return f"[yellow]⚠ {escape(text)}[/yellow]"

    @staticmethod
    def header(text: str) -> str:
        return f"[bold cyan]{escape(text)}[/bold cyan]"

    @staticmethod
    def pattern(text: str) -> str:
        return f"[bold magenta]{escape(text)}[/bold magenta]"
