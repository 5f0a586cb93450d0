"""Message formatters for CLI output."""

from .console import get_console

console = get_console()


def format_error(message: str) -> None:
    """Format error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")
