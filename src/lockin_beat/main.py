"""Main entry point for the Lock-in Beat CLI."""

import typer

from lockin_beat import __version__
from lockin_beat.commands import config, profile, session
from lockin_beat.utils.typer_helpers import SuggestingGroup
from lockin_beat.utils.ui.console import get_console

app = typer.Typer(
    name="lockin",
    cls=SuggestingGroup,
    help="Timed focus sessions with background music and an accountability grace period",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(session.app, name="session", help="Focus sessions with background music")
app.add_typer(profile.app, name="profile", help="Profile and premium status")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Lock-in Beat[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
