"""Profile commands: premium status."""

import typer

from lockin_beat.models.session.state import GRACE_PERIOD_SECONDS
from lockin_beat.services.profile_service import get_profile_service
from lockin_beat.utils.ui.console import get_console
from lockin_beat.utils.ui.formatters import format_info, format_success

from .decorators import command_wrapper

console = get_console()
app = typer.Typer(help="Profile and premium status")


@app.command("status")
@command_wrapper
def status():
    """Show the account status sessions start with."""
    svc = get_profile_service()
    console.print(f"[bold]Profile:[/bold] {svc.display_name()}")
    if svc.is_premium():
        console.print("Account Status: [magenta]✨ Premium[/magenta]")
    else:
        console.print("Account Status: [cyan]🆓 Free[/cyan]")
        console.print(
            f"[yellow]⚠️ Leaving the app during a session starts a {GRACE_PERIOD_SECONDS}-second "
            "grace period. If you don't return, the session will fail.[/yellow]"
        )


@app.command("upgrade")
@command_wrapper
def upgrade():
    """Mark the local profile as premium."""
    svc = get_profile_service()
    if svc.is_premium():
        format_info("Profile is already premium")
        return
    svc.mark_premium(True)
    format_success("Profile upgraded to premium")


@app.command("downgrade")
@command_wrapper
def downgrade():
    """Return the local profile to the free tier."""
    svc = get_profile_service()
    if not svc.is_premium():
        format_info("Profile is already on the free tier")
        return
    svc.mark_premium(False)
    format_success("Profile moved to the free tier")
