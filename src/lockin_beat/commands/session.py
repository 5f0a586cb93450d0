"""Focus session commands: run a session and browse tracks."""

import asyncio

import typer
from rich.live import Live
from rich.table import Table

from lockin_beat.models.session.activity import ActivityEventStream
from lockin_beat.models.session.controller import SessionController
from lockin_beat.models.session.errors import InvalidSessionConfigError
from lockin_beat.models.session.keyboard import (
    ACTIVITY_KEYS,
    QUIT_KEY,
    SKIP_KEY,
    KeyboardHandler,
)
from lockin_beat.models.session.state import (
    DURATION_OPTIONS,
    GRACE_PERIOD_SECONDS,
    SessionConfig,
    SessionOutcome,
)
from lockin_beat.models.session.ui import (
    SKIP_CONFIRM_MESSAGE,
    SKIP_PREMIUM_ONLY_MESSAGE,
    SessionDisplay,
    show_outcome,
)
from lockin_beat.services.audio import AudioEngine, SilentAudioEngine
from lockin_beat.services.config_service import get_config_service
from lockin_beat.services.profile_service import get_profile_service
from lockin_beat.services.track_catalog import TrackCatalog
from lockin_beat.utils.exit_codes import (
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    SESSION_FAILED,
)
from lockin_beat.utils.ui.console import get_console
from lockin_beat.utils.ui.formatters import format_success, format_warning

from .decorators import AppError, command_wrapper

console = get_console()
app = typer.Typer(help="Focus sessions with background music")

_REFRESH_SECONDS = 0.1


class SessionKeys:
    """Turns key presses into session actions.

    Skipping asks for confirmation: the first 's' only shows a prompt, a
    second one ends the session, and any other key cancels the prompt.
    """

    def __init__(
        self,
        controller: SessionController,
        stream: ActivityEventStream,
        display: SessionDisplay,
    ):
        self.controller = controller
        self.stream = stream
        self.display = display
        self.skip_pending = False

    async def press(self, key: str | None) -> bool:
        """Handle one key. Returns False once the user quit."""
        if key is None:
            return True

        if key == SKIP_KEY:
            self._press_skip()
            return True

        if self.skip_pending:
            self.skip_pending = False
            self.display.notice = None

        if key in ACTIVITY_KEYS:
            self.stream.emit(ACTIVITY_KEYS[key])
        elif key == QUIT_KEY:
            await self.controller.close()
            return False
        return True

    def _press_skip(self) -> None:
        config = self.controller.config
        if config is None or not config.is_premium:
            self.display.notice = SKIP_PREMIUM_ONLY_MESSAGE
            return

        if not self.skip_pending:
            self.skip_pending = True
            self.display.notice = SKIP_CONFIRM_MESSAGE
            return

        self.skip_pending = False
        self.display.notice = None
        self.controller.request_skip()


def get_track_catalog() -> TrackCatalog:
    """Create a TrackCatalog with injected config dependencies."""
    svc = get_config_service()
    return TrackCatalog(config=svc.load_config(), save_config=svc.save_config)


def get_audio_engine() -> AudioEngine:
    asset_root = get_config_service().config.audio.asset_root
    return SilentAudioEngine(asset_root=asset_root)


async def run_session(
    config: SessionConfig,
    catalog: TrackCatalog,
    audio: AudioEngine,
    interval: float = 1.0,
) -> SessionOutcome:
    """Run one session in the terminal until it reaches a terminal outcome."""
    stream = ActivityEventStream()
    display = SessionDisplay(console)
    with KeyboardHandler() as keyboard:
        async with SessionController(
            catalog, audio, activity_stream=stream, interval=interval
        ) as controller:
            await controller.begin_session(config)

            if controller.outcome is None:
                with Live(
                    display.create_layout(controller.snapshot(), config),
                    console=console,
                    refresh_per_second=8,
                ) as live:
                    keys = SessionKeys(controller, stream, display)
                    while controller.outcome is None:
                        if not await keys.press(keyboard.get_key()):
                            break

                        live.update(display.create_layout(controller.snapshot(), config))
                        await asyncio.sleep(_REFRESH_SECONDS)

            return await controller.wait_closed()


@app.command("start")
@command_wrapper
def start_session(
    duration: int | None = typer.Option(
        None, "--duration", "-d", help="Duration in minutes (30, 60, 90 or 120)"
    ),
    track: str | None = typer.Option(None, "--track", "-t", help="Track ID to play"),
    premium: bool | None = typer.Option(
        None, "--premium/--free", help="Override the profile's premium status"
    ),
    tick: float | None = typer.Option(
        None, "--tick", help="Seconds per countdown tick", hidden=True
    ),
):
    """Start a focus session."""
    app_config = get_config_service().config
    settings = app_config.session
    console.no_color = not app_config.output.color
    duration = duration if duration is not None else settings.default_duration_minutes
    track = track or settings.default_track_id
    tick = tick if tick is not None else settings.tick_interval_seconds
    is_premium = premium if premium is not None else get_profile_service().is_premium()

    if duration not in DURATION_OPTIONS:
        options = ", ".join(str(d) for d in DURATION_OPTIONS)
        raise AppError(
            f"Invalid duration {duration}. Choose one of: {options} minutes",
            ERROR_INVALID_ARGS,
        )
    if tick <= 0:
        raise AppError("Tick interval must be positive", ERROR_INVALID_ARGS)

    config = SessionConfig.from_minutes(duration, track, is_premium=is_premium)

    console.print("\n[bold green]🎧 Focus session started[/bold green]")
    console.print(f"Duration: {duration} minutes")
    console.print(f"Track: {track}")
    if is_premium:
        console.print("[dim]Premium: you can switch apps freely and skip the session.[/dim]")
    else:
        console.print(
            f"[yellow]Free: leaving the app starts a {GRACE_PERIOD_SECONDS}-second "
            "grace period. If you don't return, the session will fail.[/yellow]"
        )
    console.print()

    try:
        outcome = asyncio.run(
            run_session(config, get_track_catalog(), get_audio_engine(), interval=tick)
        )
    except InvalidSessionConfigError as e:
        raise AppError(str(e), ERROR_INVALID_ARGS) from e

    show_outcome(outcome, console)
    if not outcome.success:
        raise typer.Exit(SESSION_FAILED)


@app.command("tracks")
@command_wrapper
def list_tracks():
    """List available background tracks."""
    tracks = get_track_catalog().list_tracks()

    table = Table(title=f"Tracks ({len(tracks)})", show_header=True)
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Asset", style="dim")
    table.add_column("Built-in", justify="center")
    for t in tracks:
        table.add_row(t.id, t.title, t.asset, "✓" if t.builtin else "")
    console.print(table)


@app.command("durations")
@command_wrapper
def list_durations():
    """List the session durations you can choose from."""
    default = get_config_service().config.session.default_duration_minutes
    for minutes in DURATION_OPTIONS:
        marker = " [green](default)[/green]" if minutes == default else ""
        console.print(f"{minutes} min{marker}")


@app.command("add-track")
@command_wrapper
def add_track(
    track_id: str = typer.Argument(..., help="ID for the new track"),
    asset: str = typer.Argument(..., help="Audio file path"),
    title: str = typer.Option("", "--title", help="Display title"),
):
    """Add a custom background track."""
    try:
        track = get_track_catalog().add_track(track_id, asset, title=title)
    except ValueError as e:
        raise AppError(str(e), ERROR_INVALID_ARGS) from e
    format_success(f"Added track '{track.id}' ({track.title})")


@app.command("remove-track")
@command_wrapper
def remove_track(
    track_id: str = typer.Argument(..., help="Custom track ID to remove"),
):
    """Remove a custom background track."""
    catalog = get_track_catalog()
    track = catalog.get_track(track_id)
    if track is None:
        raise AppError(f"Track '{track_id}' not found", ERROR_NOT_FOUND)
    if track.builtin:
        format_warning(f"Track '{track_id}' is built in and cannot be removed")
        raise typer.Exit(ERROR_INVALID_ARGS)

    catalog.remove_track(track_id)
    format_success(f"Removed track '{track_id}'")
