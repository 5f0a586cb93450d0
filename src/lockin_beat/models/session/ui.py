"""Full-screen session display and outcome messages."""

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.panel import Panel
from rich.text import Text

from .state import (
    REASON_DISMISSED,
    REASON_GRACE_EXPIRED,
    REASON_TRACK_UNAVAILABLE,
    SessionConfig,
    SessionOutcome,
    SessionSnapshot,
)

SKIP_PREMIUM_ONLY_MESSAGE = (
    "Skipping is only available for premium users. Upgrade to unlock!"
)
SKIP_CONFIRM_MESSAGE = (
    "Are you sure you want to end this session early? Press 's' again to skip."
)

_MAX_BAR_WIDTH = 40
_MIN_BAR_WIDTH = 10


def format_clock(seconds: int) -> str:
    """Format seconds as MM:SS (minutes may exceed 59)."""
    seconds = max(0, seconds)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


class SessionDisplay:
    """Renders a session snapshot as a fullscreen layout."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()
        self.notice: str | None = None

    @property
    def bar_width(self) -> int:
        """Progress bar width that fits the console next to the percentage."""
        return max(_MIN_BAR_WIDTH, min(_MAX_BAR_WIDTH, self.console.width - 12))

    def create_layout(self, snapshot: SessionSnapshot, config: SessionConfig) -> Layout:
        """Create the session layout with all components."""
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=3),
        )

        badge = "✨ Premium" if config.is_premium else "🆓 Free"
        header_text = Text(f"Focus Session  •  {badge}", style="bold cyan", justify="center")
        layout["header"].update(Align.center(header_text, vertical="middle"))

        body = self._create_body_content(snapshot, config)
        layout["body"].update(Align.center(body, vertical="middle"))

        layout["footer"].update(
            Align.center(self._create_footer_text(config), vertical="middle")
        )
        return layout

    def _create_body_content(self, snapshot: SessionSnapshot, config: SessionConfig) -> Group:
        components = []

        remaining = snapshot.remaining_seconds
        if snapshot.phase == "grace_active":
            timer_color = "yellow"
        elif remaining < 60:
            timer_color = "red"
        else:
            timer_color = "cyan"
        components.append(Text(format_clock(remaining), style=f"bold {timer_color}", justify="center"))
        components.append(Text(""))

        total = config.duration_seconds
        progress_pct = min(100, int((total - remaining) * 100 / total)) if total > 0 else 0
        bar_width = self.bar_width
        filled = int(bar_width * progress_pct / 100)
        bar = "▓" * filled + "░" * (bar_width - filled)
        components.append(Text(f"{bar}  {progress_pct}%", style="dim", justify="center"))

        if snapshot.grace_remaining_seconds is not None and snapshot.grace_remaining_seconds > 0:
            components.append(Text(""))
            components.append(
                Text(
                    f"⚠️ Grace Period: {snapshot.grace_remaining_seconds}s",
                    style="bold yellow",
                    justify="center",
                )
            )
            components.append(
                Text("Return to the app or session will fail!", style="yellow", justify="center")
            )

        components.append(Text(""))
        components.append(Text(f"🎵 {config.track_id}", style="white", justify="center"))

        if self.notice:
            components.append(Text(self.notice, style="magenta", justify="center"))

        return Group(*components)

    def _create_footer_text(self, config: SessionConfig) -> Text:
        skip = "'s' to skip" if config.is_premium else "'s' skip (premium only)"
        hints = f"'b' background  •  'f' foreground  •  {skip}  •  'q' to quit"
        return Text(hints, style="dim", justify="center")


def outcome_title(outcome: SessionOutcome) -> str:
    if outcome.phase == "completed":
        return "🎉 Session Complete!"
    if outcome.phase == "skipped":
        return "⏭️ Session Skipped"
    return "❌ Session Failed"


def outcome_message(outcome: SessionOutcome) -> str:
    """Human-readable explanation of how the session ended."""
    if outcome.phase == "completed":
        return "Congratulations! You completed your focus session."
    if outcome.phase == "skipped":
        return "You ended this session early."
    if outcome.reason == REASON_GRACE_EXPIRED:
        return "You left the app for too long. Session has been terminated."
    if outcome.reason == REASON_TRACK_UNAVAILABLE:
        return "The selected music track could not be loaded."
    if outcome.reason == REASON_DISMISSED:
        return "The session was closed before it finished."
    return f"Session ended: {outcome.reason}."


def show_outcome(outcome: SessionOutcome, console: Console | None = None) -> None:
    """Show the terminal outcome panel."""
    console = console or Console()
    color = "green" if outcome.success else "red"

    panel = Panel(
        f"""[bold {color}]{outcome_title(outcome)}[/bold {color}]

{outcome_message(outcome)}
Reason: {outcome.reason}
Time remaining: {format_clock(outcome.remaining_seconds)}""",
        border_style=color,
        padding=(1, 2),
    )
    console.print(panel)
