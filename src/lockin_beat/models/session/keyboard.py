"""Terminal keys that drive a session.

A real host reports app activity through the event stream; in the terminal
the user simulates it: ``b``/``i`` leave the app, ``f`` comes back.
"""

import sys
from typing import Optional

ACTIVITY_KEYS = {
    "b": "background",
    "i": "inactive",
    "f": "foreground",
}
SKIP_KEY = "s"
QUIT_KEY = "q"


class KeyboardHandler:
    """Reads single keys without blocking while the session view is live.

    Use as a context manager so the terminal mode is restored on every exit
    path. Outside a TTY (pipes, tests) no key is ever reported.
    """

    def __init__(self, stream=None):
        self.stream = stream or sys.stdin
        self.fd: Optional[int] = None
        self._saved_mode = None

    @property
    def interactive(self) -> bool:
        return self._saved_mode is not None

    def __enter__(self) -> "KeyboardHandler":
        try:
            import termios
            import tty
        except ImportError:
            return self

        try:
            self.fd = self.stream.fileno()
            self._saved_mode = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except (termios.error, OSError, ValueError):
            # Not a TTY
            self._saved_mode = None
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()

    def get_key(self) -> Optional[str]:
        """Return the next pressed key, lower-cased, or None."""
        if not self.interactive:
            return None

        import select

        ready, _, _ = select.select([self.stream], [], [], 0)
        if not ready:
            return None
        return self.stream.read(1).lower() or None

    def restore(self) -> None:
        """Put the terminal back in the mode it had before ``__enter__``."""
        if not self.interactive:
            return
        import termios

        termios.tcsetattr(self.fd, termios.TCSADRAIN, self._saved_mode)
        self._saved_mode = None
