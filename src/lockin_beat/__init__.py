"""Lock-in Beat: focus sessions with background music and a grace period."""

__version__ = "0.1.0"
