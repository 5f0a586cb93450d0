"""Local user profile: the premium flag sessions are started with."""

from lockin_beat.services.config_service import ConfigService, get_config_service
from lockin_beat.utils.logger import get_logger


class ProfileService:
    """Read and update the premium status of the local profile."""

    def __init__(self, config_service: ConfigService | None = None):
        self.config_service = config_service or get_config_service()

    def is_premium(self) -> bool:
        """Point-in-time read; a running session never re-checks it."""
        return self.config_service.config.profile.is_premium

    def display_name(self) -> str:
        return self.config_service.config.profile.display_name or "Guest"

    def mark_premium(self, value: bool = True) -> None:
        """Persist the premium flag (e.g. after a purchase is confirmed)."""
        self.config_service.config.profile.is_premium = value
        self.config_service.save_config()
        get_logger("profile").info("profile premium status set to %s", value)


def get_profile_service() -> ProfileService:
    return ProfileService()
