"""Configuration models for Lock-in Beat."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from lockin_beat.models.session.state import DURATION_OPTIONS


class SessionSettings(BaseModel):
    """Defaults used when starting a focus session."""

    default_duration_minutes: int = Field(default=60)
    default_track_id: str = Field(default="focus1")
    tick_interval_seconds: float = Field(default=1.0, gt=0)

    @field_validator("default_duration_minutes")
    @classmethod
    def validate_duration(cls, v: int) -> int:
        if v not in DURATION_OPTIONS:
            options = ", ".join(str(d) for d in DURATION_OPTIONS)
            raise ValueError(f"duration must be one of: {options}")
        return v

    @field_validator("default_track_id")
    @classmethod
    def validate_track_id(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("track id cannot be empty")
        return v.strip()


class ProfileConfig(BaseModel):
    """Local user profile."""

    is_premium: bool = Field(default=False)
    display_name: str | None = Field(default=None)


class AudioConfig(BaseModel):
    """Audio configuration."""

    asset_root: str | None = Field(
        default=None, description="Directory that track assets are resolved against"
    )


class OutputConfig(BaseModel):
    """Output configuration."""

    color: bool = Field(default=True)


class AppConfig(BaseModel):
    """Main Lock-in Beat configuration"""

    session: SessionSettings = Field(default_factory=SessionSettings)
    profile: ProfileConfig = Field(default_factory=ProfileConfig)
    audio: AudioConfig = Field(default_factory=AudioConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    # Custom tracks: {track_id: {"title": ..., "asset": ...}}
    tracks: dict[str, dict[str, str]] | None = None
