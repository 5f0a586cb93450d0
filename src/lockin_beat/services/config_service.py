"""Persisted settings for Lock-in Beat.

Settings live in ``config.json`` under platformdirs' user config directory
(``LOCKIN_CONFIG_DIR`` overrides it). Keys are addressed with dots, e.g.
``session.default_duration_minutes`` or ``profile.is_premium``.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, ValidationError

from lockin_beat.models.config_models import AppConfig

_APP_NAME = "lockin_beat"
CONFIG_DIR_ENV = "LOCKIN_CONFIG_DIR"


def _flatten(value: Any, prefix: str = "") -> list[str]:
    if isinstance(value, BaseModel):
        items = [(name, getattr(value, name)) for name in type(value).model_fields]
    elif isinstance(value, dict):
        items = list(value.items())
    else:
        return [prefix]

    keys: list[str] = []
    for name, child in items:
        keys.extend(_flatten(child, f"{prefix}.{name}" if prefix else name))
    return keys


class ConfigService:
    """Loads, edits and saves the application configuration."""

    def __init__(self, config_dir: Path | str | None = None):
        config_dir = config_dir or os.environ.get(CONFIG_DIR_ENV) or user_config_dir(_APP_NAME)
        self.config_dir = Path(config_dir)
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir(_APP_NAME))

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load config.json, writing defaults on first run.

        Raises:
            RuntimeError: If the file exists but cannot be read or validated
        """
        if self._config is not None:
            return self._config

        try:
            self._config = AppConfig.model_validate_json(self.config_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            self._config = AppConfig()
            self.save_config()
        except (OSError, ValidationError) as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Write the current configuration, readable by the owner only."""
        if self._config is None:
            raise RuntimeError("No configuration to save")

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            self.config_path.write_text(self._config.model_dump_json(indent=4), encoding="utf-8")
            self.config_path.chmod(0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def reset_config(self) -> AppConfig:
        self._config = AppConfig()
        self.save_config()
        return self._config

    def list_keys(self) -> list[str]:
        """All dotted keys that currently hold a value."""
        return _flatten(self.config)

    def get(self, key: str) -> Any:
        """Get a configuration value by dotted key.

        Raises:
            KeyError: If the key does not exist
        """
        value: Any = self.config
        for part in key.split("."):
            if isinstance(value, BaseModel) and part in type(value).model_fields:
                value = getattr(value, part)
            elif isinstance(value, dict) and part in value:
                value = value[part]
            else:
                raise KeyError(key)
        return value

    def set(self, key: str, value: Any) -> AppConfig:
        """Set a configuration value by dotted key and save.

        The whole configuration is re-validated, so string input from the
        command line is coerced to the field's type.

        Raises:
            KeyError: If the key does not exist
            ValueError: If the new value fails validation
        """
        self.get(key)
        *parents, leaf = key.split(".")
        data = self.config.model_dump()

        current = data
        for part in parents:
            current = current[part]
        current[leaf] = value

        try:
            new_config = AppConfig.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid value for '{key}': {e.errors()[0]['msg']}") from e

        self._config = new_config
        self.save_config()
        return self._config


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get the global ConfigService instance."""
    return ConfigService()
