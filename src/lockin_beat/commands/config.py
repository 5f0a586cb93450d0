"""Configuration management commands."""

import json
from difflib import get_close_matches

import typer

from lockin_beat.services.config_service import ConfigService, get_config_service
from lockin_beat.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from lockin_beat.utils.ui.console import get_console
from lockin_beat.utils.ui.formatters import format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(help="Configuration management commands")
console = get_console()


def _unknown_key(svc: ConfigService, key: str) -> AppError:
    message = f"Configuration key '{key}' not found"
    matches = get_close_matches(key, svc.list_keys(), n=3, cutoff=0.6)
    if matches:
        message += f". Did you mean: {', '.join(matches)}?"
    return AppError(message, ERROR_NOT_FOUND)


@app.command("show")
@command_wrapper
def show_config():
    """Show the current configuration."""
    config = get_config_service().config
    console.print_json(json.dumps(config.model_dump()))


@app.command("keys")
@command_wrapper
def list_keys():
    """List every configuration key."""
    for key in get_config_service().list_keys():
        console.print(key)


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., session.default_track_id)"),
):
    """Get a configuration value."""
    svc = get_config_service()
    try:
        value = svc.get(key)
    except KeyError as e:
        raise _unknown_key(svc, key) from e
    console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., profile.is_premium)"),
    value: str = typer.Argument(..., help="Configuration value"),
):
    """Set a configuration value."""
    svc = get_config_service()
    try:
        svc.set(key, value)
    except KeyError as e:
        raise _unknown_key(svc, key) from e
    except ValueError as e:
        raise AppError(str(e), ERROR_INVALID_ARGS) from e
    format_success(f"Set {key} = {value}")


@app.command("reset")
@command_wrapper
def reset_config(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
):
    """Reset configuration to defaults."""
    if not yes and not typer.confirm("Reset all settings to defaults?"):
        raise typer.Exit(0)
    get_config_service().reset_config()
    format_success("Configuration reset to defaults")
