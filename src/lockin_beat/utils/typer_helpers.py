"""Typer helper utilities."""

from difflib import get_close_matches

import typer
from typer.core import TyperGroup

from lockin_beat.utils.exit_codes import ERROR_INVALID_ARGS
from lockin_beat.utils.ui.console import get_console


def command_paths(group) -> dict[str, str]:
    """Map every reachable command name to its full path.

    Top-level commands map to themselves; commands of sub-apps map to
    ``"<group> <command>"`` so ``lockin start`` can point at ``session start``.
    """
    paths: dict[str, str] = {}
    for name, command in group.commands.items():
        paths.setdefault(name, name)
        for sub_name in getattr(command, "commands", None) or {}:
            paths.setdefault(sub_name, f"{name} {sub_name}")
    return paths


class SuggestingGroup(TyperGroup):
    """Typer group that suggests commands, including nested ones, on typos."""

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except Exception as e:
            if not args:
                raise

            attempted = args[0]
            paths = command_paths(self)
            if attempted in paths and paths[attempted] != attempted:
                suggestions = [paths[attempted]]
            else:
                suggestions = [
                    paths[name] for name in get_close_matches(attempted, list(paths), n=3, cutoff=0.6)
                ]
            if not suggestions:
                raise

            console = get_console()
            console.print(f'[red]Error:[/red] unknown command "{attempted}" for "{ctx.info_name}"')
            console.print()
            if len(suggestions) == 1:
                console.print("[yellow]Did you mean this?[/yellow]")
            else:
                console.print("[yellow]Did you mean one of these?[/yellow]")
            for suggestion in suggestions:
                console.print(f"        {ctx.info_name} {suggestion}")
            raise typer.Exit(ERROR_INVALID_ARGS) from e
