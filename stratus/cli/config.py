# Copyright Stratus Labs 2026
import typer

from stratus._output import make_console
from stratus.config import _store_user_config, config
from stratus.exception import InvalidError

config_cli = typer.Typer(
    name="config",
    help="""
    Manage client configuration for the current profile.

    Settings can also be overridden with `STRATUS_<SETTING>` environment variables.
    """,
    no_args_is_help=True,
)


@config_cli.command(help="Show current configuration values (debugging command).")
def show():
    console = make_console()
    console.print(config.to_dict())


@config_cli.command(hidden=True)
def set(key: str, value: str):
    if key not in config.to_dict():
        raise InvalidError(f"Unknown setting: {key}")
    _store_user_config({key: value})
