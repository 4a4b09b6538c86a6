# Copyright Stratus Labs 2026
import typer

from .config import config_cli
from .serverless import serverless_cli


def version_callback(value: bool):
    if value:
        from stratus_version import __version__

        typer.echo(f"stratus client version: {__version__}")
        raise typer.Exit()


entrypoint_cli_typer = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="markdown",
    help="""
    Stratus is a command-line interface to the Stratus cloud.

    Use `stratus serverless` to develop and deploy serverless functions.
    """,
)


@entrypoint_cli_typer.callback()
def stratus(
    ctx: typer.Context,
    version: bool = typer.Option(None, "--version", callback=version_callback),
):
    pass


# Serverless
entrypoint_cli_typer.add_typer(serverless_cli, rich_help_panel="Serverless")
entrypoint_cli_typer.add_typer(serverless_cli, name="sls", hidden=True)
entrypoint_cli_typer.add_typer(serverless_cli, name="sbx", hidden=True)

# Configuration
entrypoint_cli_typer.add_typer(config_cli, rich_help_panel="Configuration")

entrypoint_cli = typer.main.get_command(entrypoint_cli_typer)

if __name__ == "__main__":
    # this module is only called from tests, otherwise the parent package __main__.py is used as the entrypoint
    entrypoint_cli()
