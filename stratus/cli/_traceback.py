# Copyright Stratus Labs 2026
"""Helper functions related to displaying tracebacks in the CLI."""
from rich.traceback import install


def setup_rich_traceback() -> None:
    import click
    import synchronicity
    import typer

    install(suppress=[synchronicity, click, typer], extra_lines=1)
