# Copyright Stratus Labs 2026
from rich.console import Console
from rich.json import JSON
from rich.table import Table

from .serverless import ServerlessOutput


def make_console(*, stderr: bool = False, highlight: bool = True) -> Console:
    """Create a rich Console tuned for Stratus CLI output."""
    return Console(
        stderr=stderr,
        highlight=highlight,
        # CLI does not work with auto-detected Jupyter HTML display_data.
        force_jupyter=False,
    )


def print_serverless_output(output: ServerlessOutput, console: Console) -> None:
    """Show what a plugin command reported: its transcript, else its table, else its entity."""
    if output.captured:
        console.print("\n".join(output.captured), markup=False, highlight=False, emoji=False, soft_wrap=True)
    elif output.table:
        columns = list(output.table[0].keys())
        table = Table(*columns)
        for row in output.table:
            table.add_row(*(str(row.get(col, "")) for col in columns))
        console.print(table)
    elif output.entity is not None:
        console.print(JSON.from_data(output.entity), soft_wrap=True)
