# Copyright Stratus Labs 2026
import sys

from ._output import make_console
from .cli._traceback import setup_rich_traceback
from .cli.entry_point import entrypoint_cli
from .config import config


def main():
    # Setup rich tracebacks, but only on user's end, when using the Stratus CLI.
    setup_rich_traceback()

    try:
        entrypoint_cli()

    except Exception as exc:
        if (
            # User has asked to alway see full tracebacks
            config.get("traceback")
            # The exception message is empty, so we need to provide _some_ actionable information
            or not str(exc)
        ):
            raise

        from rich.panel import Panel
        from rich.text import Text

        content = str(exc)
        if notes := getattr(exc, "__notes__", []):
            content = f"{content}\n\nNote: {' '.join(notes)}"

        console = make_console(stderr=True, highlight=False)
        panel = Panel(Text(content), title="Error", title_align="left", border_style="red")
        console.print(panel)
        sys.exit(1)


if __name__ == "__main__":
    main()
