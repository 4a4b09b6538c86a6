# Copyright Stratus Labs 2026
"""Rewrites `--include` and `--exclude` before they reach the deployer.

The deployer gives the `web` folder of a project special meaning. A bare `web`
names that folder, while `web/` names a package called `web`. Since a project
may contain a `web` folder that shouldn't be deployed, it is always excluded
unless the user explicitly includes it.
"""

from typing import Any, Dict

RESERVED_FOLDER = "web"


def qualify_reserved_folder(value: str) -> str:
    """Replace every `web` token of a comma-separated list with `web/`."""
    tokens = value.split(",")
    return ",".join(RESERVED_FOLDER + "/" if token == RESERVED_FOLDER else token for token in tokens)


def adjust_include_and_exclude(options: Dict[str, Any]) -> Dict[str, Any]:
    includes = options.get("include")
    if includes:
        options["include"] = qualify_reserved_folder(includes)

    excludes = options.get("exclude")
    if excludes:
        options["exclude"] = qualify_reserved_folder(excludes) + "," + RESERVED_FOLDER
    else:
        options["exclude"] = RESERVED_FOLDER
    return options
