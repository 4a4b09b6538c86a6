# Copyright Stratus Labs 2026
"""Drives the deployer plugin for `deploy`, `watch` and `get-metadata`."""

import contextlib
from typing import Any, Dict, Sequence, Tuple

from rich.console import Console

from ._include_exclude import adjust_include_and_exclude
from ._output import print_serverless_output
from ._transcript import rewrite_transcript
from .exception import BackendError, MissingArgumentsError, TooManyArgumentsError
from .serverless import ServerlessProject

FLAG_ENV = "env"
FLAG_BUILD_ENV = "build-env"
FLAG_APIHOST = "apihost"
FLAG_AUTH = "auth"
FLAG_INSECURE = "insecure"
FLAG_VERBOSE_BUILD = "verbose-build"
FLAG_VERBOSE_ZIP = "verbose-zip"
FLAG_YARN = "yarn"
FLAG_REMOTE_BUILD = "remote-build"
FLAG_INCREMENTAL = "incremental"
FLAG_INCLUDE = "include"
FLAG_EXCLUDE = "exclude"
FLAG_JSON = "json"
FLAG_PROJECT_READER = "project-reader"

DEPLOY_BOOL_FLAGS = (FLAG_INSECURE, FLAG_VERBOSE_BUILD, FLAG_VERBOSE_ZIP, FLAG_YARN, FLAG_REMOTE_BUILD, FLAG_INCREMENTAL)
DEPLOY_STRING_FLAGS = (FLAG_ENV, FLAG_BUILD_ENV, FLAG_APIHOST, FLAG_AUTH, FLAG_INCLUDE, FLAG_EXCLUDE)

# Watching already deploys incrementally.
WATCH_BOOL_FLAGS = tuple(flag for flag in DEPLOY_BOOL_FLAGS if flag != FLAG_INCREMENTAL)
WATCH_STRING_FLAGS = DEPLOY_STRING_FLAGS

GET_METADATA_BOOL_FLAGS = (FLAG_JSON, FLAG_PROJECT_READER)
GET_METADATA_STRING_FLAGS = (FLAG_ENV, FLAG_INCLUDE, FLAG_EXCLUDE)


def ensure_one_arg(args: Sequence[str]) -> None:
    if len(args) == 0:
        raise MissingArgumentsError("command is missing required arguments")
    if len(args) > 1:
        raise TooManyArgumentsError("command contains unsupported arguments")


def select_flags(
    options: Dict[str, Any], bool_flags: Sequence[str], string_flags: Sequence[str]
) -> Tuple[Dict[str, bool], Dict[str, str]]:
    """Pick the options a plugin command accepts, dropping unset ones."""
    bools = {name: True for name in bool_flags if options.get(name)}
    strings = {name: options[name] for name in string_flags if options.get(name)}
    return bools, strings


def deploy_project(service, args: Sequence[str], options: Dict[str, Any], console: Console) -> None:
    adjust_include_and_exclude(options)
    ensure_one_arg(args)
    bool_flags, string_flags = select_flags(options, DEPLOY_BOOL_FLAGS, DEPLOY_STRING_FLAGS)
    try:
        output = service.exec("deploy", args, bool_flags, string_flags)
    except BackendError as exc:
        if not exc.output.captured:
            raise
        # The transcript of a failed deploy is often needed to interpret the error
        exc.output.captured = rewrite_transcript(exc.output.captured)
        with contextlib.suppress(OSError):
            console.print(
                "\n".join(exc.output.captured), markup=False, highlight=False, emoji=False, soft_wrap=True
            )
        raise

    output.captured = rewrite_transcript(output.captured)
    print_serverless_output(output, console)


def watch_project(service, args: Sequence[str], options: Dict[str, Any]) -> None:
    adjust_include_and_exclude(options)
    ensure_one_arg(args)
    bool_flags, string_flags = select_flags(options, WATCH_BOOL_FLAGS, WATCH_STRING_FLAGS)
    service.exec_streaming("watch", args, bool_flags, string_flags)


def get_metadata(service, args: Sequence[str], options: Dict[str, Any], console: Console) -> None:
    adjust_include_and_exclude(options)
    ensure_one_arg(args)
    if options.get(FLAG_PROJECT_READER):
        project = ServerlessProject(project_path=args[0])
        output = service.read_project(
            project,
            args,
            include=options.get(FLAG_INCLUDE) or "",
            exclude=options.get(FLAG_EXCLUDE) or "",
            env=options.get(FLAG_ENV) or "",
        )
    else:
        bool_flags, string_flags = select_flags(options, GET_METADATA_BOOL_FLAGS, GET_METADATA_STRING_FLAGS)
        output = service.exec("get-metadata", args, bool_flags, string_flags)
    print_serverless_output(output, console)
