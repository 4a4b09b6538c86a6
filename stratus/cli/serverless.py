# Copyright Stratus Labs 2026
from typing import List, Optional

import typer

from stratus._deploy import deploy_project, ensure_one_arg, get_metadata, watch_project
from stratus._languages import DEFAULT_LANGUAGE, keywords_for_runtime
from stratus._output import make_console, print_serverless_output
from stratus._scaffold import create_project
from stratus.serverless import ServerlessService

from .utils import display_table

serverless_cli = typer.Typer(
    name="serverless",
    help="""
    Develop, test and deploy serverless functions.

    A functions project is a directory holding a `project.yml` file and a `packages`
    folder with one sub-folder per package. Create one with `stratus serverless init`.
    """,
    no_args_is_help=True,
)

functions_cli = typer.Typer(name="functions", help="Work with the functions in your namespace.", no_args_is_help=True)
serverless_cli.add_typer(functions_cli)

PATH_ARGUMENT = typer.Argument(None, metavar="PATH", show_default=False)
DIRECTORY_ARGUMENT = typer.Argument(None, metavar="DIRECTORY", show_default=False)

ENV_OPTION = typer.Option("", "--env", help="Path to runtime environment file")
BUILD_ENV_OPTION = typer.Option("", "--build-env", help="Path to build-time environment file")
APIHOST_OPTION = typer.Option("", "--apihost", help="API host to use")
AUTH_OPTION = typer.Option("", "--auth", help="Auth token to use")
INSECURE_OPTION = typer.Option(False, "--insecure", help="Ignore SSL Certificates")
VERBOSE_BUILD_OPTION = typer.Option(False, "--verbose-build", help="Display build details")
VERBOSE_ZIP_OPTION = typer.Option(
    False, "--verbose-zip", help="Display start/end of zipping phase for each function"
)
YARN_OPTION = typer.Option(False, "--yarn", help="Use yarn instead of npm for node builds")
INCLUDE_OPTION = typer.Option("", "--include", help="Functions and/or packages to include")
EXCLUDE_OPTION = typer.Option("", "--exclude", help="Functions and/or packages to exclude")
REMOTE_BUILD_OPTION = typer.Option(False, "--remote-build", help="Run builds remotely")


@serverless_cli.command("init")
def init(
    path: Optional[List[str]] = PATH_ARGUMENT,
    language: str = typer.Option(DEFAULT_LANGUAGE, "--language", "-l", help="Language for the initial sample code"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Clears and reuses an existing directory"),
):
    """Initialize a 'functions project' directory in your local file system.

    The directory will hold functions and supporting artifacts while you develop them.
    It can be uploaded to your functions namespace for testing with `stratus serverless deploy`.

    Type `stratus serverless status --languages` for a list of supported languages.
    """
    args = path or []
    ensure_one_arg(args)
    project = args[0]
    create_project(project, language, overwrite, ServerlessService.from_config())

    console = make_console()
    console.print(
        f"A local functions project directory '{project}' was created for you.\n"
        "You may deploy it by running the command shown on the next line:\n"
        f"  stratus serverless deploy {project}",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


@serverless_cli.command("deploy")
def deploy(
    directory: Optional[List[str]] = DIRECTORY_ARGUMENT,
    env: str = ENV_OPTION,
    build_env: str = BUILD_ENV_OPTION,
    apihost: str = APIHOST_OPTION,
    auth: str = AUTH_OPTION,
    insecure: bool = INSECURE_OPTION,
    verbose_build: bool = VERBOSE_BUILD_OPTION,
    verbose_zip: bool = VERBOSE_ZIP_OPTION,
    yarn: bool = YARN_OPTION,
    include: str = INCLUDE_OPTION,
    exclude: str = EXCLUDE_OPTION,
    remote_build: bool = REMOTE_BUILD_OPTION,
    incremental: bool = typer.Option(False, "--incremental", help="Deploy only changes since last deploy"),
):
    """Deploy a functions project to your functions namespace.

    The project must be organized the way `stratus serverless init` lays it out.
    """
    options = {
        "env": env,
        "build-env": build_env,
        "apihost": apihost,
        "auth": auth,
        "insecure": insecure,
        "verbose-build": verbose_build,
        "verbose-zip": verbose_zip,
        "yarn": yarn,
        "include": include,
        "exclude": exclude,
        "remote-build": remote_build,
        "incremental": incremental,
    }
    deploy_project(ServerlessService.from_config(), directory or [], options, make_console())


@serverless_cli.command("get-metadata")
def get_metadata_(
    directory: Optional[List[str]] = DIRECTORY_ARGUMENT,
    env: str = typer.Option("", "--env", help="Path to environment file"),
    include: str = typer.Option("", "--include", help="Functions or packages to include"),
    exclude: str = typer.Option("", "--exclude", help="Functions or packages to exclude"),
    project_reader: bool = typer.Option(False, "--project-reader", hidden=True, help="Test new project reader service"),
):
    """Obtain metadata of a functions project.

    Produces a JSON structure that summarizes the contents of a functions project.
    This can be useful for feeding into other tools.
    """
    options = {
        "env": env,
        "include": include,
        "exclude": exclude,
        "json": True,
        "project-reader": project_reader,
    }
    get_metadata(ServerlessService.from_config(), directory or [], options, make_console())


@serverless_cli.command("watch")
def watch(
    directory: Optional[List[str]] = DIRECTORY_ARGUMENT,
    env: str = ENV_OPTION,
    build_env: str = BUILD_ENV_OPTION,
    apihost: str = APIHOST_OPTION,
    auth: str = AUTH_OPTION,
    insecure: bool = INSECURE_OPTION,
    verbose_build: bool = VERBOSE_BUILD_OPTION,
    verbose_zip: bool = VERBOSE_ZIP_OPTION,
    yarn: bool = YARN_OPTION,
    include: str = INCLUDE_OPTION,
    exclude: str = EXCLUDE_OPTION,
    remote_build: bool = REMOTE_BUILD_OPTION,
):
    """Watch a functions project directory, deploying incrementally on change.

    Run this in a separate terminal window. It keeps running until interrupted.
    """
    options = {
        "env": env,
        "build-env": build_env,
        "apihost": apihost,
        "auth": auth,
        "insecure": insecure,
        "verbose-build": verbose_build,
        "verbose-zip": verbose_zip,
        "yarn": yarn,
        "include": include,
        "exclude": exclude,
        "remote-build": remote_build,
    }
    try:
        watch_project(ServerlessService.from_config(), directory or [], options)
    except KeyboardInterrupt:
        pass


@serverless_cli.command("status")
def status(
    languages: bool = typer.Option(False, "--languages", help="List the languages the functions host supports"),
    json: bool = typer.Option(False, "--json", help="Output the language list as JSON."),
):
    """Check that serverless support is installed and connected to a functions namespace."""
    service = ServerlessService.from_config()
    service.check_status()
    creds = service.read_credentials()
    console = make_console()
    if not languages:
        console.print(f"Connected to functions namespace '{creds.namespace}' on API host '{creds.api_host}'")
        return

    info = service.get_host_info(creds.api_host)
    rows = []
    for runtime, kinds in sorted(info.runtimes.items()):
        kind_names = [kind.get("kind", "") + (" (default)" if kind.get("default") else "") for kind in kinds]
        rows.append([runtime, ", ".join(kind_names), ", ".join(keywords_for_runtime(runtime))])
    display_table(["Runtime", "Kinds", "Keywords"], rows, json=json, title=f"Supported languages on {creds.api_host}")


@functions_cli.command("get")
def functions_get(
    function_name: str,
    url: bool = typer.Option(False, "--url", help="Get function URL"),
    code: bool = typer.Option(False, "--code", help="Show function code"),
):
    """Retrieve the metadata, URL or code of a deployed function."""
    output = ServerlessService.from_config().exec("action/get", [function_name], {"url": url, "code": code}, {})
    print_serverless_output(output, make_console())
