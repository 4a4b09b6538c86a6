# Copyright Stratus Labs 2026
"""Access to the serverless functions platform.

Builds and deploys are carried out by a separate deployer plugin, which we run as a
subprocess. In captured mode the plugin prints a single JSON object on stdout:

```json
{"captured": ["Deploying project ..."], "table": [], "entity": null, "error": ""}
```

The host of the functions API is contacted directly only to find out which
runtimes it supports.
"""

import json
import os
import shlex
import shutil
import subprocess
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ._utils.async_utils import synchronizer
from ._utils.http_utils import _http_client_with_tls
from .config import config, logger
from .exception import AuthError, BackendError, ServerlessNotInstalledError

CREDENTIALS_FILENAME = "credentials.json"


@dataclass
class ServerlessOutput:
    """Everything a plugin invocation reported."""

    captured: List[str] = field(default_factory=list)
    table: List[Dict[str, Any]] = field(default_factory=list)
    entity: Any = None
    error: str = ""

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ServerlessOutput":
        return cls(
            captured=list(data.get("captured") or []),
            table=list(data.get("table") or []),
            entity=data.get("entity"),
            error=data.get("error") or "",
        )


@dataclass
class ServerlessCredentials:
    api_host: str
    namespace: str
    auth: str = ""


@dataclass
class HostInfo:
    # Runtime family (e.g. "nodejs") to the kinds the host offers for it.
    runtimes: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)


@dataclass
class ServerlessProject:
    project_path: str


def build_plugin_args(
    command: str,
    args: Sequence[str],
    bool_flags: Dict[str, bool],
    string_flags: Dict[str, str],
) -> List[str]:
    """Command line arguments for the plugin, after the plugin executable itself."""
    plugin_args = [command, *args]
    for name, value in bool_flags.items():
        if value:
            plugin_args.append(f"--{name}")
    for name, value in string_flags.items():
        if value:
            plugin_args += [f"--{name}", value]
    return plugin_args


async def _fetch_host_info(api_host: str, timeout: Optional[float]) -> HostInfo:
    url = api_host.rstrip("/") + "/api/v1"
    async with _http_client_with_tls(timeout=timeout) as session:
        async with session.get(url) as resp:
            resp.raise_for_status()
            data = await resp.json(content_type=None)
    return HostInfo(runtimes=dict(data.get("runtimes") or {}))


fetch_host_info = synchronizer.create_blocking(_fetch_host_info)


class ServerlessService:
    """Runs the deployer plugin and talks to the functions API host."""

    def __init__(self, plugin: Sequence[str], serverless_home: str, host_info_timeout: Optional[float] = None):
        self.plugin = list(plugin)
        self.serverless_home = serverless_home
        self.host_info_timeout = host_info_timeout

    @classmethod
    def from_config(cls) -> "ServerlessService":
        return cls(
            plugin=shlex.split(config["serverless_plugin"]),
            serverless_home=config["serverless_home"],
            host_info_timeout=config["host_info_timeout"],
        )

    @property
    def credentials_path(self) -> str:
        return os.path.join(self.serverless_home, CREDENTIALS_FILENAME)

    def check_status(self) -> None:
        """Raise unless the plugin is installed and we hold credentials for a namespace."""
        if not self.plugin or shutil.which(self.plugin[0]) is None:
            raise ServerlessNotInstalledError(
                "The serverless deployer plugin is not installed. "
                "Set `serverless_plugin` in your config to the command that runs it."
            )
        if not os.path.isfile(self.credentials_path):
            raise AuthError("You are not connected to a functions namespace.")

    def read_credentials(self) -> ServerlessCredentials:
        try:
            with open(self.credentials_path) as f:
                data = json.load(f)
        except FileNotFoundError:
            raise AuthError("You are not connected to a functions namespace.")
        except json.JSONDecodeError as exc:
            raise AuthError(f"Could not read serverless credentials from {self.credentials_path}: {exc}")
        if not data.get("api_host"):
            raise AuthError(f"No API host in serverless credentials file {self.credentials_path}")
        return ServerlessCredentials(
            api_host=data["api_host"],
            namespace=data.get("namespace", ""),
            auth=data.get("auth", ""),
        )

    def get_host_info(self, api_host: str) -> HostInfo:
        return fetch_host_info(api_host, self.host_info_timeout)

    def exec(
        self,
        command: str,
        args: Sequence[str],
        bool_flags: Dict[str, bool],
        string_flags: Dict[str, str],
    ) -> ServerlessOutput:
        """Run a plugin command to completion and return what it reported.

        Raises `BackendError` when the plugin fails. The error carries any partial output.
        """
        cmd = self.plugin + build_plugin_args(command, args, bool_flags, string_flags)
        logger.debug(f"Running serverless plugin: {shlex.join(cmd)}")
        proc = subprocess.run(cmd, capture_output=True, text=True)

        try:
            data = json.loads(proc.stdout)
        except json.JSONDecodeError:
            data = None
        if not isinstance(data, dict):
            if proc.returncode != 0:
                message = proc.stderr.strip() or proc.stdout.strip()
                raise BackendError(message or f"Serverless plugin exited with status {proc.returncode}")
            return ServerlessOutput(captured=proc.stdout.splitlines())

        output = ServerlessOutput.from_json(data)
        if output.error:
            raise BackendError(output.error, output)
        if proc.returncode != 0:
            raise BackendError(
                proc.stderr.strip() or f"Serverless plugin exited with status {proc.returncode}", output
            )
        return output

    def exec_streaming(
        self,
        command: str,
        args: Sequence[str],
        bool_flags: Dict[str, bool],
        string_flags: Dict[str, str],
    ) -> None:
        """Run a plugin command with its output going straight to the terminal.

        Blocks until the plugin exits, which for long-running commands means until the user interrupts it.
        """
        cmd = self.plugin + build_plugin_args(command, args, bool_flags, string_flags)
        logger.debug(f"Streaming serverless plugin: {shlex.join(cmd)}")
        proc = subprocess.run(cmd)
        if proc.returncode != 0:
            raise BackendError(f"Serverless plugin exited with status {proc.returncode}")

    def read_project(self, project: ServerlessProject, args: Sequence[str], **options: str) -> ServerlessOutput:
        from ._project_reader import read_project

        return read_project(project, args, **options)
