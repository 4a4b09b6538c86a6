# Copyright Stratus Labs 2026
r"""Stratus intentionally keeps configurability to a minimum.

Settings are read from the `.stratus.toml` file in your home directory, and can
be overridden with environment variables of the form `STRATUS_<SETTING>`.

.stratus.toml
---------------

The file should look like this::

```toml
[default]
serverless_plugin = "nim"
loglevel = "INFO"
```

Available settings
------------------

* `loglevel` / `STRATUS_LOGLEVEL`.
  Defaults to `WARNING`. Set this to `DEBUG` to see internal messages.
* `log_format` / `STRATUS_LOG_FORMAT`.
  Either `STRING` (the default) or `JSON`.
* `serverless_plugin` / `STRATUS_SERVERLESS_PLUGIN`.
  Command line used to invoke the serverless deployer plugin. Defaults to `nim`.
  The value is split like a shell command, so `node /opt/deployer/main.js` works.
* `serverless_home` / `STRATUS_SERVERLESS_HOME`.
  Directory holding the serverless credentials file. Defaults to `~/.stratus/serverless`.
* `host_info_timeout` / `STRATUS_HOST_INFO_TIMEOUT`.
  Seconds to wait for the functions API host to describe its runtimes. Defaults to 10.
* `traceback` / `STRATUS_TRACEBACK`.
  Defaults to False. Enables printing full tracebacks on CLI errors.

Meta-configuration
------------------

Some "meta-options" are set using environment variables only:

* `STRATUS_CONFIG_PATH` lets you override the location of the .toml file,
  by default `~/.stratus.toml`.
* `STRATUS_PROFILE` lets you use multiple sections in the .toml file
  and switch between them. It defaults to "default".
"""

import logging
import os
import typing
from typing import Any, Dict, Optional

import toml

from ._utils.logger import configure_logger

# Locate config file and read it

user_config_path: str = os.environ.get("STRATUS_CONFIG_PATH") or os.path.expanduser("~/.stratus.toml")


def _read_user_config():
    if os.path.exists(user_config_path):
        with open(user_config_path) as f:
            return toml.load(f)
    else:
        return {}


_user_config = _read_user_config()


def _config_active_profile() -> str:
    for key, values in _user_config.items():
        if values.get("active", False) is True:
            return key
    else:
        return "default"


_profile = os.environ.get("STRATUS_PROFILE") or _config_active_profile()

# Define settings


def _to_boolean(x: object) -> bool:
    return str(x).lower() not in {"", "0", "false"}


class _Setting(typing.NamedTuple):
    default: typing.Any = None
    transform: typing.Callable[[str], typing.Any] = lambda x: x  # noqa: E731


_SETTINGS = {
    "loglevel": _Setting("WARNING", lambda s: s.upper()),
    "log_format": _Setting("STRING", lambda s: s.upper()),
    "log_pattern": _Setting(""),
    "serverless_plugin": _Setting("nim"),
    "serverless_home": _Setting(os.path.expanduser(os.path.join("~", ".stratus", "serverless")), os.path.expanduser),
    "host_info_timeout": _Setting(10.0, float),
    "traceback": _Setting(False, transform=_to_boolean),
}


class Config:
    """Singleton that holds configuration used by Stratus internally."""

    def __init__(self):
        pass

    def get(self, key, profile=None, use_env=True):
        """Looks up a configuration value.

        Will check (in decreasing order of priority):
        1. Any environment variable of the form STRATUS_FOO_BAR (when use_env is True)
        2. Settings in the user's .toml configuration file
        3. The default value of the setting
        """
        if profile is None:
            profile = _profile
        s = _SETTINGS[key]
        env_var_key = "STRATUS_" + key.upper()
        if use_env and env_var_key in os.environ:
            return s.transform(os.environ[env_var_key])
        elif profile in _user_config and key in _user_config[profile]:
            return s.transform(_user_config[profile][key])
        else:
            return s.default

    def __getitem__(self, key):
        return self.get(key)

    def __repr__(self):
        return repr(self.to_dict())

    def to_dict(self):
        return {key: self.get(key) for key in _SETTINGS.keys()}


config = Config()

# Logging

logger = logging.getLogger("stratus-client")
configure_logger(logger, config["loglevel"], config["log_format"], config["log_pattern"])

# Utils to write config


def _store_user_config(new_settings: Dict[str, Any], profile: Optional[str] = None):
    """Internal method, used by the CLI to set config values."""
    if profile is None:
        profile = _profile
    user_config = _read_user_config()
    user_config.setdefault(profile, {}).update(**new_settings)
    _write_user_config(user_config)


def _write_user_config(user_config):
    with open(user_config_path, "w") as f:
        toml.dump(user_config, f)
