# Copyright Stratus Labs 2026
import contextlib
import json
import os
import pytest
import shlex
import shutil
import sys
import tempfile
import textwrap

from stratus import config

FAKE_PLUGIN_SOURCE = """
import json
import os
import sys

with open(os.environ["FAKE_PLUGIN_ARGS"], "a") as f:
    f.write(json.dumps(sys.argv[1:]) + "\\n")

with open(os.environ["FAKE_PLUGIN_RESPONSE"]) as f:
    response = json.load(f)

sys.stdout.write(response.get("stdout", ""))
sys.stderr.write(response.get("stderr", ""))
sys.exit(response.get("exit_code", 0))
"""


@pytest.fixture(scope="function", autouse=True)
def set_env(monkeypatch, tmp_path):
    # Never pick up the credentials of whoever runs the tests
    monkeypatch.setenv("STRATUS_SERVERLESS_HOME", str(tmp_path / "serverless-home"))
    monkeypatch.setenv("STRATUS_SERVERLESS_PLUGIN", "stratus-test-plugin-that-does-not-exist")


class FakePlugin:
    """A stand-in deployer plugin: records its arguments and replays a canned response."""

    def __init__(self, directory):
        self.script = directory / "fake_plugin.py"
        self.script.write_text(FAKE_PLUGIN_SOURCE)
        self.args_file = directory / "fake_plugin_args.jsonl"
        self.response_file = directory / "fake_plugin_response.json"
        self.respond()

    @property
    def command(self) -> str:
        return f"{shlex.quote(sys.executable)} {shlex.quote(str(self.script))}"

    def respond(self, stdout="", stderr="", exit_code=0, **output):
        if output:
            stdout = json.dumps(output)
        self.response_file.write_text(json.dumps({"stdout": stdout, "stderr": stderr, "exit_code": exit_code}))

    @property
    def calls(self):
        if not self.args_file.exists():
            return []
        return [json.loads(line) for line in self.args_file.read_text().splitlines()]


@pytest.fixture
def fake_plugin(monkeypatch, tmp_path):
    plugin_dir = tmp_path / "plugin"
    plugin_dir.mkdir()
    plugin = FakePlugin(plugin_dir)
    monkeypatch.setenv("STRATUS_SERVERLESS_PLUGIN", plugin.command)
    monkeypatch.setenv("FAKE_PLUGIN_ARGS", str(plugin.args_file))
    monkeypatch.setenv("FAKE_PLUGIN_RESPONSE", str(plugin.response_file))
    return plugin


@pytest.fixture
def serverless_credentials(tmp_path):
    """Write a credentials file for a connected namespace."""
    home = tmp_path / "serverless-home"
    home.mkdir(exist_ok=True)
    creds = {"api_host": "https://functions.example.com", "namespace": "fn-1234", "auth": "secret"}
    (home / "credentials.json").write_text(json.dumps(creds))
    return creds


@pytest.fixture(name="mock_dir", scope="session")
def mock_dir_factory():
    """Sets up a temp dir with content as specified in a nested dict

    Example usage:
    spec = {
        "foo": {
            "bar.txt": "some content"
        },
    }

    with mock_dir(spec) as root_dir:
        assert os.path.exists(os.path.join(root_dir, "foo", "bar.txt"))
    """

    @contextlib.contextmanager
    def mock_dir(root_spec):
        def rec_make(dir, dir_spec):
            for filename, spec in dir_spec.items():
                path = os.path.join(dir, filename)
                if isinstance(spec, str):
                    with open(path, "w") as f:
                        f.write(spec)
                else:
                    os.mkdir(path)
                    rec_make(path, spec)

        root_dir = tempfile.mkdtemp()
        rec_make(root_dir, root_spec)
        cwd = os.getcwd()
        try:
            os.chdir(root_dir)
            yield root_dir
        finally:
            os.chdir(cwd)
            shutil.rmtree(root_dir, ignore_errors=True)

    return mock_dir


@pytest.fixture(scope="function")
def stratus_config():
    """Return a context manager with a temporary .stratus.toml file"""

    @contextlib.contextmanager
    def mock_stratus_toml(contents: str = ""):
        # The cli tests run within the main process
        # so we need to modify the config singletons to pick up any changes
        orig_config_path_env = os.environ.get("STRATUS_CONFIG_PATH")
        orig_config_path = config.user_config_path
        orig_profile = config._profile
        with tempfile.NamedTemporaryFile(delete=False, suffix=".toml", mode="w") as t:
            t.write(textwrap.dedent(contents.strip("\n")))
        try:
            os.environ["STRATUS_CONFIG_PATH"] = t.name
            config.user_config_path = t.name
            config._user_config = config._read_user_config()
            config._profile = config._config_active_profile()
            yield t.name
        finally:
            if orig_config_path_env:
                os.environ["STRATUS_CONFIG_PATH"] = orig_config_path_env
            else:
                del os.environ["STRATUS_CONFIG_PATH"]
            config.user_config_path = orig_config_path
            config._user_config = config._read_user_config()
            config._profile = orig_profile
            os.remove(t.name)

    return mock_stratus_toml
