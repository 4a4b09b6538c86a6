# Copyright Stratus Labs 2026
import pytest

from stratus._languages import (
    LANGUAGES,
    RuntimeValidation,
    check_runtime,
    keywords_for_runtime,
    resolve_language,
)
from stratus.exception import AuthError, UnsupportedLanguageError
from stratus.serverless import HostInfo, ServerlessCredentials


class FakeHostService:
    def __init__(self, runtimes=None, fail_at=None):
        self.runtimes = runtimes or {}
        self.fail_at = fail_at
        self.calls = []

    def _step(self, name):
        self.calls.append(name)
        if self.fail_at == name:
            raise AuthError(f"{name} failed")

    def check_status(self):
        self._step("check_status")

    def read_credentials(self):
        self._step("read_credentials")
        return ServerlessCredentials(api_host="https://functions.example.com", namespace="fn-1")

    def get_host_info(self, api_host):
        self._step("get_host_info")
        assert api_host == "https://functions.example.com"
        return HostInfo(runtimes=self.runtimes)


def test_language_table_is_read_only():
    with pytest.raises(TypeError):
        LANGUAGES["cobol"] = LANGUAGES["js"]  # type: ignore


def test_keywords_for_runtime():
    assert sorted(keywords_for_runtime("nodejs")) == ["javascript", "js", "ts", "typescript"]
    assert sorted(keywords_for_runtime("go")) == ["go", "golang"]


@pytest.mark.parametrize(
    "language,kind,typescript",
    [
        ("javascript", "nodejs:default", False),
        ("JS", "nodejs:default", False),
        ("typescript", "nodejs:default", True),
        ("Ts", "nodejs:default", True),
        ("python", "python:default", False),
        ("py", "python:default", False),
        ("golang", "go:default", False),
        ("php", "php:default", False),
    ],
)
def test_resolve_language(language, kind, typescript):
    service = FakeHostService(runtimes={"python": [], "go": [], "php": []})
    resolved = resolve_language(language, service)
    assert resolved.kind == kind
    assert resolved.typescript == typescript
    assert resolved.sample == LANGUAGES[language.lower()].sample


@pytest.mark.parametrize("language", ["cobol", "", "node", "javascript ", "python3"])
def test_unknown_language(language):
    service = FakeHostService()
    with pytest.raises(UnsupportedLanguageError, match="is not a supported language"):
        resolve_language(language, service)
    # Unknown keywords never reach the host
    assert service.calls == []


def test_default_runtime_is_checked_offline():
    service = FakeHostService(fail_at="check_status")
    assert check_runtime(service, "nodejs") == RuntimeValidation.VALID
    assert service.calls == []


@pytest.mark.parametrize("fail_at", ["check_status", "read_credentials", "get_host_info"])
def test_unreachable_host_is_permissive(fail_at):
    service = FakeHostService(fail_at=fail_at)
    assert check_runtime(service, "python") == RuntimeValidation.UNKNOWN
    assert resolve_language("python", service).kind == "python:default"


def test_host_without_runtime_rejects_language():
    service = FakeHostService(runtimes={"nodejs": [], "python": []})
    assert check_runtime(service, "php") == RuntimeValidation.INVALID
    with pytest.raises(UnsupportedLanguageError, match="php is not a supported language"):
        resolve_language("PHP", service)


def test_host_with_runtime_accepts_language():
    service = FakeHostService(runtimes={"go": [{"kind": "go:1.20", "default": True}]})
    assert check_runtime(service, "go") == RuntimeValidation.VALID
    assert service.calls == ["check_status", "read_credentials", "get_host_info"]
