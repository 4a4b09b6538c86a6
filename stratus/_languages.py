# Copyright Stratus Labs 2026
"""Maps the language keywords accepted by `stratus serverless init` to runtimes and sample code."""

import enum
import types
from typing import Mapping, NamedTuple

from .config import logger
from .exception import UnsupportedLanguageError

DEFAULT_LANGUAGE = "javascript"

_JS_SAMPLE = """function main(args) {
    let name = args.name || 'stranger'
    let greeting = 'Hello ' + name + '!'
    console.log(greeting)
    return {"body": greeting}
}

exports.main = main
"""

_TS_SAMPLE = """export function main(args: {}): {} {
    let name: string = args['name'] || 'stranger'
    let greeting: string = 'Hello ' + name + '!'
    console.log(greeting)
    return { body: greeting }
}
"""

_PY_SAMPLE = """def main(args):
    name = args.get("name", "stranger")
    greeting = "Hello " + name + "!"
    print(greeting)
    return {"body": greeting}
"""

_GO_SAMPLE = """package main

func Main(args map[string]interface{}) map[string]interface{} {
	name, ok := args["name"].(string)
	if !ok {
		name = "stranger"
	}
	msg := make(map[string]interface{})
	msg["body"] = "Hello " + name + "!"
	return msg
}
"""

_PHP_SAMPLE = """<?php
function main(array $args) : array
{
    $name = $args["name"] ?? "stranger";
    $greeting = "Hello $name!";
    echo $greeting;
    return ["body" => $greeting];
}
"""


class LanguageInfo(NamedTuple):
    runtime: str
    sample: str
    typescript: bool = False


LANGUAGES: Mapping[str, LanguageInfo] = types.MappingProxyType(
    {
        "javascript": LanguageInfo("nodejs", _JS_SAMPLE),
        "js": LanguageInfo("nodejs", _JS_SAMPLE),
        "typescript": LanguageInfo("nodejs", _TS_SAMPLE, typescript=True),
        "ts": LanguageInfo("nodejs", _TS_SAMPLE, typescript=True),
        "python": LanguageInfo("python", _PY_SAMPLE),
        "py": LanguageInfo("python", _PY_SAMPLE),
        "go": LanguageInfo("go", _GO_SAMPLE),
        "golang": LanguageInfo("go", _GO_SAMPLE),
        "php": LanguageInfo("php", _PHP_SAMPLE),
    }
)


def keywords_for_runtime(runtime: str) -> list[str]:
    return [keyword for keyword, info in LANGUAGES.items() if info.runtime == runtime]


class RuntimeValidation(enum.Enum):
    VALID = "valid"
    INVALID = "invalid"
    # The functions host could not be consulted.
    UNKNOWN = "unknown"


class ResolvedLanguage(NamedTuple):
    kind: str
    sample: str
    typescript: bool


def check_runtime(service, runtime: str) -> RuntimeValidation:
    """Ask the functions host whether it offers `runtime`.

    Creating a project must work offline, so failing to reach the host gives UNKNOWN, not an error.
    """
    if runtime == LANGUAGES[DEFAULT_LANGUAGE].runtime:
        return RuntimeValidation.VALID
    try:
        service.check_status()
        creds = service.read_credentials()
        info = service.get_host_info(creds.api_host)
    except Exception as exc:
        logger.debug(f"Could not check runtime '{runtime}' against the functions host: {exc}")
        return RuntimeValidation.UNKNOWN
    if runtime in info.runtimes:
        return RuntimeValidation.VALID
    return RuntimeValidation.INVALID


def resolve_language(language: str, service) -> ResolvedLanguage:
    """Convert a language keyword into a runtime kind plus sample source code.

    Raises `UnsupportedLanguageError` for unknown keywords, and for runtimes the functions host says it lacks.
    """
    language = language.lower()
    info = LANGUAGES.get(language)
    if info is None:
        raise UnsupportedLanguageError(f"{language} is not a supported language")
    if check_runtime(service, info.runtime) == RuntimeValidation.INVALID:
        raise UnsupportedLanguageError(f"{language} is not a supported language")
    return ResolvedLanguage(kind=f"{info.runtime}:default", sample=info.sample, typescript=info.typescript)
