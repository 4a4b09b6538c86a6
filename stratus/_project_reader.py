# Copyright Stratus Labs 2026
"""Summarizes a functions project by reading it from the local filesystem.

This is an experimental replacement for the deployer's `get-metadata` command,
selected with the hidden `--project-reader` flag.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from dotenv import dotenv_values

from ._include_exclude import RESERVED_FOLDER
from .config import logger
from .exception import InvalidError
from .project_spec import Function, Package, ProjectSpec, load_project_spec
from .serverless import ServerlessOutput, ServerlessProject

_RUNTIME_BY_EXTENSION = {
    ".js": "nodejs",
    ".mjs": "nodejs",
    ".cjs": "nodejs",
    ".ts": "nodejs",
    ".py": "python",
    ".go": "go",
    ".php": "php",
}

# Files whose presence in a function directory identify its runtime.
_RUNTIME_MARKERS = {
    "package.json": "nodejs",
    "requirements.txt": "python",
    "go.mod": "go",
    "composer.json": "php",
}


def _parse_selection(value: str) -> Tuple[bool, Set[str], Set[Tuple[str, str]]]:
    web = False
    packages: Set[str] = set()
    functions: Set[Tuple[str, str]] = set()
    for token in value.split(","):
        token = token.strip()
        if not token:
            continue
        if token == RESERVED_FOLDER:
            web = True
        elif token.endswith("/") or "/" not in token:
            packages.add(token.rstrip("/"))
        else:
            package, function = token.split("/", 1)
            functions.add((package, function))
    return web, packages, functions


class Includer:
    """Decides which parts of a project `--include` and `--exclude` select.

    Tokens are `web` (the web folder), `pkg` or `pkg/` (a package) and `pkg/fn` (a function).
    """

    def __init__(self, include: str = "", exclude: str = ""):
        self._include_all = not include
        self._include_web, self._include_packages, self._include_functions = _parse_selection(include)
        self._exclude_web, self._exclude_packages, self._exclude_functions = _parse_selection(exclude)

    def is_web_included(self) -> bool:
        return (self._include_all or self._include_web) and not self._exclude_web

    def is_package_included(self, package: str) -> bool:
        if package in self._exclude_packages:
            return False
        if self._include_all or package in self._include_packages:
            return True
        return any(pkg == package for pkg, _ in self._include_functions)

    def is_function_included(self, package: str, function: str) -> bool:
        if package in self._exclude_packages or (package, function) in self._exclude_functions:
            return False
        return (
            self._include_all
            or package in self._include_packages
            or (package, function) in self._include_functions
        )


def infer_runtime(path: Path) -> str:
    """Guess the runtime kind of a function from its file or directory. Returns "" if we can't tell."""
    if path.is_file():
        runtime = _RUNTIME_BY_EXTENSION.get(path.suffix)
    else:
        runtime = None
        for marker, marker_runtime in _RUNTIME_MARKERS.items():
            if (path / marker).exists():
                runtime = marker_runtime
                break
        if runtime is None:
            for child in sorted(path.rglob("*")):
                if child.is_file() and child.suffix in _RUNTIME_BY_EXTENSION:
                    runtime = _RUNTIME_BY_EXTENSION[child.suffix]
                    break
    return f"{runtime}:default" if runtime else ""


def _is_hidden(path: Path) -> bool:
    return path.name.startswith(".")


def _scan_packages(packages_dir: Path) -> Tuple[Dict[str, Dict[str, Path]], List[str]]:
    found: Dict[str, Dict[str, Path]] = {}
    strays: List[str] = []
    if not packages_dir.is_dir():
        return found, strays
    for entry in sorted(packages_dir.iterdir()):
        if _is_hidden(entry):
            continue
        if not entry.is_dir():
            strays.append(entry.name)
            continue
        functions = {}
        for fn_entry in sorted(entry.iterdir()):
            if _is_hidden(fn_entry):
                continue
            name = fn_entry.name if fn_entry.is_dir() else fn_entry.stem
            functions[name] = fn_entry
        found[entry.name] = functions
    return found, strays


def _merge(spec: ProjectSpec, found: Dict[str, Dict[str, Path]]) -> List[Tuple[Package, Dict[str, Path]]]:
    merged = []
    for package in spec.packages:
        merged.append((package, found.get(package.name, {})))
    for name, functions in found.items():
        if spec.find_package(name) is None:
            merged.append((Package(name=name), functions))
    return merged


def _summarize_function(function: Function, source: Optional[Path], project_dir: Path) -> Dict[str, Any]:
    runtime = function.runtime or (infer_runtime(source) if source is not None else "")
    summary = function.to_dict()
    summary["runtime"] = runtime
    summary["source"] = os.path.relpath(source, project_dir) if source is not None else None
    return summary


def read_project(
    project: ServerlessProject,
    args: Sequence[str],
    include: str = "",
    exclude: str = "",
    env: str = "",
) -> ServerlessOutput:
    project_dir = Path(project.project_path)
    if not project_dir.is_dir():
        raise InvalidError(f"{project.project_path} is not a directory")
    logger.debug(f"Reading project {project_dir} (args: {list(args)})")

    spec = load_project_spec(str(project_dir))
    found, strays = _scan_packages(project_dir / "packages")
    includer = Includer(include, exclude)

    packages = []
    for package, sources in _merge(spec or ProjectSpec(), found):
        if not includer.is_package_included(package.name):
            continue
        functions = []
        for function in package.functions:
            if includer.is_function_included(package.name, function.name):
                functions.append(_summarize_function(function, sources.get(function.name), project_dir))
        for name, source in sources.items():
            if package.find_function(name) is None and includer.is_function_included(package.name, name):
                functions.append(_summarize_function(Function(name=name), source, project_dir))
        summary = package.to_dict()
        summary["functions"] = functions
        packages.append(summary)

    web_dir = project_dir / RESERVED_FOLDER
    web_files = []
    if web_dir.is_dir() and includer.is_web_included():
        web_files = sorted(str(p.relative_to(web_dir)) for p in web_dir.rglob("*") if p.is_file())

    entity: Dict[str, Any] = {
        "projectPath": str(project_dir.resolve()),
        "config": spec is not None,
        "packages": packages,
        "web": web_files,
        "strays": strays,
    }
    if env:
        if not os.path.isfile(env):
            raise InvalidError(f"Could not read environment file at {env}")
        entity["environment"] = {key: value for key, value in dotenv_values(env).items() if value is not None}
    return ServerlessOutput(entity=entity)
