# Copyright Stratus Labs 2026
"""Creates the directory layout of a new functions project."""

import os
import shutil
from pathlib import Path
from typing import Union

from ._languages import resolve_language
from .config import logger
from .exception import InternalError, PathConflictError
from .project_spec import PROJECT_CONFIG_FILENAME, SAMPLE_PACKAGE_NAME, Function, ProjectSpec, new_project_spec

SAMPLE_FUNCTION_NAME = "hello"

GITIGNORES = """.nimbella
.deployed
__deployer__.zip
__pycache__
node_modules
package-lock.json
.DS_Store
"""

TYPESCRIPT_GITIGNORES = """lib/
*.tsbuildinfo
"""

TYPESCRIPT_PACKAGE_JSON = """{
  "name": "hello",
  "version": "1.0.0",
  "description": "A sample function written in TypeScript",
  "main": "lib/hello.js",
  "scripts": {
    "build": "tsc -b"
  },
  "devDependencies": {
    "typescript": "^4.6.4"
  }
}
"""

TSCONFIG_JSON = """{
  "compilerOptions": {
    "target": "es2019",
    "module": "commonjs",
    "rootDir": "src",
    "outDir": "lib",
    "esModuleInterop": true,
    "strict": true,
    "composite": true
  }
}
"""

TYPESCRIPT_INCLUDE = "lib\n"

PathLike = Union[str, Path]


class FileSystem:
    """The two filesystem primitives scaffolding needs. Swap in another implementation to test."""

    def write_file(self, path: PathLike, contents: bytes) -> None:
        raise NotImplementedError

    def mkdir(self, path: PathLike, parents: bool) -> None:
        raise NotImplementedError


class LocalFileSystem(FileSystem):
    def write_file(self, path: PathLike, contents: bytes) -> None:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o664)
        with os.fdopen(fd, "wb") as f:
            f.write(contents)

    def mkdir(self, path: PathLike, parents: bool) -> None:
        if parents:
            os.makedirs(path, mode=0o775, exist_ok=True)
        else:
            os.mkdir(path, mode=0o775)


def prepare_project_area(project: PathLike, overwrite: bool) -> None:
    """Make sure nothing is in the way of creating a project at `project`.

    A missing path or an empty directory is fine. Anything else is removed if `overwrite` is set,
    and is an error otherwise.
    """
    path = Path(project)
    if not path.exists() and not path.is_symlink():
        return
    if path.is_dir() and not path.is_symlink() and not any(path.iterdir()):
        return
    if not overwrite:
        raise PathConflictError(f"{project} already exists; use '--overwrite' to replace")
    logger.debug(f"Removing existing project area {project}")
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def file_extension_for_runtime(runtime: str) -> str:
    # TypeScript is handled by the caller. For other runtimes, e.g. 'go' and 'php', the runtime is the extension.
    if runtime == "nodejs":
        return "js"
    if runtime == "python":
        return "py"
    return runtime


def generate_sample(
    kind: str,
    spec: ProjectSpec,
    sample: str,
    sample_package: Path,
    typescript: bool,
    fs: FileSystem,
) -> Path:
    """Write the sample function into the sample package and register it in `spec`.

    Returns the directory of the generated function.
    """
    runtime = kind.split(":")[0]
    suffix = "ts" if typescript else file_extension_for_runtime(runtime)
    function_dir = sample_package / SAMPLE_FUNCTION_NAME
    fs.mkdir(function_dir, parents=True)
    if typescript:
        src_dir = function_dir / "src"
        fs.mkdir(src_dir, parents=False)
        sample_file = src_dir / f"{SAMPLE_FUNCTION_NAME}.{suffix}"
    else:
        sample_file = function_dir / f"{SAMPLE_FUNCTION_NAME}.{suffix}"
    fs.write_file(sample_file, sample.encode())

    package = spec.find_package(SAMPLE_PACKAGE_NAME)
    if package is None:
        raise InternalError("could not find sample package in config (internal error)")
    package.functions = [Function(name=SAMPLE_FUNCTION_NAME, runtime=kind, web=True, web_secure=False)]
    return function_dir


def create_project(
    project: PathLike,
    language: str,
    overwrite: bool,
    service,
    fs: FileSystem = LocalFileSystem(),
) -> Path:
    """Initialize a functions project directory with a sample function in `language`."""
    resolved = resolve_language(language, service)

    project_dir = Path(project)
    sample_package = project_dir / "packages" / SAMPLE_PACKAGE_NAME

    prepare_project_area(project, overwrite)
    fs.mkdir(sample_package, parents=True)

    spec = new_project_spec()
    function_dir = generate_sample(resolved.kind, spec, resolved.sample, sample_package, resolved.typescript, fs)
    fs.write_file(project_dir / PROJECT_CONFIG_FILENAME, spec.to_yaml().encode())

    ignores = GITIGNORES
    if resolved.typescript:
        ignores += TYPESCRIPT_GITIGNORES
    fs.write_file(project_dir / ".gitignore", ignores.encode())

    if resolved.typescript:
        fs.write_file(function_dir / "package.json", TYPESCRIPT_PACKAGE_JSON.encode())
        fs.write_file(function_dir / "tsconfig.json", TSCONFIG_JSON.encode())
        fs.write_file(function_dir / ".include", TYPESCRIPT_INCLUDE.encode())

    logger.debug(f"Created {resolved.kind} project at {project}")
    return project_dir
