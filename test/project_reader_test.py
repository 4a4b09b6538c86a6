# Copyright Stratus Labs 2026
import os
import pytest
from pathlib import Path

from stratus._project_reader import Includer, infer_runtime, read_project
from stratus.exception import InvalidError
from stratus.serverless import ServerlessProject

PROJECT_YML = """
packages:
  - name: admin
    environment:
      LEVEL: debug
    functions:
      - name: cleanup
        runtime: python:3.11
        web: false
      - name: ghost
        runtime: nodejs:18
"""

project_files = {
    "project.yml": PROJECT_YML,
    "packages": {
        "admin": {
            "cleanup.py": "def main(args): return {}",
            "report": {"package.json": "{}", "index.js": "exports.main = () => ({})"},
        },
        "sample": {
            "hello.js": "exports.main = () => ({})",
            ".DS_Store": "",
            "greet": {"src": {"greet.ts": "export function main() {}"}},
        },
        "README.md": "stray",
    },
    "web": {"index.html": "<html></html>", "css": {"site.css": "body {}"}},
}


def _read(root_dir, **options):
    return read_project(ServerlessProject(project_path=root_dir), [root_dir], **options).entity


def _functions(entity, package_name):
    [package] = [p for p in entity["packages"] if p["name"] == package_name]
    return {f["name"]: f for f in package["functions"]}


def test_read_project(mock_dir):
    with mock_dir(project_files) as root_dir:
        entity = _read(root_dir)

    assert entity["projectPath"] == str(Path(root_dir).resolve())
    assert entity["config"] is True
    assert [p["name"] for p in entity["packages"]] == ["admin", "sample"]
    assert entity["strays"] == ["README.md"]
    assert entity["web"] == [os.path.join("css", "site.css"), "index.html"]

    admin = _functions(entity, "admin")
    assert list(admin) == ["cleanup", "ghost", "report"]
    assert admin["cleanup"]["runtime"] == "python:3.11"
    assert admin["cleanup"]["web"] is False
    assert admin["cleanup"]["source"] == os.path.join("packages", "admin", "cleanup.py")
    # Declared in project.yml but not on disk
    assert admin["ghost"]["source"] is None
    assert admin["report"]["runtime"] == "nodejs:default"

    sample = _functions(entity, "sample")
    assert sample["hello"]["runtime"] == "nodejs:default"
    assert sample["hello"]["web"] is True
    assert sample["greet"]["runtime"] == "nodejs:default"
    assert ".DS_Store" not in sample

    [admin_package] = [p for p in entity["packages"] if p["name"] == "admin"]
    assert admin_package["environment"] == {"LEVEL": "debug"}


def test_read_project_without_config(mock_dir):
    with mock_dir({"packages": {"tools": {"lint.go": "package main"}}}) as root_dir:
        entity = _read(root_dir)
    assert entity["config"] is False
    assert _functions(entity, "tools")["lint"]["runtime"] == "go:default"
    assert entity["web"] == []


def test_read_project_include_and_exclude(mock_dir):
    with mock_dir(project_files) as root_dir:
        entity = _read(root_dir, include="admin/cleanup,sample", exclude="sample/greet,web")
    assert [p["name"] for p in entity["packages"]] == ["admin", "sample"]
    assert list(_functions(entity, "admin")) == ["cleanup"]
    assert list(_functions(entity, "sample")) == ["hello"]
    assert entity["web"] == []


def test_read_project_exclude_package(mock_dir):
    with mock_dir(project_files) as root_dir:
        entity = _read(root_dir, exclude="admin/,web")
    assert [p["name"] for p in entity["packages"]] == ["sample"]


def test_read_project_env_file(mock_dir):
    with mock_dir({"packages": {}, ".env": "# comment\nAPI_KEY=abc\nREGION=nyc1\n"}) as root_dir:
        entity = _read(root_dir, env=os.path.join(root_dir, ".env"))
    assert entity["environment"] == {"API_KEY": "abc", "REGION": "nyc1"}


def test_read_project_missing_env_file(mock_dir):
    with mock_dir({"packages": {}}) as root_dir:
        with pytest.raises(InvalidError, match="environment file"):
            _read(root_dir, env=os.path.join(root_dir, "missing.env"))


def test_read_project_not_a_directory(tmp_path):
    with pytest.raises(InvalidError, match="is not a directory"):
        _read(str(tmp_path / "missing"))


def test_includer_defaults():
    includer = Includer()
    assert includer.is_web_included()
    assert includer.is_package_included("anything")
    assert includer.is_function_included("anything", "fn")


def test_includer_web_package_vs_web_folder():
    # `web/` names a package called web, not the web folder
    includer = Includer(include="web/")
    assert includer.is_package_included("web")
    assert not includer.is_web_included()

    includer = Includer(include="web")
    assert includer.is_web_included()
    assert not includer.is_package_included("web")


def test_includer_function_selection():
    includer = Includer(include="admin/cleanup")
    assert includer.is_package_included("admin")
    assert includer.is_function_included("admin", "cleanup")
    assert not includer.is_function_included("admin", "report")
    assert not includer.is_package_included("sample")


def test_infer_runtime(tmp_path):
    (tmp_path / "fn.php").write_text("<?php")
    assert infer_runtime(tmp_path / "fn.php") == "php:default"
    (tmp_path / "notes.txt").write_text("")
    assert infer_runtime(tmp_path / "notes.txt") == ""

    go_fn = tmp_path / "go_fn"
    go_fn.mkdir()
    (go_fn / "go.mod").write_text("module hello")
    assert infer_runtime(go_fn) == "go:default"

    empty_fn = tmp_path / "empty_fn"
    empty_fn.mkdir()
    assert infer_runtime(empty_fn) == ""


def test_read_project_with_malformed_config(mock_dir):
    with mock_dir({"project.yml": "packages:\n  - foo\n", "packages": {}}) as root_dir:
        with pytest.raises(InvalidError, match="must be a mapping"):
            _read(root_dir)
