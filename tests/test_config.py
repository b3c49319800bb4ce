"""Tests for reading the [tool.pkgng] configuration."""

from pathlib import Path

import pytest

from pkgng.builder.config import (
    load_pkgng_config,
    options_from_config,
    package_dir_from_config,
    project_from_config,
)
from pkgng.builder.exceptions import BuildError, InvalidValueError


def test_missing_section(tmp_path: Path) -> None:
    path = tmp_path / "pyproject.toml"
    path.write_text("[project]\nname = 'test'\n")
    with pytest.raises(BuildError, match=r"A \[tool.pkgng\] section was not found"):
        load_pkgng_config(path)


def test_invalid_toml(tmp_path: Path) -> None:
    path = tmp_path / "pyproject.toml"
    path.write_text("[tool.pkgng\n")
    with pytest.raises(BuildError, match="Unable to parse"):
        load_pkgng_config(path)


def test_missing_required_keys(tmp_path: Path) -> None:
    with pytest.raises(BuildError, match="build_version, install_dir"):
        project_from_config({"name": "project"}, tmp_path)


def test_project_from_config_defaults(tmp_path: Path) -> None:
    project = project_from_config(
        {"name": "project", "build_version": "1.2.3", "install_dir": "/opt/project"},
        tmp_path,
    )
    assert project.build_iteration == 1
    assert project.maintainer == "Unknown"
    assert project.package_scripts_path == str(tmp_path / "package-scripts/project")
    assert package_dir_from_config({}, tmp_path) == tmp_path / "pkg"


def test_project_from_config_values(tmp_path: Path) -> None:
    conf = {
        "name": "project",
        "package_name": "project-server",
        "build_version": 2.5,
        "build_iteration": 3,
        "install_dir": "/opt/project",
        "maintainer": "Ops",
        "homepage": "https://example.com",
        "description": "Project server",
        "extra_package_files": ["/etc/project.conf"],
        "package_scripts_path": "/srv/scripts",
        "exclusions": ["**/.git"],
        "package_dir": "/var/pkg",
    }

    project = project_from_config(conf, tmp_path)

    assert project.package_name == "project-server"
    assert project.build_version == "2.5"
    assert project.build_iteration == 3
    assert project.description == "Project server"
    assert project.extra_package_files == ["/etc/project.conf"]
    assert project.package_scripts_path == "/srv/scripts"
    assert project.exclusions == ["**/.git"]
    assert package_dir_from_config(conf, tmp_path) == Path("/var/pkg")


def test_options_from_config() -> None:
    options = options_from_config(
        {"options": {"licenses": ["BSD-2-Clause"], "origin": "sysutils/project"}}
    )
    assert options.licenses == ["BSD-2-Clause"]
    assert options.origin == "sysutils/project"
    assert options.licenselogic is None


def test_options_from_config_rejects_single_license_string() -> None:
    with pytest.raises(InvalidValueError, match="'licenses'"):
        options_from_config({"options": {"licenses": "BSD-2-Clause"}})
