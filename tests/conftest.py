"""Pytest fixtures for the entire pkgng-builder test suite."""

from pathlib import Path

import pytest

from pkgng.builder.models import HostPlatform, PackagerOptions, ProjectDescriptor
from pkgng.builder.packaging.orchestrator import PackageAssembler


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project" / "root"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def install_dir(tmp_path: Path) -> Path:
    """A small pre-built installation tree."""
    install = tmp_path / "opt" / "project"
    (install / "bin").mkdir(parents=True)
    (install / "bin" / "project").write_text("#!/bin/sh\necho project\n")
    (install / "embedded" / "lib").mkdir(parents=True)
    (install / "embedded" / "lib" / "libproject.so").write_bytes(b"\x7fELF" + b"\0" * 60)
    return install


@pytest.fixture
def project(project_root: Path, install_dir: Path) -> ProjectDescriptor:
    return ProjectDescriptor(
        name="project",
        homepage="https://example.com",
        install_dir=str(install_dir),
        build_version="1.2.3",
        build_iteration=2,
        maintainer="Chef Software",
        package_scripts_path=str(project_root / "package-scripts" / "project"),
    )


@pytest.fixture
def freebsd_host() -> HostPlatform:
    return HostPlatform(machine="amd64", platform_version="10.0")


@pytest.fixture
def staging_dir(tmp_path: Path) -> Path:
    staging = tmp_path / "staging" / "dir"
    staging.mkdir(parents=True)
    return staging


@pytest.fixture
def package_dir(tmp_path: Path) -> Path:
    return tmp_path / "package" / "dir"


@pytest.fixture
def assembler(
    project: ProjectDescriptor,
    freebsd_host: HostPlatform,
    staging_dir: Path,
    package_dir: Path,
) -> PackageAssembler:
    return PackageAssembler(
        project=project,
        package_dir=package_dir,
        options=PackagerOptions(),
        host=freebsd_host,
        staging_dir=staging_dir,
    )
