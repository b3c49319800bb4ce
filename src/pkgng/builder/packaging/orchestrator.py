"""Core logic for building pkgng packages by orchestrating the `pkg` CLI."""

import json
from pathlib import Path
import shutil
import subprocess
import tempfile
from typing import Any

from pyvider.telemetry import logger

from ..exceptions import BuildError
from ..models import (
    COMPACT_MANIFEST_FILENAME,
    MANIFEST_FILENAME,
    PACKAGE_EXTENSION,
    HostPlatform,
    PackageIdentity,
    PackagerOptions,
    ProjectDescriptor,
)
from ..naming import safe_architecture, safe_os_version, sanitize_name, sanitize_version
from .manifest import generate_compact_manifest, generate_manifest
from .scripts import inject_scripts
from .staging import stage_install_tree


class PackageAssembler:
    DEFAULT_PKG_EXECUTABLE = "/usr/sbin/pkg"

    def __init__(
        self,
        project: ProjectDescriptor,
        package_dir: Path | str,
        options: PackagerOptions | None = None,
        host: HostPlatform | None = None,
        pkg_executable: str | None = None,
        staging_dir: Path | str | None = None,
    ) -> None:
        self.project = project
        self.package_dir = Path(package_dir)
        self.options = options or PackagerOptions()
        self.host = host or HostPlatform.detect()
        self.pkg_executable = pkg_executable or self.DEFAULT_PKG_EXECUTABLE
        self.staging_dir = Path(staging_dir) if staging_dir is not None else None

    # Identity values are recomputed on every access so that each lookup
    # reports its own sanitization warning.

    @property
    def base_package_name(self) -> str:
        return self.options.base_package_name or self.project.package_name

    @property
    def safe_base_package_name(self) -> str:
        converted, changed = sanitize_name(self.base_package_name)
        if changed:
            logger.warning(
                "The `name' component of FreeBSD package names can only include "
                "lower case alphabetical characters (a-z), numbers (0-9), dots (.), "
                f"plus signs (+), and dashes (-). Converting `{self.base_package_name}' "
                f"to `{converted}'."
            )
        return converted

    @property
    def safe_build_iteration(self) -> str:
        return str(self.project.build_iteration)

    @property
    def safe_version(self) -> str:
        version = f"{self.project.build_version}_{self.safe_build_iteration}"
        converted, changed = sanitize_version(version)
        if changed:
            logger.warning(
                "The `version' component of FreeBSD package names can only include "
                "alphabetical characters (a-z, A-Z), numbers (0-9), dots (.), "
                f"dashes (-), underscores (_) and commas (,). Converting `{version}' "
                f"to `{converted}'."
            )
        return converted

    @property
    def safe_architecture(self) -> str:
        return safe_architecture(self.host.machine)

    @property
    def safe_osversion(self) -> str:
        return safe_os_version(self.host.platform_version)

    @property
    def identity(self) -> PackageIdentity:
        return PackageIdentity(
            base_name=self.safe_base_package_name,
            version=self.safe_version,
            iteration=self.safe_build_iteration,
            architecture=self.safe_architecture,
            os_version=self.safe_osversion,
        )

    @property
    def package_name(self) -> str:
        """The canonical filename of the finished package."""
        return (
            f"{self.safe_base_package_name}-{self.safe_version}-"
            f"{self.safe_osversion}-{self.host.machine}.{PACKAGE_EXTENSION}"
        )

    @property
    def pkg_output_name(self) -> str:
        """The filename `pkg create` writes for this package."""
        return f"{self.safe_base_package_name}-{self.safe_version}.{PACKAGE_EXTENSION}"

    def _require_staging_dir(self) -> Path:
        if self.staging_dir is None:
            raise BuildError("No staging directory has been set for this build.")
        return self.staging_dir

    def setup(self) -> None:
        stage_install_tree(
            self.project.install_dir,
            self._require_staging_dir(),
            extra_files=self.project.extra_package_files,
            exclusions=self.project.exclusions,
        )

    def generate_compact_manifest(self) -> dict[str, Any]:
        return generate_compact_manifest(self.project, self.options, self.identity)

    def generate_manifest(self, compact_manifest: dict[str, Any]) -> dict[str, Any]:
        return generate_manifest(compact_manifest, self._require_staging_dir())

    def inject_scripts(self, manifest: dict[str, Any]) -> dict[str, Any]:
        return inject_scripts(manifest, self.project.package_scripts_path)

    def write_manifest(self, manifest: dict[str, Any], manifest_file: str) -> Path:
        path = self._require_staging_dir() / manifest_file
        path.write_text(json.dumps(manifest), encoding="utf-8")
        return path

    def write_manifests(self) -> None:
        """Generates both manifests and writes them into the staging dir."""
        compact_manifest = self.generate_compact_manifest()
        manifest = self.inject_scripts(self.generate_manifest(compact_manifest))
        self.write_manifest(compact_manifest, COMPACT_MANIFEST_FILENAME)
        self.write_manifest(manifest, MANIFEST_FILENAME)

    def _run_subprocess(self, command: list[str], cwd: Path | str | None = None) -> str:
        logger.info(f"Running command: {' '.join(command)}")
        try:
            result = subprocess.run(
                command, capture_output=True, text=True, cwd=cwd, check=False
            )
        except OSError as e:
            raise BuildError(f"Unable to run '{command[0]}': {e}") from e
        if result.returncode != 0:
            error_message = (
                f"Command failed with exit code {result.returncode}.\n"
                f"  Command: {' '.join(command)}\n"
                f"  Stdout:\n{result.stdout.strip()}\n"
                f"  Stderr:\n{result.stderr.strip()}"
            )
            raise BuildError(error_message)
        if result.stderr:
            logger.debug("Command stderr", output=result.stderr.strip())
        return result.stdout.strip()

    def create_package(self) -> Path:
        """Runs `pkg create`, then copies its output to `package_name`."""
        logger.info("Creating package")
        staging_dir = self._require_staging_dir()
        self.package_dir.mkdir(parents=True, exist_ok=True)

        self._run_subprocess(
            [
                self.pkg_executable, "create",
                "-r", str(staging_dir),
                "-o", str(self.package_dir),
                "-m", str(staging_dir),
            ],
            cwd=self.package_dir,
        )

        created = self.package_dir / self.pkg_output_name
        if not created.is_file():
            raise BuildError(f"Expected package was not created: {created}")

        final_path = self.package_dir / self.package_name
        shutil.copyfile(created, final_path)
        logger.info(f"Package written to {final_path}")
        return final_path

    def build(self) -> Path:
        logger.info("Assembler starting pkgng build process...")
        if self.staging_dir is not None:
            return self._build_in_staging_dir()

        with tempfile.TemporaryDirectory(prefix="pkgng_build_") as temp_dir_str:
            self.staging_dir = Path(temp_dir_str)
            try:
                return self._build_in_staging_dir()
            finally:
                self.staging_dir = None

    def _build_in_staging_dir(self) -> Path:
        self._require_staging_dir().mkdir(parents=True, exist_ok=True)
        self.setup()
        self.write_manifests()
        return self.create_package()
