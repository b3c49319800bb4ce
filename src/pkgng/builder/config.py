"""Loading of the `[tool.pkgng]` table from a pyproject.toml."""

from pathlib import Path
import tomllib
from typing import Any

from .exceptions import BuildError
from .models import PackagerOptions, ProjectDescriptor

REQUIRED_KEYS = ("name", "build_version", "install_dir")
DEFAULT_PACKAGE_DIR = "pkg"


def load_pkgng_config(pyproject_toml_path: Path) -> dict[str, Any]:
    try:
        with pyproject_toml_path.open("rb") as f:
            pyproject_data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise BuildError(f"Unable to parse {pyproject_toml_path}: {e}") from e

    pkgng_conf = pyproject_data.get("tool", {}).get("pkgng", {})
    if not pkgng_conf:
        raise BuildError("A [tool.pkgng] section was not found in pyproject.toml.")
    return pkgng_conf


def project_from_config(
    pkgng_conf: dict[str, Any], manifest_dir: Path
) -> ProjectDescriptor:
    missing = [key for key in REQUIRED_KEYS if not pkgng_conf.get(key)]
    if missing:
        raise BuildError(
            f"Missing required configuration in [tool.pkgng]: {', '.join(missing)}"
        )

    name = pkgng_conf["name"]
    scripts_path = pkgng_conf.get("package_scripts_path", f"package-scripts/{name}")

    optional: dict[str, Any] = {}
    for key in ("maintainer", "homepage", "description", "package_name"):
        if key in pkgng_conf:
            optional[key] = pkgng_conf[key]

    return ProjectDescriptor(
        name=name,
        build_version=str(pkgng_conf["build_version"]),
        build_iteration=pkgng_conf.get("build_iteration", 1),
        install_dir=pkgng_conf["install_dir"],
        extra_package_files=list(pkgng_conf.get("extra_package_files", [])),
        package_scripts_path=str(manifest_dir / scripts_path),
        exclusions=list(pkgng_conf.get("exclusions", [])),
        **optional,
    )


def options_from_config(pkgng_conf: dict[str, Any]) -> PackagerOptions:
    options_conf = pkgng_conf.get("options", {})
    return PackagerOptions(
        base_package_name=options_conf.get("base_package_name"),
        licenses=options_conf.get("licenses"),
        licenselogic=options_conf.get("licenselogic"),
        origin=options_conf.get("origin"),
        comment=options_conf.get("comment"),
    )


def package_dir_from_config(pkgng_conf: dict[str, Any], manifest_dir: Path) -> Path:
    return manifest_dir / pkgng_conf.get("package_dir", DEFAULT_PACKAGE_DIR)
