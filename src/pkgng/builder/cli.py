"""The `pkgngbuild` command-line interface."""

import importlib.metadata
from pathlib import Path

import click

from .config import (
    load_pkgng_config,
    options_from_config,
    package_dir_from_config,
    project_from_config,
)
from .exceptions import BuildError
from .packaging.orchestrator import PackageAssembler
from .packaging.reader import ManifestReader

try:
    __version__ = importlib.metadata.version("pkgng-builder")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.0.0-dev"


def _assembler_from_manifest(
    pyproject_toml_path: str,
    package_dir: str | None = None,
    pkg_executable: str | None = None,
    staging_dir: str | None = None,
) -> PackageAssembler:
    manifest_path = Path(pyproject_toml_path)
    manifest_dir = manifest_path.parent
    pkgng_conf = load_pkgng_config(manifest_path)

    return PackageAssembler(
        project=project_from_config(pkgng_conf, manifest_dir),
        options=options_from_config(pkgng_conf),
        package_dir=Path(package_dir or package_dir_from_config(pkgng_conf, manifest_dir)),
        pkg_executable=pkg_executable or pkgng_conf.get("pkg_executable"),
        staging_dir=staging_dir,
    )


manifest_option = click.option(
    "--manifest",
    "pyproject_toml_path",
    default="pyproject.toml",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    help="Path to the pyproject.toml manifest file.",
)


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(
    __version__,
    "-V",
    "--version",
    prog_name="pkgngbuild",
    message="%(prog)s version %(version)s",
)
def cli() -> None:
    """FreeBSD pkgng Package Build Tool."""
    pass


@cli.command("package")
@click.option(
    "--out",
    type=click.Path(file_okay=False, resolve_path=True),
    help="Override the package output directory from pyproject.toml.",
)
@click.option(
    "--pkg",
    "pkg_executable",
    help="Override the path to the `pkg` executable.",
)
@manifest_option
def package_command(
    out: str | None, pkg_executable: str | None, pyproject_toml_path: str
) -> None:
    """Stages the install tree and builds the pkgng package."""
    click.echo("🚀 Packaging project...")
    try:
        assembler = _assembler_from_manifest(
            pyproject_toml_path, package_dir=out, pkg_executable=pkg_executable
        )
        package_path = assembler.build()
        click.secho(f"✅ Package built successfully: {package_path}", fg="green")
    except (BuildError, click.UsageError) as e:
        click.secho(f"❌ Packaging Failed:\n{e}", fg="red", err=True)
        raise click.Abort() from e


@cli.command("manifest")
@click.argument(
    "staging_dir",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
)
@manifest_option
def manifest_command(staging_dir: str, pyproject_toml_path: str) -> None:
    """Writes +COMPACT_MANIFEST and +MANIFEST for an already staged tree."""
    click.echo(f"📝 Generating manifests in '{staging_dir}'...")
    try:
        assembler = _assembler_from_manifest(
            pyproject_toml_path, staging_dir=staging_dir
        )
        assembler.write_manifests()
        click.secho("✅ Manifests written.", fg="green")
        click.echo(ManifestReader(Path(staging_dir)).get_info())
    except BuildError as e:
        click.secho(f"❌ Manifest generation failed:\n{e}", fg="red", err=True)
        raise click.Abort() from e


@cli.command("info")
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
def info_command(path: str) -> None:
    """Shows a summary of a manifest file or staging directory."""
    try:
        reader = ManifestReader(Path(path))
    except (BuildError, FileNotFoundError) as e:
        click.secho(f"❌ Unable to read manifest: {e}", fg="red", err=True)
        raise click.Abort() from e
    click.echo(reader.get_info())


main = cli

if __name__ == "__main__":
    cli()
