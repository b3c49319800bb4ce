"""Copies the project's install tree into a package staging directory."""

from collections.abc import Callable, Iterable
import fnmatch
from pathlib import Path
import shutil

from pyvider.telemetry import logger

from ..exceptions import StagingError


def create_ignore_func(
    root: Path, patterns: list[str]
) -> Callable[[str, list[str]], Iterable[str]]:
    """Creates a function suitable for shutil.copytree's ignore argument."""

    def ignore(dir_path_str: str, names: list[str]) -> Iterable[str]:
        dir_path = Path(dir_path_str)
        ignored_names = set()
        for name in names:
            rel_path_str = str((dir_path / name).relative_to(root))
            for pattern in patterns:
                if fnmatch.fnmatch(rel_path_str, pattern) or fnmatch.fnmatch(
                    name, pattern
                ):
                    logger.debug("Excluding from staging", path=rel_path_str)
                    ignored_names.add(name)
                    break
        return ignored_names

    return ignore


def staged_path(staging_dir: Path, absolute_path: str | Path) -> Path:
    """Maps an absolute install path to its location inside the staging dir.

    /opt/hamlet => <staging_dir>/opt/hamlet
    """
    return staging_dir / Path(absolute_path).relative_to("/")


def stage_install_tree(
    install_dir: str | Path,
    staging_dir: Path,
    extra_files: Iterable[str] = (),
    exclusions: list[str] | None = None,
) -> None:
    install_path = Path(install_dir)
    if not install_path.is_dir():
        raise StagingError(f"Install directory not found: {install_path}")

    destination = staged_path(staging_dir, install_path.absolute())
    logger.info(f"Staging {install_path} into {destination}")
    try:
        shutil.copytree(
            install_path,
            destination,
            symlinks=True,
            ignore=create_ignore_func(install_path, exclusions or []),
            dirs_exist_ok=True,
        )

        # Extra files keep their absolute location inside the staging dir:
        # /path/to/foo.txt => <staging_dir>/path/to/foo.txt
        for extra in extra_files:
            extra_path = Path(extra).absolute()
            parent = staged_path(staging_dir, extra_path.parent)
            parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(extra_path, parent / extra_path.name, follow_symlinks=False)
    except OSError as e:
        raise StagingError(f"Failed to stage install tree: {e}") from e
