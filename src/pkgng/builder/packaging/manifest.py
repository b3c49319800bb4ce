"""Construction of the pkgng compact and full manifests."""

from collections.abc import Iterator
import os
from pathlib import Path
from typing import Any, NoReturn

from pyvider.telemetry import logger

from ..crypto import digest_file
from ..exceptions import BuildError
from ..models import (
    COMPACT_MANIFEST_FILENAME,
    DEFAULT_LICENSE_LOGIC,
    DEFAULT_LICENSES,
    MANIFEST_FILENAME,
    MANIFEST_PREFIX,
    SYMLINK_SENTINEL,
    DirectoryEntry,
    FileEntry,
    PackageIdentity,
    PackagerOptions,
    ProjectDescriptor,
)
from .metadata import EntryKind, extract_metadata

_MANIFEST_FILENAMES = frozenset({COMPACT_MANIFEST_FILENAME, MANIFEST_FILENAME})


def generate_compact_manifest(
    project: ProjectDescriptor,
    options: PackagerOptions,
    identity: PackageIdentity,
) -> dict[str, Any]:
    """Builds the package identity document. Every key is always present."""
    safe_name = identity.base_name
    licenses = options.licenses if options.licenses is not None else DEFAULT_LICENSES
    return {
        "prefix": MANIFEST_PREFIX,
        "name": safe_name,
        "version": identity.version,
        "arch": identity.architecture,
        "origin": options.origin if options.origin is not None else f"misc/{safe_name}",
        "comment": (
            options.comment
            if options.comment is not None
            else f"The {safe_name} package"
        ),
        "maintainer": project.maintainer,
        "www": project.homepage,
        "desc": project.description,
        "licenselogic": (
            options.licenselogic
            if options.licenselogic is not None
            else DEFAULT_LICENSE_LOGIC
        ),
        "licenses": list(licenses),
    }


def _raise_walk_error(error: OSError) -> NoReturn:
    raise BuildError(f"Unable to read staging directory: {error}") from error


def iter_staging_entries(staging_dir: Path) -> Iterator[tuple[str, Path]]:
    """
    Yields `(manifest_key, path)` for every entry below `staging_dir`.
    Symlinked directories are yielded but not descended into.
    """
    for dir_path_str, dir_names, file_names in os.walk(
        staging_dir, onerror=_raise_walk_error
    ):
        dir_names.sort()
        dir_path = Path(dir_path_str)
        at_root = dir_path == staging_dir
        for name in sorted(dir_names + file_names):
            if at_root and name in _MANIFEST_FILENAMES:
                continue
            path = dir_path / name
            yield "/" + path.relative_to(staging_dir).as_posix(), path


def generate_manifest(
    compact_manifest: dict[str, Any], staging_dir: Path | str
) -> dict[str, Any]:
    """
    Walks the staging directory and merges its contents into a copy of the
    compact manifest. Files are checksummed with SHA-256 and symlinks are
    recorded as a sentinel. Ownership always follows the packaging policy.
    """
    staging_dir = Path(staging_dir)
    flatsize = 0
    files: dict[str, Any] = {}
    directories: dict[str, Any] = {}

    for key, path in iter_staging_entries(staging_dir):
        meta = extract_metadata(path)
        match meta.kind:
            case EntryKind.FILE:
                flatsize += meta.size
                files[key] = FileEntry(sum=digest_file(path), perm=meta.perm).to_dict()
            case EntryKind.DIRECTORY:
                flatsize += meta.size
                directories[key] = DirectoryEntry(perm=meta.perm).to_dict()
            case EntryKind.SYMLINK:
                files[key] = SYMLINK_SENTINEL
            case EntryKind.OTHER:
                logger.debug("Skipping unsupported staging entry", path=key)

    manifest = dict(compact_manifest)
    manifest.update({"flatsize": flatsize, "files": files, "directories": directories})
    return manifest
