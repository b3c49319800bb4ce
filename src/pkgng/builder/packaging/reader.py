"""Python-based reader for pkgng manifest files."""

import json
from pathlib import Path
from typing import Any

from ..exceptions import ManifestReadError
from ..models import COMPACT_MANIFEST_FILENAME, MANIFEST_FILENAME


class ManifestReader:
    """Reads a `+MANIFEST` from a file or a staging directory."""

    def __init__(self, path: Path) -> None:
        self.manifest_path = self._resolve(path)
        self.manifest = self._read_manifest()

    @staticmethod
    def _resolve(path: Path) -> Path:
        if path.is_dir():
            for filename in (MANIFEST_FILENAME, COMPACT_MANIFEST_FILENAME):
                candidate = path / filename
                if candidate.is_file():
                    return candidate
            raise FileNotFoundError(f"No manifest found in: {path}")
        if not path.is_file():
            raise FileNotFoundError(f"Manifest not found at: {path}")
        return path

    def _read_manifest(self) -> dict[str, Any]:
        try:
            data = json.loads(self.manifest_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ManifestReadError(
                f"Manifest {self.manifest_path} is not valid JSON: {e}"
            ) from e
        if not isinstance(data, dict):
            raise ManifestReadError(
                f"Manifest {self.manifest_path} does not contain a JSON object."
            )
        return data

    def get_info(self) -> str:
        """Returns a human-readable string of the package information."""
        m = self.manifest
        lines = [
            "pkgng Package Manifest:",
            f"  Name: {m.get('name')}",
            f"  Version: {m.get('version')}",
            f"  Architecture: {m.get('arch')}",
            f"  Origin: {m.get('origin')}",
            f"  Licenses: {', '.join(m.get('licenses', []))} ({m.get('licenselogic')})",
        ]
        if "flatsize" in m:
            lines += [
                f"  Flat Size: {m['flatsize']} bytes",
                f"  Files: {len(m.get('files', {}))}",
                f"  Directories: {len(m.get('directories', {}))}",
                f"  Scripts: {', '.join(sorted(m.get('scripts', {}))) or 'none'}",
            ]
        return "\n".join(lines)
