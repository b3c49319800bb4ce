"""Lifecycle scripts inlined into the full manifest."""

from pathlib import Path
from typing import Any

from pyvider.telemetry import logger

from ..exceptions import BuildError

# Ordered (source, target) pairs. When several sources map to the same target,
# the later pair wins.
SCRIPT_MAP: tuple[tuple[str, str], ...] = (
    # Generic build-framework naming
    ("preinst", "pre-install"),
    ("postinst", "post-install"),
    ("prerm", "pre-deinstall"),
    ("postrm", "post-deinstall"),
    # Native pkgng naming
    ("preinstall", "pre-install"),
    ("postinstall", "post-install"),
    ("install", "install"),
    ("predeinstall", "pre-deinstall"),
    ("deinstall", "deinstall"),
    ("preupgrade", "pre-upgrade"),
    ("postupgrade", "post-upgrade"),
    ("upgrade", "upgrade"),
)


def _read_script(path: Path) -> str:
    try:
        with path.open(encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise BuildError(f"Unable to read lifecycle script '{path}': {e}") from e


def collect_scripts(scripts_dir: Path | str | None) -> dict[str, str]:
    scripts: dict[str, str] = {}
    if scripts_dir is None:
        return scripts

    scripts_dir = Path(scripts_dir)
    for source, target in SCRIPT_MAP:
        path = scripts_dir / source
        if path.is_file():
            logger.debug("Adding lifecycle script", source=source, target=target)
            scripts[target] = _read_script(path)
    return scripts


def inject_scripts(
    manifest: dict[str, Any], scripts_dir: Path | str | None
) -> dict[str, Any]:
    manifest["scripts"] = collect_scripts(scripts_dir)
    return manifest
