"""
Conversions from free-form project names and versions into the character
sets accepted by FreeBSD package names.

The sanitizers never log or raise; they report whether the value changed so
the caller can warn about the conversion.
"""

import re

_VALID_NAME = re.compile(r"\A[a-z0-9.+\-]*\Z")
_INVALID_NAME_CHAR = re.compile(r"[^a-z0-9.+\-]")

_INVALID_VERSION_CHAR = re.compile(r"[^0-9a-zA-Z._\-,]")
_UNDERSCORE_RUN = re.compile(r"_+")

_LEADING_INTEGER = re.compile(r"\A\s*(\d+)")

ARCHITECTURES: dict[str, str] = {
    "amd64": "x86:64",
    "x86_64": "x86:64",
    "i386": "x86:32",
    "i486": "x86:32",
    "i586": "x86:32",
    "i686": "x86:32",
    "arm64": "aarch64:64",
    "aarch64": "aarch64:64",
}


def sanitize_name(raw: str) -> tuple[str, bool]:
    """
    Returns `raw` folded to lower case with every character outside
    `[a-z0-9.+-]` replaced by its own dash, and whether anything changed.
    """
    if _VALID_NAME.match(raw):
        return raw, False
    return _INVALID_NAME_CHAR.sub("-", raw.lower()), True


def sanitize_version(raw: str) -> tuple[str, bool]:
    """
    Returns `raw` with disallowed characters replaced by underscores and
    underscore runs collapsed, and whether anything changed.
    """
    if not _INVALID_VERSION_CHAR.search(raw):
        return raw, False
    converted = _INVALID_VERSION_CHAR.sub("_", raw)
    return _UNDERSCORE_RUN.sub("_", converted), True


def safe_architecture(machine: str) -> str:
    return ARCHITECTURES.get(machine, machine)


def safe_os_version(platform_version: str) -> str:
    match = _LEADING_INTEGER.match(platform_version)
    major = int(match.group(1)) if match else 0
    return f"FreeBSD{major}"
