"""Classification and permission metadata for staged filesystem entries."""

import enum
import os
import stat

from attrs import define


class EntryKind(enum.Enum):
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


@define(frozen=True, slots=True)
class EntryMetadata:
    kind: EntryKind
    perm: str | None
    size: int


def format_permissions(mode: int) -> str:
    """Renders `st_mode` in octal, keeping the low-order four digits."""
    return f"{mode:o}"[-4:]


def classify(mode: int) -> EntryKind:
    if stat.S_ISLNK(mode):
        return EntryKind.SYMLINK
    if stat.S_ISREG(mode):
        return EntryKind.FILE
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    return EntryKind.OTHER


def extract_metadata(path: str | os.PathLike[str]) -> EntryMetadata:
    """Inspects a single entry without following symbolic links."""
    st = os.lstat(path)
    kind = classify(st.st_mode)
    if kind in (EntryKind.FILE, EntryKind.DIRECTORY):
        return EntryMetadata(kind=kind, perm=format_permissions(st.st_mode), size=st.st_size)
    return EntryMetadata(kind=kind, perm=None, size=0)
