import platform
from typing import Any, Self

from attrs import Attribute, define, field

from .exceptions import InvalidValueError

# Packaging policy: every entry in a pkgng manifest is owned by root:wheel,
# whatever the owner on the build machine was.
PACKAGE_OWNER: str = "root"
PACKAGE_GROUP: str = "wheel"

# Value recorded in the `files` mapping for symbolic links.
SYMLINK_SENTINEL: str = "-"

MANIFEST_PREFIX: str = "/"
COMPACT_MANIFEST_FILENAME: str = "+COMPACT_MANIFEST"
MANIFEST_FILENAME: str = "+MANIFEST"
PACKAGE_EXTENSION: str = "txz"

LICENSE_LOGICS: tuple[str, ...] = ("single", "dual", "multi", "or", "and")

DEFAULT_LICENSES: tuple[str, ...] = ("unknown",)
DEFAULT_LICENSE_LOGIC: str = "single"


def _optional_string(instance: Any, attribute: Attribute, value: Any) -> None:
    if value is not None and not isinstance(value, str):
        raise InvalidValueError(attribute.name, "be a String")


def _optional_string_list(instance: Any, attribute: Attribute, value: Any) -> None:
    if value is None:
        return
    if not isinstance(value, (list, tuple)) or not all(
        isinstance(item, str) for item in value
    ):
        raise InvalidValueError(attribute.name, "be an Array of Strings")


def _optional_license_logic(instance: Any, attribute: Attribute, value: Any) -> None:
    _optional_string(instance, attribute, value)
    if value is not None and value not in LICENSE_LOGICS:
        raise InvalidValueError(
            attribute.name, f"be one of {', '.join(LICENSE_LOGICS)}"
        )


@define(frozen=True, slots=True)
class ProjectDescriptor:
    """The read-only description of the project being packaged."""

    name: str
    build_version: str
    build_iteration: int | str
    install_dir: str
    maintainer: str = field(default="Unknown")
    homepage: str = field(default="")
    package_name: str = field()
    description: str = field()
    extra_package_files: list[str] = field(factory=list)
    package_scripts_path: str | None = field(default=None)
    exclusions: list[str] = field(factory=list)

    @package_name.default
    def _default_package_name(self) -> str:
        return self.name

    @description.default
    def _default_description(self) -> str:
        return f"The full stack of {self.name}"


@define(frozen=True, slots=True)
class PackagerOptions:
    """
    Optional overrides for the package metadata. Unset fields fall back to
    defaults derived from the project when the compact manifest is built.
    """

    base_package_name: str | None = field(default=None, validator=_optional_string)
    licenses: list[str] | None = field(default=None, validator=_optional_string_list)
    licenselogic: str | None = field(default=None, validator=_optional_license_logic)
    origin: str | None = field(default=None, validator=_optional_string)
    comment: str | None = field(default=None, validator=_optional_string)


@define(frozen=True, slots=True)
class HostPlatform:
    machine: str
    platform_version: str

    @classmethod
    def detect(cls) -> Self:
        return cls(machine=platform.machine(), platform_version=platform.release())


@define(frozen=True, slots=True)
class PackageIdentity:
    base_name: str
    version: str
    iteration: str
    architecture: str
    os_version: str


@define(frozen=True, slots=True)
class FileEntry:
    sum: str
    perm: str
    uname: str = field(default=PACKAGE_OWNER)
    gname: str = field(default=PACKAGE_GROUP)

    def to_dict(self) -> dict[str, str]:
        return {
            "sum": self.sum,
            "uname": self.uname,
            "gname": self.gname,
            "perm": self.perm,
        }


@define(frozen=True, slots=True)
class DirectoryEntry:
    perm: str
    uname: str = field(default=PACKAGE_OWNER)
    gname: str = field(default=PACKAGE_GROUP)

    def to_dict(self) -> dict[str, str]:
        return {"uname": self.uname, "gname": self.gname, "perm": self.perm}
