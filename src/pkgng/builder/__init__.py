# pkgng-builder/src/pkgng/builder/__init__.py
"""
This package contains the core logic for assembling FreeBSD pkgng packages
from a pre-built installation tree.
"""

from .models import (
    PACKAGE_GROUP,
    PACKAGE_OWNER,
    HostPlatform,
    PackagerOptions,
    ProjectDescriptor,
)
from .naming import sanitize_name, sanitize_version
from .packaging.orchestrator import PackageAssembler

__all__ = [
    "PACKAGE_GROUP",
    "PACKAGE_OWNER",
    "HostPlatform",
    "PackageAssembler",
    "PackagerOptions",
    "ProjectDescriptor",
    "sanitize_name",
    "sanitize_version",
]
