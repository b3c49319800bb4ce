"""
The `packaging` sub-package contains modules related to the construction of
FreeBSD pkgng packages.

This includes:
- Staging the install tree and generating the compact and full manifests.
- Orchestrating the build process by invoking the external `pkg create` tool.
- Reading generated manifests back for inspection.
"""
