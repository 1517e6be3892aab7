"""
parcel_packer package

Anchor-point based 3D placement of parcels inside a single container, plus
the catalog/session layer, a FastAPI wrapper and a matplotlib plotter built
on top of it.

This initializer exposes a small, stable surface:
- __version__: package version string
- get_version(): helper to retrieve the version

Keep this file minimal to avoid import-time side-effects (the API and the
plotter pull in FastAPI and matplotlib).
"""

from typing import Final

__all__ = ["__version__", "get_version"]

__version__: Final[str] = "0.1.0"


def get_version() -> str:
    """
    Return the package version.
    """
    return __version__
