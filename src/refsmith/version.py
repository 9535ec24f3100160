"""Package version helpers."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version


def get_version() -> str:
    """Return the installed refsmith version."""
    try:
        return _pkg_version("refsmith")
    except PackageNotFoundError:
        return "0.0.0"


__all__ = ["get_version"]
