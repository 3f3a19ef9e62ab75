"""Installed distribution version."""

from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION = "graphql-response"


def get_version() -> str:
    """Version of the installed ``graphql-response`` distribution, ``0.0.0`` if not installed."""
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        return "0.0.0"
