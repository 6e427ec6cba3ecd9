"""Registrar - course enrollment rule checking."""

__version__ = "0.1.0"


def get_version() -> str:
    """Return the installed package version."""
    return __version__
