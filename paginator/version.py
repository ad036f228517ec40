from __future__ import annotations

from importlib import metadata

__version__ = "0.3.0"


def get_version() -> str:
    """Return installed package version when available, else fallback."""
    try:
        return metadata.version("paginator")
    except Exception:
        return __version__
